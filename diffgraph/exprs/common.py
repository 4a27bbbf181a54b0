r"""@package diffgraph.exprs.common

Utils used by multiple modules in diffgraph.exprs.
"""

from collections import namedtuple
import itertools


__all__ = [
    "StructuralInfo",
    "next_node_id",
    "with_ordinal_suffix",
    "is_variable_leaf",
]


## Source of process-unique ids for nodes and derivative series.
_ids = itertools.count(1)


def next_node_id():
    r"""Return a new process-unique integer id.

    The ids are only meant for debugging and for correlating exported graphs
    with the nodes they were created from. They never take part in equality
    comparisons.
    """
    return next(_ids)


## Operator tag and operands of a node with one or two operands.
##
## Rewrite rules use this to recognize patterns such as `a + (b + f)` without
## having to inspect node classes. Operands that are not known constants use
## `nan` in their `*_const` slot.
StructuralInfo = namedtuple(
    "StructuralInfo", ["op", "left", "left_const", "right", "right_const"]
)


def with_ordinal_suffix(n):
    r"""Return e.g. ``'1st'``, ``'2nd'``, ``'3rd'``, ``'4th'`` or ``'11th'`` for `n`."""
    if 10 <= n % 100 <= 20:
        return "%dth" % n
    return "%d%s" % (n, {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th"))


def is_variable_leaf(node):
    r"""Return whether `node` renders as the bare variable."""
    return node.description == "X"
