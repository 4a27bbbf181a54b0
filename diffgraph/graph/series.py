r"""@package diffgraph.graph.series

Series of successive derivatives of one expression.

A DerivativeSeries holds the list \f$ [f, f', f'', \ldots, f^{(n)}] \f$. The
difference to a plain list of nodes is that the series can be optimized as a
whole (see optimized()), which shares common sub-expressions across all the
derivatives.

@b Examples

\code
    series = DerivativeSeries(Sin.power(5), 3)
    series[0]           # the original function
    series[2]           # its second derivative
    opt = series.optimized()
    opt[2](0.5)         # evaluate the optimized second derivative
\endcode
"""

from ..utils import save_to_file, load_from_file
from ..exprs.common import next_node_id, with_ordinal_suffix
from .optimize import optimize_nodes


__all__ = [
    "DerivativeSeries",
]


class DerivativeSeries(object):
    r"""An expression and a number of its successive derivatives.

    The series is immutable: optimizing returns a new series object wrapping
    a new list of nodes.
    """

    def __init__(self, root, derivatives):
        r"""Create the series of `root` and its first `derivatives` derivatives.

        Args:
            root: The original expression (index `0`).
            derivatives: Number of derivatives to compute. Must not be
                negative.
        """
        if derivatives < 0:
            raise ValueError("Can only compute 0 or more derivatives.")
        self._nodes = tuple(root.derive_many(derivatives))
        self._node_id = next_node_id()

    @classmethod
    def from_nodes(cls, nodes):
        r"""Create a series from an existing list of nodes.

        The nodes are taken to be the original function and its successive
        derivatives, in this order. This is not checked.
        """
        nodes = tuple(nodes)
        if not nodes:
            raise ValueError("A series needs at least the original function.")
        obj = cls.__new__(cls)
        obj._nodes = nodes
        obj._node_id = next_node_id()
        return obj

    @property
    def node_id(self):
        r"""Process-unique integer id of this series."""
        return self._node_id

    @property
    def nodes(self):
        r"""Root nodes, one per derivative order (as tuple)."""
        return self._nodes

    @property
    def order(self):
        r"""Number of derivatives contained in the series."""
        return len(self._nodes) - 1

    def derivative(self, k):
        r"""Return the k'th derivative (`k=0` is the original function)."""
        if k < 0:
            raise ValueError("Only the 0th or higher derivatives exist.")
        if k > self.order:
            raise IndexError("Series contains only %d derivatives."
                             % self.order)
        return self._nodes[k]

    def __getitem__(self, k):
        return self._nodes[k]

    def __len__(self):
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    def optimized(self, max_passes=1000, verbosity=0):
        r"""Return a new series with equivalent but optimized derivatives.

        See graph.optimize.optimize_nodes() for details. The process is
        deterministic (the same input is always optimized into the same
        output) and repeats the rewrite phase until it stops changing
        anything.
        """
        return DerivativeSeries.from_nodes(
            optimize_nodes(self._nodes, max_passes=max_passes,
                           verbosity=verbosity)
        )

    def __eq__(self, other):
        if not isinstance(other, DerivativeSeries):
            return NotImplemented
        return self._nodes == other._nodes

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._nodes)

    def __repr__(self):
        return ("<DerivativeSeries #%d of %s and its %d derivatives>"
                % (self._node_id, self._nodes[0].description, self.order))

    def describe(self):
        r"""Return a multi-line text listing all derivatives."""
        lines = []
        for k, node in enumerate(self._nodes):
            name = "original" if k == 0 else with_ordinal_suffix(k)
            lines.append("%s: %s" % (name, node.description))
        return "\n".join(lines)

    def __setstate__(self, state):
        r"""Restore a series from the given unpickled state."""
        self.__dict__.update(state)
        self._node_id = next_node_id()

    def save(self, filename, overwrite=False, verbose=True):
        r"""Save the series (including all nodes) to disk.

        See node.Node.save() for the meaning of the arguments.
        """
        save_to_file(filename, self, overwrite=overwrite, verbose=verbose,
                     showname=repr(self))

    @classmethod
    def load(cls, filename):
        r"""Static function to load a series from disk."""
        return load_from_file(filename)
