r"""@package diffgraph.export.dot

Export the node graphs of a derivative series in Graphviz `dot` format.

For a series with derivatives up to order `n`, export_dot() writes `n+1`
files `<basename>-<k>.dot`, where file `k` contains the combined graph of
the original function and its derivatives up to order `k`. Each derivative
root is drawn as a red box linking to the SVG of its own file, so that the
rendered SVGs can be navigated in a browser. Nodes appear once per
instance: after optimization, shared sub-expressions are visible as nodes
with several parents.

The files are then converted to SVG by calling the `dot` executable, which
must be installed separately.
"""

import subprocess
import os.path as op

from ..utils import check_basename
from ..exprs.common import with_ordinal_suffix


__all__ = [
    "dot_source",
    "export_dot",
]


def _quote(text):
    return '"%s"' % str(text).replace('"', '\\"')


def _derivative_name(k):
    return "original function" if k == 0 else "%s derivative" % with_ordinal_suffix(k)


class _GraphCollector():
    r"""Collect nodes and edges of several roots for one graph.

    Each node instance is recorded once (keyed by its id) together with the
    number of nodes below it, counted with multiplicity.
    """

    def __init__(self):
        self.nodes = dict()
        self.edges = dict()
        self.duplicate_counts = dict()

    def add(self, node):
        key = node.node_id
        if key in self.duplicate_counts:
            return self.duplicate_counts[key]
        self.nodes[key] = node
        count = 0
        for child in node.children():
            self.edges[(key, child.node_id)] = None
            count += 1 + self.add(child)
        self.duplicate_counts[key] = count
        return count


def _unique_count(root):
    visited = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if node.node_id in visited:
            continue
        visited.add(node.node_id)
        stack.extend(node.children())
    return len(visited)


def dot_source(series, k, basename="graph"):
    r"""Return the `dot` text of the graph of derivatives `0` to `k`.

    @param series
        The derivative series to export.
    @param k
        Highest derivative order included in the graph.
    @param basename
        Base name used for the links of the root boxes (which point to
        ``'<basename>-<j>.svg'``).
    """
    if not 0 <= k <= series.order:
        raise IndexError("Series has no derivative of order %s." % k)
    roots = [series[j] for j in range(k+1)]
    collector = _GraphCollector()
    for root in roots:
        collector.add(root)
    description = roots[0].description
    lines = [
        "digraph {",
        "graph [",
        "layout = dot",
        "tooltip = %s" % _quote(
            "Red nodes are clickable and \\n tooltips contain additional "
            "information."
        ),
        "]",
        "node [",
        "style = filled",
        "]",
    ]
    for j, root in enumerate(roots):
        root_id = root.node_id
        lines += [
            "function%d [" % j,
            "label = %s" % _quote("%s \\n %s" % (description, _derivative_name(j))),
            "tooltip = %s" % _quote(
                "%s%s \\n contains %d duplicate subfunctions \\n contains %d "
                "unique subfunctions \\n (and is clickable)"
                % (_derivative_name(j), "" if j == 0 else " function",
                   collector.duplicate_counts[root_id] + 1,
                   _unique_count(root))
            ),
            "URL = %s" % _quote("%s-%d.svg" % (op.basename(basename), j)),
            "color = red",
            'style = "rounded,filled"',
            "shape = box",
            "]",
            "function%d -> f%d" % (j, root_id),
        ]
    for key, node in collector.nodes.items():
        lines += [
            "f%d [" % key,
            "label = %s" % _quote(node.label()),
            "tooltip = %s" % _quote(
                "Function ID=%d \\n contains %d duplicate subfunctions"
                % (key, collector.duplicate_counts[key])
            ),
            "color = %s" % ("lightblue" if node.children() else "lightgreen"),
            "]",
        ]
    for parent, child in collector.edges:
        lines += [
            "f%d -> f%d [" % (parent, child),
            "tooltip = %s" % _quote(
                "Function ID=%d depends on function ID=%d" % (parent, child)
            ),
            "]",
        ]
    lines.append("}")
    return "\n".join(lines) + "\n"


def export_dot(series, basename, render=True, verbose=True):
    r"""Write the graphs of a series to `.dot` files and convert them to SVG.

    One file ``'<basename>-<k>.dot'`` is written for each derivative order
    `k` of the series, containing the graphs of all derivatives up to order
    `k` (see dot_source()).

    @param series
        The derivative series to export.
    @param basename
        File name without extension. May contain a directory part, which
        must exist.
    @param render
        Whether to call the `dot` executable to create the SVG files. If
        `True` (default) and `dot` fails, a `subprocess.CalledProcessError`
        is raised.
    @param verbose
        Whether to print the names of the written files.

    @return List of the written file names (the `.dot` files and, if
        rendered, the `.svg` files).
    """
    basename = check_basename(basename)
    written = []
    dot_files = []
    for k in range(len(series)):
        fname = "%s-%d.dot" % (basename, k)
        with open(fname, "w") as f:
            f.write(dot_source(series, k, basename=basename))
        dot_files.append(fname)
    written.extend(dot_files)
    if render:
        for fname in dot_files:
            svg = op.splitext(fname)[0] + ".svg"
            subprocess.check_call(["dot", "-Tsvg", fname, "-o", svg])
            written.append(svg)
    if verbose:
        print("Graphs exported to: %s-*.%s"
              % (basename, "svg" if render else "dot"))
    return written
