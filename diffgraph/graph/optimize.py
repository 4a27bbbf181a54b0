r"""@package diffgraph.graph.optimize

Optimizer turning a list of expression trees into a smaller, shared DAG.

The optimization works on all derivatives of a series at once, so that
common sub-expressions can be shared across different derivative orders.
It consists of three phases run in this order:

    1. fold_constants(): Every sub-tree whose value does not depend on the
       variable is replaced by a single constant leaf.
    2. rewrite_to_fixpoint(): The local algebraic rewrites offered by the
       nodes themselves (Node.local_rewrite()) are applied bottom-up in full
       passes until a pass changes nothing.
    3. deduplicate(): Sub-expressions with equal descriptions are replaced by
       one shared node instance.

Only the capabilities of node.Node are used, never the node classes, so new
operators take part in the optimization by implementing the respective
methods.

Each pass rebuilds nodes only if at least one child actually changed (see
Node.possibly_rebuild()). Untouched sub-trees are hence kept as they are,
which is what lets the fixpoint iteration detect convergence by identity.
"""

from ..utils import timethis
from ..exprs.basics import Constant


__all__ = [
    "optimize_nodes",
    "fold_constants",
    "rewrite_pass",
    "rewrite_to_fixpoint",
    "deduplicate",
    "count_nodes",
    "count_tree_nodes",
]


def _bottom_up(nodes, transform):
    r"""Rebuild each tree bottom-up and apply `transform` to every node.

    Children are processed first and the node is rebuilt if any of them
    changed. The result of `transform` on the (possibly rebuilt) node then
    takes its place. Nodes shared within or across the trees are processed
    only once per call.
    """
    done = dict()
    def _traverse(node):
        key = id(node)
        if key in done:
            return done[key][1]
        children = [_traverse(c) for c in node.children()]
        result = transform(node.possibly_rebuild(children))
        # Keep `node` alive so that its id cannot be reused during the pass.
        done[key] = (node, result)
        return result
    return [_traverse(n) for n in nodes]


def _fold(node):
    c = node.as_constant()
    if c is not None and node.children():
        return Constant(c)
    return node


def fold_constants(nodes):
    r"""Phase 1: replace all constant sub-trees by constant leaves.

    Constant leaves themselves are kept, so that folding an already folded
    tree returns the very same nodes.
    """
    return _bottom_up(nodes, _fold)


def _rewrite(node):
    replacement = node.local_rewrite()
    return node if replacement is None else replacement


def rewrite_pass(nodes):
    r"""Apply one bottom-up pass of local rewrites to all trees.

    A replacement proposed by a node is not rewritten again in the same pass.
    """
    return _bottom_up(nodes, _rewrite)


def rewrite_to_fixpoint(nodes, max_passes=1000, verbosity=0):
    r"""Phase 2: repeat rewrite_pass() until nothing changes anymore.

    @param nodes
        List of root nodes.
    @param max_passes
        Maximum number of passes. A `RuntimeError` is raised if the rewrites
        did not converge within this many passes.
    @param verbosity
        If `> 1`, print the number of passes needed.
    """
    nodes = list(nodes)
    for i in range(max_passes):
        new_nodes = rewrite_pass(nodes)
        if all(a is b for a, b in zip(nodes, new_nodes)):
            if verbosity > 1:
                print("  rewrites converged after %d passes" % (i + 1))
            return new_nodes
        nodes = new_nodes
    raise RuntimeError("Rewrites did not converge within %d passes."
                       % max_passes)


def deduplicate(nodes):
    r"""Phase 3: share all sub-expressions with equal descriptions.

    A single mapping from description to node is used for all trees. The
    node stored for a description is the one that ends up in the result,
    i.e. after its own children have been deduplicated. Any later occurrence
    of the same description, anywhere in any of the trees, is replaced by
    that instance without looking at its children.
    """
    seen = dict()
    def _traverse(node):
        desc = node.description
        if desc in seen:
            return seen[desc]
        children = [_traverse(c) for c in node.children()]
        result = node.possibly_rebuild(children)
        # A descendant may already have claimed the description (e.g. `+f`
        # renders exactly as `f`), in which case that one wins.
        return seen.setdefault(desc, result)
    return [_traverse(n) for n in nodes]


def count_nodes(nodes):
    r"""Number of distinct node instances reachable from the given roots."""
    visited = set()
    stack = list(nodes)
    while stack:
        node = stack.pop()
        if id(node) in visited:
            continue
        visited.add(id(node))
        stack.extend(node.children())
    return len(visited)


def count_tree_nodes(nodes):
    r"""Number of nodes counted with multiplicity, i.e. as if no sharing existed."""
    sizes = dict()
    def _size(node):
        key = id(node)
        if key not in sizes:
            sizes[key] = (node, 1 + sum(_size(c) for c in node.children()))
        return sizes[key][1]
    return sum(_size(n) for n in nodes)


def optimize_nodes(nodes, max_passes=1000, verbosity=0):
    r"""Run all three optimization phases on a list of root nodes.

    The input nodes are not modified. The returned list contains the
    optimized roots in the same order. Optimization is deterministic, and
    optimizing the result again returns the very same nodes.

    @param nodes
        List of root nodes, e.g. the derivatives of a series.
    @param max_passes
        Maximum number of rewrite passes (see rewrite_to_fixpoint()).
    @param verbosity
        If `> 0`, print node counts after each phase and the elapsed time.
    """
    nodes = list(nodes)
    def _report(phase):
        if verbosity > 0:
            print("  %s: %d nodes (%d as trees)"
                  % (phase, count_nodes(nodes), count_tree_nodes(nodes)))
    with timethis("Optimizing %d expressions..." % len(nodes),
                  silent=verbosity < 1):
        _report("input")
        nodes = fold_constants(nodes)
        _report("constants folded")
        nodes = rewrite_to_fixpoint(nodes, max_passes=max_passes,
                                    verbosity=verbosity)
        _report("rewritten")
        nodes = deduplicate(nodes)
        _report("deduplicated")
    return nodes
