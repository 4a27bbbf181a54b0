r"""@package diffgraph.graph

Derivative series and the optimizer turning them into shared DAGs.
"""

from .series import DerivativeSeries
from .optimize import optimize_nodes, count_nodes, count_tree_nodes
