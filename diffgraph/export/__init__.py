r"""@package diffgraph.export

Exporting derivative series as Graphviz graphs and Matplotlib plots.

These only read the public surface of the nodes (evaluation, labels,
children, ids and descriptions) and never modify a series.
"""

from .dot import dot_source, export_dot
from .plotting import plot_series
