r"""@package diffgraph

Symbolic differentiation of functions of one real variable.

Expressions are built out of the nodes in the diffgraph.exprs package (the
variable, constants, arithmetic operators and a few elementary functions).
Each node knows its own symbolic derivative, so arbitrarily high derivatives
can be built. The diffgraph.graph package collects a function and its
derivatives in a series and optimizes the resulting node graphs by folding
constants, simplifying algebraically and sharing common sub-expressions.

The graphs and values of a series can be exported with the tools in the
diffgraph.export package.
"""
