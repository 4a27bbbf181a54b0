r"""@package diffgraph.exprs

Expression node system for symbolically differentiating functions of one
variable.

Each node represents either a leaf (the variable #X or a constant) or an
operator combining other nodes (like \f$ f(x) + g(x) \f$ or
\f$ \sin(g(x)) \f$). By implementing the derivative of each operator in terms
of the operands and their derivatives, arbitrarily high derivatives of any
expression can be built symbolically.

Nodes are immutable and may be shared by any number of parents, so an
expression is in general a directed acyclic graph rather than a tree. The
optimizer in diffgraph.graph.optimize makes use of this to deduplicate
common sub-expressions.

@b Examples

\code
    from diffgraph.exprs import X, Sin, Value
    f = Sin.compose(X.power(2))
    f(3.14159)                  # -0.43028616647684903
    f.derive_nth(2).description
    (Value(2.0).power_of_exp(Sin)).derivative()(0.0)   # log(2)
\endcode
"""

from .node import Node, CallableNode
from .basics import X, Value, Variable, Constant
from .basics import UnaryPlus, UnaryMinus, Sum, Difference
from .basics import Scale, Product, ScalarDivision, Division
from .elementary import Power, Exponential, Composition
from .elementary import Log, Sin, Cos, Logarithm, Sine, Cosine
from .common import StructuralInfo
