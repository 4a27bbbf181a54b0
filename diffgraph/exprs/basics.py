r"""@package diffgraph.exprs.basics

Leaves and arithmetic operator nodes.

The rewrite rules implemented in the local_rewrite() methods only look at
the operands' as_constant() and structural_info(). They apply to specific
operand orders only, e.g. `a + (b + f)` is simplified but `(f + b) + a` is
not.
"""

import numpy as np

from .common import StructuralInfo
from .node import Node


__all__ = [
    "Variable",
    "X",
    "Constant",
    "Value",
    "UnaryPlus",
    "UnaryMinus",
    "Sum",
    "Difference",
    "Scale",
    "Product",
    "ScalarDivision",
    "Division",
]


_NAN = float('nan')


def _fdiv(a, b):
    r"""Divide two floats following IEEE rules (no ZeroDivisionError)."""
    with np.errstate(all='ignore'):
        return float(np.divide(a, b))


def _is_zero_const(info):
    r"""Whether the structural info belongs to the constant 0."""
    return info is not None and info.op == "a" and info.left_const == 0.0


class Variable(Node):
    r"""The variable `x`.

    Use the module level singleton #X instead of creating new instances.
    """

    def _evaluate(self, x):
        return x

    def derivative(self):
        return Constant(1.0)

    def render(self, inner):
        return inner

    def label(self):
        return "X"

    def _rebuild(self, children):
        return self

    def __reduce__(self):
        # Unpickle as the module singleton.
        return "X"


## The variable singleton.
X = Variable()


class Constant(Node):
    r"""Constant leaf \f$ f(x) = c \f$.

    The value can be accessed through the `value` property.
    """

    def __init__(self, value):
        r"""Init function.

        Args:
            value:  The constant value (converted to float).
        """
        self._value = float(value)
        super(Constant, self).__init__()

    @property
    def value(self):
        r"""The constant value this node represents."""
        return self._value

    def _evaluate(self, x):
        return np.float64(self._value)

    def derivative(self):
        return Constant(0.0)

    def render(self, inner):
        return repr(self._value)

    def label(self):
        return repr(self._value)

    def _rebuild(self, children):
        return self

    def as_constant(self):
        return self._value

    def structural_info(self):
        # Used throughout the rewrites to detect e.g. `a*f` vs. `f*g`.
        return StructuralInfo("a", self, self._value, self, self._value)

    def power_of_exp(self, exponent):
        r"""Return the exponential ``c ** exponent`` with this constant as base."""
        from .elementary import Exponential
        return Exponential(self._value, exponent)


def Value(value):
    r"""Create a constant node for the given value.

    Most operators accept plain numbers too, i.e. ``5.0 * Sin`` is the same
    as ``Value(5.0) * Sin``.
    """
    return Constant(value)


class UnaryPlus(Node):
    r"""The (useless but valid) expression `+f`."""

    def __init__(self, f):
        super(UnaryPlus, self).__init__(f)

    @property
    def f(self):
        r"""The operand."""
        return self._operands[0]

    def _evaluate(self, x):
        return self.f.value_at(x)

    def derivative(self):
        return UnaryPlus(self.f.derivative())

    def render(self, inner):
        return self.f.render(inner)

    def label(self):
        return "unary +"

    def _rebuild(self, children):
        return UnaryPlus(*children)

    def as_constant(self):
        return self.f.as_constant()

    def structural_info(self):
        return StructuralInfo("+f", self.f, _NAN, self.f, _NAN)

    def local_rewrite(self):
        # +f -> f
        return self.f


class UnaryMinus(Node):
    r"""Negation `-f`."""

    def __init__(self, f):
        super(UnaryMinus, self).__init__(f)

    @property
    def f(self):
        r"""The operand."""
        return self._operands[0]

    def _evaluate(self, x):
        return -self.f.value_at(x)

    def derivative(self):
        return UnaryMinus(self.f.derivative())

    def render(self, inner):
        return "-(%s)" % self.f.render(inner)

    def label(self):
        return "unary -"

    def _rebuild(self, children):
        return UnaryMinus(*children)

    def as_constant(self):
        c = self.f.as_constant()
        if c is not None:
            return -c
        return None

    def structural_info(self):
        return StructuralInfo("-f", self.f, _NAN, self.f, _NAN)

    def local_rewrite(self):
        # -(-f) -> f
        info = self.f.structural_info()
        if info is not None and info.op == "-f":
            return info.right
        return None


class _BinaryNode(Node):
    r"""Common base for operators with the two operands `f` and `g`."""

    def __init__(self, f, g):
        super(_BinaryNode, self).__init__(f, g)

    @property
    def f(self):
        r"""First (left) operand."""
        return self._operands[0]

    @property
    def g(self):
        r"""Second (right) operand."""
        return self._operands[1]

    def _rebuild(self, children):
        return type(self)(*children)


class Sum(_BinaryNode):
    r"""Sum `f + g`."""

    def _evaluate(self, x):
        return self.f.value_at(x) + self.g.value_at(x)

    def derivative(self):
        return Sum(self.f.derivative(), self.g.derivative())

    def render(self, inner):
        return "(%s) + (%s)" % (self.f.render(inner), self.g.render(inner))

    def label(self):
        return "+"

    def as_constant(self):
        left = self.f.as_constant()
        right = self.g.as_constant()
        if left is not None and right is not None:
            return left + right
        return None

    def structural_info(self):
        return StructuralInfo("f+g", self.f, _NAN, self.g, _NAN)

    def local_rewrite(self):
        left = self.f.structural_info()
        right = self.g.structural_info()
        # 0 + f -> f
        if _is_zero_const(left):
            return self.g
        # f + 0 -> f
        if _is_zero_const(right):
            return self.f
        if (left is not None and left.op == "a"
                and right is not None and right.op == "f+g"):
            # a + (b + f) -> (a+b) + f
            b = right.left.as_constant()
            if b is not None:
                return Sum(Constant(left.left_const + b), right.right)
            # a + (f + b) -> (a+b) + f
            b = right.right.as_constant()
            if b is not None:
                return Sum(Constant(left.left_const + b), right.left)
        return None


class Difference(_BinaryNode):
    r"""Difference `f - g`."""

    def _evaluate(self, x):
        return self.f.value_at(x) - self.g.value_at(x)

    def derivative(self):
        return Difference(self.f.derivative(), self.g.derivative())

    def render(self, inner):
        return "(%s) - (%s)" % (self.f.render(inner), self.g.render(inner))

    def label(self):
        return "-"

    def as_constant(self):
        left = self.f.as_constant()
        right = self.g.as_constant()
        if left is not None and right is not None:
            return left - right
        return None

    def structural_info(self):
        return StructuralInfo("f-g", self.f, _NAN, self.g, _NAN)

    def local_rewrite(self):
        left = self.f.structural_info()
        right = self.g.structural_info()
        # 0 - f -> -f
        if _is_zero_const(left):
            return UnaryMinus(self.g)
        # f - 0 -> f
        if _is_zero_const(right):
            return self.f
        # a - (b - f) -> (a-b) + f
        if (left is not None and left.op == "a"
                and right is not None and right.op == "f-g"):
            b = right.left.as_constant()
            if b is not None:
                return Sum(Constant(left.left_const - b), right.right)
        return None


class Scale(Node):
    r"""Multiplication `a * f` of a node by a scalar.

    This is the canonical form of any product with a known constant factor,
    which allows chained scalar multiplications to be folded.
    """

    def __init__(self, a, f):
        r"""Init function.

        Args:
            a:  Scalar factor.
            f:  Node to scale.
        """
        self._a = float(a)
        super(Scale, self).__init__(f)

    @property
    def a(self):
        r"""The scalar factor."""
        return self._a

    @property
    def f(self):
        r"""The scaled operand."""
        return self._operands[0]

    def _evaluate(self, x):
        return self._a * self.f.value_at(x)

    def derivative(self):
        return Scale(self._a, self.f.derivative())

    def render(self, inner):
        return "(%r) * (%s)" % (self._a, self.f.render(inner))

    def label(self):
        return "%r *" % self._a

    def _rebuild(self, children):
        return Scale(self._a, *children)

    def as_constant(self):
        c = self.f.as_constant()
        # 0 * f -> 0 and a * 0 -> 0
        if self._a == 0.0 or c == 0.0:
            return 0.0
        if c is not None:
            return self._a * c
        return None

    def structural_info(self):
        return StructuralInfo("a*f", Constant(self._a), self._a, self.f, _NAN)

    def local_rewrite(self):
        # 0 * f -> 0 (the factor may come from `f / inf` or an underflow)
        if self._a == 0.0:
            return Constant(0.0)
        # 1 * f -> f
        if self._a == 1.0:
            return self.f
        # a * (b * f) -> (a*b) * f
        info = self.f.structural_info()
        if info is not None and info.op == "a*f":
            return Scale(self._a * info.left_const, info.right)
        return None


class Product(_BinaryNode):
    r"""Product `f * g`."""

    def _evaluate(self, x):
        return self.f.value_at(x) * self.g.value_at(x)

    def derivative(self):
        f, g = self.f, self.g
        return Sum(Product(f.derivative(), g), Product(f, g.derivative()))

    def render(self, inner):
        return "(%s) * (%s)" % (self.f.render(inner), self.g.render(inner))

    def label(self):
        return "*"

    def as_constant(self):
        left = self.f.as_constant()
        right = self.g.as_constant()
        if left == 0.0 or right == 0.0:
            return 0.0
        if left is not None and right is not None:
            return left * right
        return None

    def structural_info(self):
        left = self.f.structural_info()
        right = self.g.structural_info()
        if left is not None and left.op == "a":
            return StructuralInfo("a*f", Constant(left.left_const),
                                  left.left_const, self.g, _NAN)
        if right is not None and right.op == "a":
            return StructuralInfo("a*f", Constant(right.left_const),
                                  right.left_const, self.f, _NAN)
        return StructuralInfo("f*g", self.f, _NAN, self.g, _NAN)

    def local_rewrite(self):
        # a * f and f * a -> canonical scalar multiplication
        left = self.f.structural_info()
        if left is not None and left.op == "a":
            return Scale(left.left_const, self.g)
        right = self.g.structural_info()
        if right is not None and right.op == "a":
            return Scale(right.left_const, self.f)
        return None


class ScalarDivision(Node):
    r"""Division `a / f` of a scalar by a node."""

    def __init__(self, a, f):
        r"""Init function.

        Args:
            a:  Scalar numerator.
            f:  Node in the denominator.
        """
        self._a = float(a)
        super(ScalarDivision, self).__init__(f)

    @property
    def a(self):
        r"""The scalar numerator."""
        return self._a

    @property
    def f(self):
        r"""The denominator."""
        return self._operands[0]

    def _evaluate(self, x):
        return np.divide(self._a, self.f.value_at(x))

    def derivative(self):
        # Chain rule through the reciprocal: (a/f)' = (-a / (f*f)) * f'
        f = self.f
        return Product(ScalarDivision(-self._a, Product(f, f)), f.derivative())

    def render(self, inner):
        return "(%r) / (%s)" % (self._a, self.f.render(inner))

    def label(self):
        return "%r /" % self._a

    def _rebuild(self, children):
        return ScalarDivision(self._a, *children)

    def as_constant(self):
        # 0 / f -> 0
        if self._a == 0.0:
            return 0.0
        c = self.f.as_constant()
        if c is not None:
            return _fdiv(self._a, c)
        return None

    def structural_info(self):
        return StructuralInfo("a/f", Constant(self._a), self._a, self.f, _NAN)


class Division(_BinaryNode):
    r"""Quotient `f / g`."""

    def _evaluate(self, x):
        return np.divide(self.f.value_at(x), self.g.value_at(x))

    def derivative(self):
        f, g = self.f, self.g
        return Division(
            Difference(Product(f.derivative(), g), Product(f, g.derivative())),
            Product(g, g)
        )

    def render(self, inner):
        return "(%s) / (%s)" % (self.f.render(inner), self.g.render(inner))

    def label(self):
        return "/"

    def as_constant(self):
        left = self.f.as_constant()
        # 0 / g -> 0
        if left == 0.0:
            return 0.0
        right = self.g.as_constant()
        if left is not None and right is not None:
            return _fdiv(left, right)
        return None

    def structural_info(self):
        return StructuralInfo("f/g", self.f, _NAN, self.g, _NAN)

    def local_rewrite(self):
        # f / a -> (1/a) * f
        right = self.g.structural_info()
        if right is not None and right.op == "a":
            return Scale(_fdiv(1.0, right.left_const), self.f)
        return None
