r"""@package diffgraph.exprs.elementary

Powers, exponentials, elementary functions of the variable and composition.

The functions #Log, #Sin and #Cos are singletons acting on the variable
only. To apply them to another expression, compose them:

~~~.py
f = Sin.compose(X.power(2))     # sin(x^2)
g = Log.compose(1.0 + X)        # log(1 + x)
~~~

Their derivatives refer to each other (e.g. the derivative of #Sin is #Cos,
whose derivative is `-Sin`). This is resolved at call time, so the
singletons can simply be created at import.
"""

import numbers

import numpy as np

from .common import is_variable_leaf
from .node import Node
from .basics import X, Constant, UnaryMinus, Scale, Product, ScalarDivision


__all__ = [
    "Power",
    "Exponential",
    "Logarithm",
    "Sine",
    "Cosine",
    "Log",
    "Sin",
    "Cos",
    "Composition",
]


def _fpow(a, b):
    r"""Raise `a` to the power `b` following IEEE rules (never raises)."""
    with np.errstate(all='ignore'):
        return float(np.power(np.float64(a), np.float64(b)))


class Power(Node):
    r"""Integer power `f ** n`.

    Negative and zero exponents are allowed. As for the scalar power
    function, `f ** 0` evaluates to `1` (even where `f` is zero).
    """

    def __init__(self, f, n):
        r"""Init function.

        Args:
            f:  Base expression.
            n:  Integer exponent.
        """
        if not isinstance(n, numbers.Integral):
            raise TypeError("Exponent must be an integer, got %r." % (n,))
        self._n = int(n)
        super(Power, self).__init__(f)

    @property
    def n(self):
        r"""The integer exponent."""
        return self._n

    @property
    def f(self):
        r"""The base."""
        return self._operands[0]

    def _evaluate(self, x):
        return np.power(self.f.value_at(x), float(self._n))

    def derivative(self):
        n, f = self._n, self.f
        return Product(Scale(n, Power(f, n-1)), f.derivative())

    def render(self, inner):
        return "(%s) ** (%r)" % (self.f.render(inner), float(self._n))

    def label(self):
        return "** %d" % self._n

    def _rebuild(self, children):
        return Power(children[0], self._n)

    def as_constant(self):
        c = self.f.as_constant()
        if c is not None:
            return _fpow(c, self._n)
        if self._n == 0:
            return 1.0
        return None

    def local_rewrite(self):
        if self._n == 1:
            return self.f
        if self._n == 2:
            return Product(self.f, self.f)
        return None


class Exponential(Node):
    r"""Exponential `a ** f` with a scalar base."""

    def __init__(self, a, f):
        r"""Init function.

        Args:
            a:  Scalar base.
            f:  Exponent expression.
        """
        self._a = float(a)
        super(Exponential, self).__init__(f)

    @property
    def a(self):
        r"""The scalar base."""
        return self._a

    @property
    def f(self):
        r"""The exponent."""
        return self._operands[0]

    def _evaluate(self, x):
        return np.power(self._a, self.f.value_at(x))

    def derivative(self):
        f = self.f
        return Product(
            Product(Exponential(self._a, f), Composition(Log, Constant(self._a))),
            f.derivative()
        )

    def render(self, inner):
        return "(%r) ** (%s)" % (self._a, self.f.render(inner))

    def label(self):
        return "%r **" % self._a

    def _rebuild(self, children):
        return Exponential(self._a, children[0])

    def as_constant(self):
        if self._a == 0.0:
            return 0.0
        if self._a == 1.0:
            return 1.0
        c = self.f.as_constant()
        if c is not None:
            return _fpow(self._a, c)
        return None


class _VariableFunction(Node):
    r"""Base for named functions of the variable, like `Sin(X)`.

    The only child is the variable #X. Rebuilding accepts only the variable
    and returns the node itself.
    """

    ## Name used for rendering and as label.
    name = None

    def __init__(self):
        super(_VariableFunction, self).__init__(X)

    def _evaluate(self, x):
        return self._func(self._operands[0].value_at(x))

    def _func(self, x):
        raise NotImplementedError

    def render(self, inner):
        return "%s(%s)" % (self.name, self._operands[0].render(inner))

    def label(self):
        return self.name

    def _rebuild(self, children):
        if not is_variable_leaf(children[0]):
            raise ValueError("%s can only act on the variable. Use compose() "
                             "to apply it to other expressions." % self.name)
        return self

    def __reduce__(self):
        # Unpickle as the module singleton.
        return self.name


class Logarithm(_VariableFunction):
    r"""Natural logarithm of the variable. Use the singleton #Log."""
    name = "Log"

    def _func(self, x):
        return np.log(x)

    def derivative(self):
        return ScalarDivision(1.0, X)


class Sine(_VariableFunction):
    r"""Sine of the variable. Use the singleton #Sin."""
    name = "Sin"

    def _func(self, x):
        return np.sin(x)

    def derivative(self):
        return Cos


class Cosine(_VariableFunction):
    r"""Cosine of the variable. Use the singleton #Cos."""
    name = "Cos"

    def _func(self, x):
        return np.cos(x)

    def derivative(self):
        return UnaryMinus(Sin)


## Natural logarithm singleton.
Log = Logarithm()
## Sine singleton.
Sin = Sine()
## Cosine singleton.
Cos = Cosine()


class Composition(Node):
    r"""Nesting `f(g(x))` of two expressions."""

    def __init__(self, outer, inner):
        r"""Init function.

        Args:
            outer:  The function `f` applied last.
            inner:  The function `g` applied first.
        """
        super(Composition, self).__init__(outer, inner)

    @property
    def outer(self):
        r"""The function applied last."""
        return self._operands[0]

    @property
    def inner(self):
        r"""The function applied first."""
        return self._operands[1]

    def _evaluate(self, x):
        return self.outer.value_at(self.inner.value_at(x))

    def derivative(self):
        # chain rule
        outer, inner = self.outer, self.inner
        return Product(Composition(outer.derivative(), inner),
                       inner.derivative())

    def render(self, inner):
        return self.outer.render(self.inner.render(inner))

    def label(self):
        return "of"

    def _rebuild(self, children):
        return Composition(*children)

    def as_constant(self):
        # constant outer function, regardless of the inner one
        c = self.outer.as_constant()
        if c is not None:
            return c
        # constant argument
        c = self.inner.as_constant()
        if c is not None:
            return self.outer.evaluate(c)
        return None
