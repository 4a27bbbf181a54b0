r"""@package diffgraph.exprs.node

Base of the expression node system.

The idea is to have a notion of an expression node which is 'self aware' and
can produce its own symbolic derivative, render itself, tell which operands
it is built from and rebuild itself from different operands. Composite
expressions are built bottom-up out of more basic nodes, and since nodes are
immutable, one node may be shared by any number of parents.

As a simple example, let's create \f$ \sin(x^2) \f$ and a few of its
derivatives:

~~~.py
f = Sin.compose(X.power(2))
print("f(3.14159) =", f(3.14159))
df = f.derivative()
print("f' =", df.description)
print("f'''(1) =", f.derive_nth(3)(1.0))
~~~

Each node provides the following capabilities:
    * evaluate() at a real point `x`
    * derivative() returning a new node
    * render() the canonical textual form, given the text of the variable
      slot (used to nest expressions via composition)
    * children() and label() for introspection and export
    * rebuild() a node of the same kind with different operands
    * as_constant(), structural_info() and local_rewrite() used by the
      optimizer in graph.optimize

The optimizer only uses these capabilities and never inspects node classes.
New operators can hence be added by subclassing Node without touching it.
"""

from abc import ABCMeta, abstractmethod
import numbers

import numpy as np

from ..numutils import right_riemann_sum
from ..utils import save_to_file, load_from_file
from .common import next_node_id
from .evaluators import LastValueCache


__all__ = [
    "Node",
    "CallableNode",
]


def _is_number(obj):
    r"""Return whether `obj` is a real scalar usable as a constant."""
    return isinstance(obj, numbers.Real) and not isinstance(obj, Node)


class Node(metaclass=ABCMeta):
    r"""Parent class for all expression nodes.

    Nodes are immutable after construction. "Modifying" a node always means
    creating a new one via rebuild() (or possibly_rebuild()).

    Two nodes are considered equal (and hash equal) if and only if their
    canonical #description strings are equal. The process-unique #node_id
    is for debugging and for exporting only.

    The methods a child has to override are:
        * _evaluate() computing the value from the (cached) operand values
        * derivative() returning the symbolic derivative
        * render() producing the canonical text
        * label() returning a short tag for graph exports
        * _rebuild() creating a node of the same kind with new operands

    Optionally, children may override as_constant(), structural_info() and
    local_rewrite() to take part in the optimization.
    """

    # Let numpy scalars defer to our reflected operators.
    __array_ufunc__ = None

    ## Whether render() is supported, i.e. #description can be computed.
    _renderable = True

    def __init__(self, *operands):
        r"""Base class init for expression nodes.

        @param *operands
            The direct operands of this node in the order in which children()
            should return them and in which _rebuild() expects them.
        """
        for op in operands:
            if not isinstance(op, Node):
                raise TypeError("Operands must be nodes, got %r." % (op,))
        self._operands = tuple(operands)
        self._node_id = next_node_id()
        self._cache = LastValueCache(self._evaluate)
        self._description = self.render("X") if self._renderable else None

    @property
    def node_id(self):
        r"""Process-unique integer id of this node."""
        return self._node_id

    @property
    def description(self):
        r"""Canonical textual form, computed once as ``render("X")``."""
        return self._description

    def __call__(self, x):
        r"""Evaluate the node at a point x (same as evaluate())."""
        return self.evaluate(x)

    def evaluate(self, x):
        r"""Evaluate the node at a point x.

        Evaluation uses IEEE double precision throughout. Operations like
        division by zero or the logarithm of negative numbers produce `inf`
        or `nan` values instead of raising.
        """
        with np.errstate(all='ignore'):
            return float(self.value_at(np.float64(x)))

    def value_at(self, x):
        r"""Cached evaluation without floating point error handling setup.

        This is what nodes call on their operands. `x` should be a
        `numpy.float64` and the call should happen within a suitable
        `numpy.errstate()` context, as set up by evaluate().
        """
        return self._cache(x)

    @abstractmethod
    def _evaluate(self, x):
        r"""Compute the value at `x` using value_at() of the operands."""
        pass

    @abstractmethod
    def derivative(self):
        r"""Return a new node representing the derivative of this node."""
        pass

    @abstractmethod
    def render(self, inner):
        r"""Return the canonical text with `inner` used for the variable."""
        pass

    @abstractmethod
    def label(self):
        r"""Short tag, like ``"Sin"``, ``"+"`` or ``"2.0 *"``."""
        pass

    def children(self):
        r"""List of the direct operands, in a fixed operator-specific order."""
        return list(self._operands)

    def rebuild(self, children):
        r"""Return a node of the same kind with its operands replaced.

        @param children
            Sequence of nodes with the same length and order as children().
        """
        children = list(children)
        if len(children) != len(self._operands):
            raise ValueError("Expected %d children, got %d."
                             % (len(self._operands), len(children)))
        for c in children:
            if not isinstance(c, Node):
                raise TypeError("Children must be nodes, got %r." % (c,))
        return self._rebuild(children)

    @abstractmethod
    def _rebuild(self, children):
        r"""Create the new node for rebuild() from validated children."""
        pass

    def possibly_rebuild(self, children):
        r"""Rebuild only if at least one child is a different object.

        The candidates are compared to the current children by identity, not
        by equality. If all of them are the very same objects, this node
        itself is returned, which preserves any sharing of this node.
        """
        children = list(children)
        current = self.children()
        if len(children) != len(current):
            raise ValueError("Expected %d children, got %d."
                             % (len(current), len(children)))
        if all(a is b for a, b in zip(current, children)):
            return self
        return self.rebuild(children)

    def as_constant(self):
        r"""Value of this node if it is constant, `None` otherwise."""
        return None

    def structural_info(self):
        r"""common.StructuralInfo describing this node, or `None`."""
        return None

    def local_rewrite(self):
        r"""Return an equivalent, simpler node or `None`."""
        return None

    def derive(self):
        r"""Return the next derivative (same as derivative())."""
        return self.derivative()

    def derive_nth(self, n):
        r"""Return the n'th derivative (the node itself for ``n=0``)."""
        if n < 0:
            raise ValueError("Only the 0th or higher derivatives exist.")
        f = self
        for _ in range(n):
            f = f.derivative()
        return f

    def derive_many(self, n):
        r"""Return the list ``[f, f', ..., f^(n)]`` of successive derivatives."""
        if n < 0:
            raise ValueError("Can only compute 0 or more derivatives.")
        result = [self]
        for _ in range(n):
            result.append(result[-1].derivative())
        return result

    def optimized(self, verbosity=0):
        r"""Return an optimized but equivalent version of this node.

        This is a shortcut for optimizing a graph.series.DerivativeSeries
        containing only this node.
        """
        from ..graph.series import DerivativeSeries
        return DerivativeSeries(self, 0).optimized(verbosity=verbosity)[0]

    def integrate(self, a, b, count):
        r"""Integrate numerically over ``[a, b]`` using a right Riemann sum.

        @param a,b
            Integration bounds.
        @param count
            Number of equal-width subintervals. Must be at least `1`.
        """
        with np.errstate(all='ignore'):
            return float(right_riemann_sum(self.value_at, a, b, count))

    def power(self, n):
        r"""Return the node for ``self ** n`` with integer `n`."""
        from .elementary import Power
        return Power(self, n)

    def compose(self, inner):
        r"""Return the composition ``self(inner(x))``."""
        from .elementary import Composition
        return Composition(self, inner)

    def __pos__(self):
        from .basics import UnaryPlus
        return UnaryPlus(self)

    def __neg__(self):
        from .basics import UnaryMinus
        return UnaryMinus(self)

    def __add__(self, other):
        from .basics import Sum, Constant
        if isinstance(other, Node):
            return Sum(self, other)
        if _is_number(other):
            # Keep the constant in front, which the rewrites rely on.
            return Sum(Constant(other), self)
        return NotImplemented

    def __radd__(self, other):
        from .basics import Sum, Constant
        if _is_number(other):
            return Sum(Constant(other), self)
        return NotImplemented

    def __sub__(self, other):
        from .basics import Difference, Constant
        if isinstance(other, Node):
            return Difference(self, other)
        if _is_number(other):
            return Difference(self, Constant(other))
        return NotImplemented

    def __rsub__(self, other):
        from .basics import Difference, Constant
        if _is_number(other):
            return Difference(Constant(other), self)
        return NotImplemented

    def __mul__(self, other):
        from .basics import Product, Scale
        if isinstance(other, Node):
            return Product(self, other)
        if _is_number(other):
            return Scale(other, self)
        return NotImplemented

    def __rmul__(self, other):
        from .basics import Scale
        if _is_number(other):
            return Scale(other, self)
        return NotImplemented

    def __truediv__(self, other):
        from .basics import Division, Constant
        if isinstance(other, Node):
            return Division(self, other)
        if _is_number(other):
            return Division(self, Constant(other))
        return NotImplemented

    def __rtruediv__(self, other):
        from .basics import ScalarDivision
        if _is_number(other):
            return ScalarDivision(other, self)
        return NotImplemented

    def __pow__(self, n):
        if isinstance(n, numbers.Integral):
            return self.power(n)
        return NotImplemented

    def __rpow__(self, base):
        from .elementary import Exponential
        if _is_number(base):
            return Exponential(base, self)
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return self.description == other.description

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self.description)

    def __repr__(self):
        return "<%s #%d %s>" % (type(self).__name__, self._node_id,
                                self.description)

    def __str__(self):
        return self.description

    def __getstate__(self):
        r"""Return a picklable state (the evaluation cache is dropped)."""
        state = self.__dict__.copy()
        state.pop('_cache', None)
        return state

    def __setstate__(self, state):
        r"""Restore a node from the given unpickled state."""
        self.__dict__.update(state)
        self._node_id = next_node_id()
        self._cache = LastValueCache(self._evaluate)

    def save(self, filename, overwrite=False, verbose=True):
        r"""Save the node (and all its sub-nodes) to disk.

        Args:
            filename: The file name to store the data in. An extension
                ``'.npy'`` will be added if not already there.
            overwrite: Whether to overwrite an existing file with the same
                name. If `False` (default) and such a file exists, a
                `RuntimeError` is raised.
            verbose: Whether to print when the file was written.
        """
        save_to_file(
            filename, self, overwrite=overwrite, verbose=verbose,
            showname="%s [%s]" % (self.description, type(self).__name__)
        )

    @classmethod
    def load(cls, filename):
        r"""Static function to load a node object from disk."""
        return load_from_file(filename)


class CallableNode(Node):
    r"""Node defined by two plain callables.

    Such a node can only be evaluated and differentiated. It has no textual
    form, no children and cannot take part in the optimization or be
    exported. Calling any of these unsupported capabilities raises a
    `NotImplementedError`.

    @b Examples

    \code
        step = CallableNode(lambda x: 1.0 if x > 0 else 0.0,
                            lambda: Value(0.0))
        step(2.0)               # 1.0
        step.derivative()(2.0)  # 0.0
    \endcode
    """

    _renderable = False

    def __init__(self, evaluate, derivative):
        r"""Init function.

        @param evaluate
            Callable taking a float and returning the value.
        @param derivative
            Callable without arguments returning the derivative as a node.
        """
        if not callable(evaluate) or not callable(derivative):
            raise TypeError("`evaluate` and `derivative` must be callable.")
        self._func = evaluate
        self._deriv = derivative
        super(CallableNode, self).__init__()

    def _evaluate(self, x):
        return np.float64(self._func(x))

    def derivative(self):
        return self._deriv()

    @staticmethod
    def _unsupported(what):
        raise NotImplementedError("%s is not defined for this node." % what)

    @property
    def description(self):
        return self._unsupported("Description")

    def render(self, inner):
        return self._unsupported("Rendering")

    def label(self):
        return self._unsupported("Label")

    def children(self):
        return self._unsupported("Children")

    def rebuild(self, children):
        return self._unsupported("Rebuilding")

    def _rebuild(self, children):
        return self._unsupported("Rebuilding")

    def __repr__(self):
        return "<%s #%d>" % (type(self).__name__, self._node_id)
