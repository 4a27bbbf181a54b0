r"""@package diffgraph.exprs.evaluators

Last-value memo used by node.Node to avoid re-evaluating shared sub-trees.
"""

import numpy as np


__all__ = [
    "LastValueCache",
]


class LastValueCache(object):
    r"""Remember the result of the most recent evaluation.

    A node shared by several parents (or by several derivatives of a series)
    is typically evaluated many times at the same point in a row, e.g. while
    sampling all derivatives of a series for a plot. This class intercepts
    the evaluation and returns the stored value if `x` has not changed since
    the previous call. Any other `x` triggers a new computation which
    replaces the single stored pair.

    This is a one-entry memo and not a general cache: only the very last
    point is remembered. Since `nan` never compares equal to anything,
    repeated evaluation at `nan` is always recomputed.
    """

    __slots__ = ("_func", "_x", "_result")

    def __init__(self, func):
        r"""Create a cache for the given evaluation function.

        @param func
            Callable taking a `numpy.float64` and returning the value.
        """
        self._func = func
        self._x = np.nan
        self._result = np.nan

    def __call__(self, x):
        r"""Evaluate at `x`, reusing the previous result if possible."""
        if x == self._x:
            return self._result
        result = self._func(x)
        self._x = x
        self._result = result
        return result
