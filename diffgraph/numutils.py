r"""@package diffgraph.numutils

Miscellaneous numerical utilities and helpers.


@b Examples

```
    >>> binomial(5, 3)
    10
    >>> central_difference(lambda x: x**3, 2.0, n=2)    # approx. 12
```
"""

import numpy as np
import sympy as sp


__all__ = [
    "binomial",
    "binomial_coeffs",
    "central_difference",
    "right_riemann_sum",
]


def binomial(n, k):
    r"""Compute the binomial coefficient n choose k."""
    return int(sp.binomial(n, k))


def binomial_coeffs(n):
    r"""Compute all binomial coefficients n choose k for 0 <= k <= n.

    The result is a list of integers
    \f[
        {n \choose 0}, {n \choose 1}, \ldots, {n \choose n}.
    \f]
    """
    return _BinomialCoeffs.all_coeffs(n)


class _BinomialCoeffs():
    r"""Helper class to simply cache the coefficient lists.

    This is used by binomial_coeffs() to re-use once computed lists.
    """

    __binomial_coeffs = []

    @classmethod
    def all_coeffs(cls, n):
        r"""Generate and cache the results for binomial_coeffs()."""
        while len(cls.__binomial_coeffs) <= n:
            nn = len(cls.__binomial_coeffs)
            coeffs = [binomial(nn, k) for k in range(nn+1)]
            cls.__binomial_coeffs.append(coeffs)
        return cls.__binomial_coeffs[n]


def central_difference(f, x, n=1, h=None):
    r"""Estimate the n'th derivative of `f` at `x` by central differences.

    This computes
    \f[
        f^{(n)}(x) \approx h^{-n} \sum_{k=0}^n (-1)^k {n \choose k}
            f\big(x + (n/2 - k) h\big),
    \f]
    which has an error of order \f$ h^2 \f$.

    @param f
        Callable to differentiate.
    @param x
        Point at which to estimate the derivative.
    @param n
        Derivative order. Must be positive.
    @param h
        Step size. By default, a step roughly balancing truncation and
        round-off errors for double precision is chosen.
    """
    if n < 1:
        raise ValueError("Derivative order must be at least 1.")
    if h is None:
        h = np.finfo(float).eps**(1.0/(n+2)) * max(1.0, abs(x))
    coeffs = binomial_coeffs(n)
    terms = [(-1)**k * coeffs[k] * f(x + (0.5*n - k) * h)
             for k in range(n+1)]
    return np.sum(terms) / h**n


def right_riemann_sum(f, a, b, count):
    r"""Approximate the integral of `f` over ``[a, b]`` by a right Riemann sum.

    The interval is split into `count` subintervals of equal width and `f`
    is evaluated at the right endpoint of each of them.

    @param f
        Callable to integrate.
    @param a,b
        Integration bounds.
    @param count
        Number of subintervals. Must be at least `1`.
    """
    if count < 1:
        raise ValueError("Number of points (count) must be at least 1.")
    width = (b - a) / count
    xs = a + width * np.arange(1, count+1)
    return np.sum([f(x) for x in xs]) * width
