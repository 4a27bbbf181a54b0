#!/usr/bin/env python3

import unittest
import sys

import numpy as np
from mpmath import mp

from testutils import DiffgraphTestCase
from .numutils import binomial, binomial_coeffs
from .numutils import central_difference, right_riemann_sum


class TestBinomial(DiffgraphTestCase):
    def test_binomial(self):
        self.assertEqual(binomial(5, 3), 10)
        self.assertEqual(binomial(5, 0), 1)
        self.assertEqual(binomial(30, 15), 155117520)

    def test_coeffs(self):
        self.assertEqual(binomial_coeffs(0), [1])
        self.assertEqual(binomial_coeffs(4), [1, 4, 6, 4, 1])
        # cached lists are reused
        self.assertIs(binomial_coeffs(4), binomial_coeffs(4))
        self.assertEqual(binomial_coeffs(2), [1, 2, 1])


class TestCentralDifference(DiffgraphTestCase):
    def test_derivatives(self):
        for x in np.linspace(-1, 2, 5):
            self.assertAlmostEqual(central_difference(np.sin, x), np.cos(x),
                                   places=8)
            self.assertAlmostEqual(central_difference(np.sin, x, n=2),
                                   -np.sin(x), places=5)
            self.assertAlmostEqual(
                central_difference(lambda t: t**3, x, n=3), 6.0, places=3
            )

    def test_compare_to_mpmath(self):
        f = lambda t: np.exp(-t**2)
        fmp = lambda t: mp.exp(-t**2)
        for x in (0.2, 0.9):
            self.assertAlmostEqual(central_difference(f, x),
                                   float(mp.diff(fmp, x)), places=8)

    def test_invalid_order(self):
        with self.assertRaises(ValueError):
            central_difference(np.sin, 0.0, n=0)


class TestRiemannSum(DiffgraphTestCase):
    def test_constant(self):
        self.assertAlmostEqual(right_riemann_sum(lambda x: 2.0, 0, 3, 10), 6.0)

    def test_right_endpoints(self):
        # f(x) = x on [0, 1] with 2 points: (0.5 + 1.0) * 0.5
        self.assertAlmostEqual(right_riemann_sum(lambda x: x, 0, 1, 2), 0.75)
        self.assertAlmostEqual(right_riemann_sum(lambda x: x, 0, 1, 1), 1.0)

    def test_convergence(self):
        val = right_riemann_sum(np.sin, 0, np.pi, 10000)
        self.assertAlmostEqual(val, 2.0, places=6)

    def test_invalid_count(self):
        with self.assertRaises(ValueError):
            right_riemann_sum(np.sin, 0, 1, 0)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
