#!/usr/bin/env python3

import unittest
import sys
import math

from testutils import DiffgraphTestCase
from .basics import X, Value, Sum, Product, UnaryPlus, Constant
from .elementary import Power, Exponential, Composition
from .elementary import Log, Sin, Cos, Sine


class TestPower(DiffgraphTestCase):
    def test_basics(self):
        f = X**3
        self.assertIsType(f, Power)
        self.assertEqual(f.n, 3)
        self.assertEqual(f.description, "(X) ** (3.0)")
        self.assertEqual(f.label(), "** 3")
        self.assertEqual(Power(X, -2).label(), "** -2")
        self.assertEqual(X.power(-2).description, "(X) ** (-2.0)")
        self.assertAlmostEqual(f(1.5), 1.5**3)
        self.assertAlmostEqual((X**-2)(2.0), 0.25)

    def test_non_integer_exponent(self):
        with self.assertRaises(TypeError):
            Power(X, 2.5)
        with self.assertRaises(TypeError):
            X.power(2.0)
        with self.assertRaises(TypeError):
            X ** 0.5

    def test_edge_values(self):
        self.assertEqual(Power(X, 0)(0.0), 1.0)
        self.assertEqual(Power(X, -1)(0.0), float('inf'))
        self.assertEqual(Power(X, 3)(-2.0), -8.0)

    def test_derivative(self):
        self.assertEqual((X**3).derivative().description,
                         "((3.0) * ((X) ** (2.0))) * (1.0)")
        df = Sin.power(3).derivative()
        for x in (0.2, 1.4):
            self.assertAlmostEqual(df(x), 3 * math.sin(x)**2 * math.cos(x))

    def test_constants(self):
        self.assertEqual(Power(Value(2), 3).as_constant(), 8.0)
        self.assertEqual(Power(X, 0).as_constant(), 1.0)
        self.assertIsNone(Power(X, 3).as_constant())
        self.assertIsNone(Power(X, 3).structural_info())

    def test_rewrites(self):
        self.assertIs(Power(Sin, 1).local_rewrite(), Sin)
        r = Power(Sin, 2).local_rewrite()
        self.assertIsType(r, Product)
        self.assertEqual(r.description, "(Sin(X)) * (Sin(X))")
        self.assertIsNone(Power(Sin, 3).local_rewrite())

    def test_rebuild_keeps_exponent(self):
        self.assertEqual(Power(X, 4).rebuild([Cos]).description,
                         "(Cos(X)) ** (4.0)")


class TestExponential(DiffgraphTestCase):
    def test_basics(self):
        f = 2 ** X
        self.assertIsType(f, Exponential)
        self.assertEqual(f.a, 2.0)
        self.assertEqual(f.description, "(2.0) ** (X)")
        self.assertEqual(f.label(), "2.0 **")
        self.assertAlmostEqual(f(3.0), 8.0)
        self.assertEqual(Value(3).power_of_exp(Sin).description,
                         "(3.0) ** (Sin(X))")

    def test_derivative(self):
        self.assertEqual((2 ** X).derivative().description,
                         "(((2.0) ** (X)) * (Log(2.0))) * (1.0)")
        df = Value(2.0).power_of_exp(Sin).derivative()
        self.assertAlmostEqual(df(0.0), math.log(2.0))

    def test_constants(self):
        self.assertEqual(Exponential(0, X).as_constant(), 0.0)
        self.assertEqual(Exponential(1, X).as_constant(), 1.0)
        self.assertEqual(Exponential(2, Value(3)).as_constant(), 8.0)
        self.assertIsNone(Exponential(2, X).as_constant())

    def test_edge_values(self):
        self.assertEqual(Exponential(2, X)(-float('inf')), 0.0)
        self.assertEqual(Exponential(10, X)(400.0), float('inf'))
        self.assertTrue(math.isnan(Exponential(-2, X)(0.5)))


class TestFunctions(DiffgraphTestCase):
    def test_singletons(self):
        self.assertIsType(Sin, Sine)
        self.assertEqual(Sin.description, "Sin(X)")
        self.assertEqual(Cos.description, "Cos(X)")
        self.assertEqual(Log.description, "Log(X)")
        self.assertEqual(Sin.label(), "Sin")
        self.assertSameNodes(Sin.children(), [X])

    def test_values(self):
        self.assertAlmostEqual(Sin(0.5), math.sin(0.5))
        self.assertAlmostEqual(Cos(0.5), math.cos(0.5))
        self.assertAlmostEqual(Log(2.0), math.log(2.0))
        self.assertEqual(Log(0.0), -float('inf'))
        self.assertTrue(math.isnan(Log(-1.0)))
        self.assertTrue(math.isnan(Sin(float('inf'))))

    def test_derivatives(self):
        self.assertIs(Sin.derivative(), Cos)
        self.assertEqual(Cos.derivative().description, "-(Sin(X))")
        self.assertEqual(Log.derivative().description, "(1.0) / (X)")
        self.assertEqual(Sin.derive_nth(4).description, "-(-(Sin(X)))")

    def test_rebuild(self):
        self.assertIs(Sin.rebuild([X]), Sin)
        self.assertIs(Log.possibly_rebuild([X]), Log)
        # anything rendering as the bare variable is accepted
        self.assertIs(Cos.rebuild([UnaryPlus(X)]), Cos)
        with self.assertRaises(ValueError):
            Sin.rebuild([Value(1.0)])
        with self.assertRaises(ValueError):
            Sin.rebuild([Sum(X, Value(0))])


class TestComposition(DiffgraphTestCase):
    def test_basics(self):
        f = Sin.compose(X**2)
        self.assertIsType(f, Composition)
        self.assertEqual(f.description, "Sin((X) ** (2.0))")
        self.assertEqual(f.label(), "of")
        self.assertIs(f.outer, Sin)
        self.assertSameNodes(f.children(), [Sin, f.inner])
        self.assertAlmostEqual(f(1.5), math.sin(2.25))
        g = Log.compose(Sin.compose(2 * X))
        self.assertEqual(g.description, "Log(Sin((2.0) * (X)))")
        self.assertAlmostEqual(g(0.3), math.log(math.sin(0.6)))

    def test_composed_operators(self):
        f = (X + Sin).compose(Cos)
        self.assertEqual(f.description, "(Cos(X)) + (Sin(Cos(X)))")
        self.assertAlmostEqual(f(0.7), math.cos(0.7) + math.sin(math.cos(0.7)))

    def test_derivative(self):
        df = Sin.compose(X**2).derivative()
        self.assertEqual(
            df.description,
            "(Cos((X) ** (2.0))) * (((2.0) * ((X) ** (1.0))) * (1.0))"
        )
        self.assertAlmostEqual(df(1.2), math.cos(1.44) * 2.4)

    def test_constants(self):
        self.assertEqual(Composition(Value(3), Sin).as_constant(), 3.0)
        self.assertAlmostEqual(Composition(Sin, Value(0.5)).as_constant(),
                               math.sin(0.5))
        self.assertEqual(Composition(Log, Value(0)).as_constant(),
                         -float('inf'))
        self.assertIsNone(Composition(Sin, X).as_constant())
        self.assertEqual(Composition(Log, Constant(2)).description, "Log(2.0)")

    def test_rebuild(self):
        f = Sin.compose(X**2)
        g = f.rebuild([Cos, X**3])
        self.assertEqual(g.description, "Cos((X) ** (3.0))")


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
