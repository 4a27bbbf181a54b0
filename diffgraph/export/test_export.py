#!/usr/bin/env python3

import unittest
from unittest import mock
import sys
import os.path as op
import subprocess
import tempfile
import contextlib
import io

import matplotlib
matplotlib.use('agg')
import matplotlib.pyplot as plt
import numpy as np

from testutils import DiffgraphTestCase
from ..exprs import X, Sin, Cos, Log
from ..graph import DerivativeSeries
from .dot import dot_source, export_dot
from .plotting import plot_series, sample_series


class TestDotSource(DiffgraphTestCase):
    def setUp(self):
        self.series = DerivativeSeries(Sin.power(2), 2).optimized()

    def test_structure(self):
        text = dot_source(self.series, 1, basename="out/sq")
        self.assertTrue(text.startswith("digraph {\n"))
        self.assertTrue(text.rstrip().endswith("}"))
        self.assertIn("function0 [", text)
        self.assertIn("function1 [", text)
        self.assertNotIn("function2 [", text)
        self.assertIn('URL = "sq-1.svg"', text)
        self.assertIn("1st derivative", text)
        self.assertIn("original function", text)
        for node in self.series[:2]:
            self.assertIn("function%d -> f%d"
                          % (self.series.nodes.index(node), node.node_id), text)

    def test_nodes_and_edges(self):
        text = dot_source(self.series, 0)
        root = self.series[0]
        sin = root.children()[0]
        # Product(Sin, Sin) has two edges to the same node.
        self.assertEqual(text.count("\nf%d -> f%d [" % (root.node_id, sin.node_id)), 1)
        self.assertIn('label = "*"', text)
        self.assertIn('label = "Sin"', text)
        self.assertIn('label = "X"', text)
        self.assertIn("color = lightgreen", text)
        self.assertIn("color = lightblue", text)
        self.assertIn("contains 4 duplicate subfunctions", text)
        self.assertIn("contains 3 unique subfunctions", text)

    def test_node_listed_once(self):
        text = dot_source(self.series, 2)
        sin = self.series[0].children()[0]
        self.assertEqual(text.count("\nf%d [\n" % sin.node_id), 1)

    def test_invalid_order(self):
        with self.assertRaises(IndexError):
            dot_source(self.series, 3)


class TestExportDot(DiffgraphTestCase):
    def setUp(self):
        self.series = DerivativeSeries(Log.compose(1.0 + X**2), 2)

    def test_write_without_render(self):
        with tempfile.TemporaryDirectory() as tmp:
            base = op.join(tmp, "graph")
            files = export_dot(self.series, base, render=False, verbose=False)
            self.assertEqual(files, [base + "-%d.dot" % k for k in range(3)])
            for k, fname in enumerate(files):
                with open(fname) as f:
                    self.assertEqual(f.read(), dot_source(self.series, k, basename=base))

    def test_render(self):
        with tempfile.TemporaryDirectory() as tmp:
            base = op.join(tmp, "graph")
            with mock.patch("subprocess.check_call") as check_call:
                files = export_dot(self.series, base, verbose=False)
            self.assertEqual(check_call.call_count, 3)
            check_call.assert_any_call(
                ["dot", "-Tsvg", base + "-1.dot", "-o", base + "-1.svg"]
            )
            self.assertIn(base + "-2.svg", files)

    def test_render_failure(self):
        error = subprocess.CalledProcessError(1, "dot")
        with tempfile.TemporaryDirectory() as tmp:
            base = op.join(tmp, "graph")
            with mock.patch("subprocess.check_call", side_effect=error):
                with self.assertRaises(subprocess.CalledProcessError):
                    export_dot(self.series, base, verbose=False)

    def test_verbose(self):
        out = io.StringIO()
        with tempfile.TemporaryDirectory() as tmp:
            base = op.join(tmp, "graph")
            with contextlib.redirect_stdout(out):
                export_dot(self.series, base, render=False)
        self.assertIn("graph-*.dot", out.getvalue())

    def test_invalid_basename(self):
        with self.assertRaises(ValueError):
            export_dot(self.series, "", render=False)
        with self.assertRaises(ValueError):
            export_dot(self.series, "graph.dot", render=False)


class TestPlotting(DiffgraphTestCase):
    def tearDown(self):
        plt.close('all')

    def test_sampling(self):
        series = DerivativeSeries(Sin, 1)
        xs, ys = sample_series(series, domain=(0, 1), points=11)
        self.assertEqual(ys.shape, (2, 11))
        self.assertListClose(ys[0], np.sin(xs))
        self.assertListClose(ys[1], np.cos(xs))
        with self.assertRaises(ValueError):
            sample_series(series, points=1)

    def test_non_finite_values(self):
        series = DerivativeSeries(Log, 1)
        xs, ys = sample_series(series, domain=(-1, 1), points=3)
        self.assertTrue(np.isnan(ys[0][0]))
        self.assertEqual(ys[0][1], -np.inf)
        self.assertEqual(ys[1][1], np.inf)

    def test_plot(self):
        series = DerivativeSeries(Sin.compose(X**2), 2).optimized()
        fig = plot_series(series, points=101)
        ax = fig.axes[0]
        self.assertEqual(len(ax.lines), 3)
        self.assertEqual(ax.get_title(),
                         "Sin((X) * (X)) up to 2nd derivative")
        labels = [line.get_label() for line in ax.lines]
        self.assertEqual(labels, ["0th derivative", "1st derivative",
                                  "2nd derivative"])

    def test_save(self):
        series = DerivativeSeries(Cos, 1)
        with tempfile.TemporaryDirectory() as tmp:
            base = op.join(tmp, "plot")
            with contextlib.redirect_stdout(io.StringIO()):
                plot_series(series, domain=(0, 3), points=31, basename=base,
                            close=True)
            self.assertTrue(op.isfile(base + ".svg"))
        with self.assertRaises(ValueError):
            plot_series(series, basename="plot.svg")
        with self.assertRaises(ValueError):
            plot_series(series, show=True, close=True)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
