#!/usr/bin/env python3
r"""Run all unit tests of the diffgraph package.

Usage:

    python tests.py [-f|--failfast] [-b|--buffer] [-t|--timing]
                    [-s|--run-slow-tests] [-q|--quiet]
"""

import logging
import unittest
import os
import sys

import os.path as op
sys.path.insert(0, op.dirname(op.realpath(__file__)))

import matplotlib
matplotlib.use('agg')

from testutils import TestSettings


def run_tests():
    failfast = '-f' in sys.argv or '--failfast' in sys.argv
    buffering = '-b' in sys.argv or '--buffer' in sys.argv
    timing = '-t' in sys.argv or '--timing' in sys.argv
    runSlow = '-s' in sys.argv or '--run-slow-tests' in sys.argv
    quiet = '-q' in sys.argv or '--quiet' in sys.argv
    logging.basicConfig(level=logging.WARNING if quiet else logging.INFO,
                        format="%(levelname)s: %(message)s")
    TestSettings.failfast = failfast
    TestSettings.buffering = buffering
    TestSettings.timing = timing
    TestSettings.skipslow = not runSlow
    if TestSettings.skipslow:
        logging.info("Skipping slow tests (use -s to run them).")
    suite = unittest.TestLoader().discover(os.path.dirname(os.path.realpath(__file__)), pattern="test_*.py")
    logging.info("Discovered %d tests.", suite.countTestCases())
    result = unittest.TextTestRunner(verbosity=1 if quiet else 2, failfast=failfast, buffer=buffering).run(suite)
    if not result.wasSuccessful():
        logging.error("%d failures, %d errors.", len(result.failures), len(result.errors))
    return len(result.failures) + len(result.errors)


if __name__ == '__main__':
    sys.exit(1 if run_tests() else 0)
