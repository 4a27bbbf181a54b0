r"""@package testutils

Utilities to add more features to `unittest` classes.

This module provides a custom subclass of `unittest.TestCase`, namely
DiffgraphTestCase, which obeys the global configuration settings in
TestSettings and adds assertions for comparing floating point values
(including `inf` and `nan`) and node lists. TestSettings can be configured by
the script invoking the test run.

This module also introduces a new decorator slowtest, which, when applied,
leads to the test being skipped on normal runs. The script starting the test
must set `TestSettings.skipslow` to `False` for the slow tests to be run.
"""

import sys
import functools
import math
import unittest
import time


__all__ = [
    "DiffgraphTestCase",
    "TestSettings",
    "slowtest",
]


def slowtest(func):
    """Decorator for skipping a test if TestSettings.skipslow is true."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if TestSettings.skipslow:
            raise unittest.SkipTest("skipping slow tests")
        return func(*args, **kwargs)
    return wrapper


def _same_float(a, b, rel_tol, abs_tol):
    if math.isnan(a) or math.isnan(b):
        return math.isnan(a) and math.isnan(b)
    if a == b:
        return True
    return abs(a-b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)


class DiffgraphTestCase(unittest.TestCase):
    """Tweaked baseclass for unit tests.

    By deriving from this class, you:
        * Get timed individual tests (needs `verbosity=2`) if
          TestSettings.timing is true.
        * Can implement a hook (failureHook()) that is called after a test has
          failed (or errored). It is called before tearDown(), allowing you
          to, for example, collect generated files for inspection before they
          are deleted.
        * Can compare values that may be `inf` or `nan` with
          assertFloatClose() and assertListClose(), and node lists by
          identity with assertSameNodes().
    """
    @classmethod
    def setUpClass(cls):
        if cls is not DiffgraphTestCase:
            if cls.setUp is not DiffgraphTestCase.setUp:
                setUp = cls.setUp
                @functools.wraps(setUp)
                def setUpWrapper(self, *args, **kwargs):
                    DiffgraphTestCase.setUp(self)
                    return setUp(self, *args, **kwargs)
                cls.setUp = setUpWrapper
            if cls.tearDown is not DiffgraphTestCase.tearDown:
                tearDown = cls.tearDown
                @functools.wraps(tearDown)
                def tearDownWrapper(self, *args, **kwargs):
                    DiffgraphTestCase.tearDown(self)
                    return tearDown(self, *args, **kwargs)
                cls.tearDown = tearDownWrapper

    def __lastTestOK(self):
        r"""Return whether the previous test result was success."""
        if self.__result is None:
            return True
        return (len(self.__result.errors) == self.__prevErrors
                and len(self.__result.failures) == self.__prevFailures)

    def __shouldPrintTiming(self):
        r"""Return whether timing information should be printed."""
        if not TestSettings.timing or not self.__lastTestOK():
            return False
        if self.__result is None:
            return True
        if len(self.__result.skipped) > self.__prevSkipped:
            return False
        return not getattr(self.__result, 'dots', True) and getattr(self.__result, 'showAll', False)

    def run(self, result=None):
        # Foreign runners (e.g. pytest) may pass result objects without the
        # bookkeeping lists of unittest.TestResult.
        self.__result = result if hasattr(result, 'errors') else None
        self.__prevErrors = 0
        self.__prevFailures = 0
        self.__prevSkipped = 0
        if self.__result is not None:
            self.__prevErrors = len(result.errors)
            self.__prevFailures = len(result.failures)
            self.__prevSkipped = len(result.skipped)
        return unittest.TestCase.run(self, result)

    def setUp(self):
        self.startTime = time.time()
        self.__tornDown = False

    def tearDown(self):
        if self.__tornDown: return
        self.__tornDown = True
        if not self.__lastTestOK():
            self.failureHook(self.__result)
        if self.__shouldPrintTiming():
            duration = time.time() - self.startTime
            print("(%.4f seconds) ... " % (duration), file=sys.stderr, end='')

    def failureHook(self, result):
        r"""Custom function called just after a fail/error occurred.

        Subclasses may implement this function to e.g. collect result data
        before tearDown() gets called.
        """
        pass

    def assertIsType(self, obj, cls):
        r"""Assert that an object is exactly of a certain type."""
        self.assertIs(type(obj), cls)

    def assertFloatClose(self, a, b, rel_tol=1e-9, abs_tol=0.0, msg=None):
        r"""Assert two floats agree within tolerances.

        Two `nan` values are considered equal here, as are two infinities of
        the same sign.
        """
        if not _same_float(float(a), float(b), rel_tol, abs_tol):
            self.fail(msg or "%r != %r (rel_tol=%g, abs_tol=%g)"
                      % (a, b, rel_tol, abs_tol))

    def assertListClose(self, a, b, rel_tol=1e-9, abs_tol=0.0):
        r"""Assert two iterables contain values agreeing within tolerances."""
        a, b = list(a), list(b)
        if len(a) != len(b):
            raise self.failureException("Lists have different lengths (%d != %d)" % (len(a), len(b)))
        fails = [i for i in range(len(a))
                 if not _same_float(float(a[i]), float(b[i]), rel_tol, abs_tol)]
        if fails:
            msg = "%d elements differ.\n" % len(fails)
            maxN = 9
            if len(fails) <= maxN:
                msg += "Differing elements:\n"
            else:
                msg += "First few differing elements:\n"
            msg += "\n".join(["  [{i}] {a} != {b}".format(i=i, a=a[i], b=b[i])
                              for i in fails[:maxN]])
            raise self.failureException(msg)

    def assertSameNodes(self, a, b):
        r"""Assert two node lists contain the very same instances."""
        a, b = list(a), list(b)
        self.assertEqual(len(a), len(b))
        for i, (n1, n2) in enumerate(zip(a, b)):
            if n1 is not n2:
                self.fail("Nodes at index %d differ: %r is not %r" % (i, n1, n2))


class TestSettings(object):
    """Global settings for tests."""
    ## Stop test run on first fail/error.
    failfast = False
    ## Whether output is buffered.\ Just information, cannot be used to toggle output buffering.
    buffering = False
    ## Whether the timing for each test case should be printed.
    timing = False
    ## Control whether tests marked as slowtest should be skipped.
    skipslow = True
