r"""@package diffgraph.utils

General utilities for simplifying certain tasks in Python.
"""

from tempfile import NamedTemporaryFile

import os
import os.path as op
import time
from timeit import default_timer
import datetime
from contextlib import contextmanager

import numpy as np


__all__ = [
    "check_basename",
    "timethis",
    "save_to_file",
    "load_from_file",
]


def check_basename(basename):
    r"""Make sure `basename` can be used as file name stem for exports.

    Exported files get their extension (and possibly a suffix) appended, so
    the given name must be non-empty and must not contain a ``'.'``.

    @return The validated name.
    """
    if not basename:
        raise ValueError("Please provide a file name, anything.")
    if '.' in op.basename(basename):
        raise ValueError("Please provide a file name without extension.")
    return basename


@contextmanager
def timethis(start_msg=None, end_msg="Elapsed time: {}", silent=False, eol=True):
    r"""Context manager for timing code execution.

    @param start_msg
        String to print at the beginning. May contain the placeholder
        ``'{now}'``, which will be replaced by the current date and time. A
        value of `True` will be taken to mean ``"Started: {now}``.
    @param end_msg
        String to print after execution. Default is ``"Elapsed time: {}"``.
    @param silent
        Whether to print anything at all. May be useful when a function has a
        verbosity setting to conditionally time its results.
    @param eol
        Whether to print a newline after each message. May be useful to print
        execution time in line with the starting message.
    """
    if silent:
        yield
        return
    if start_msg is True:
        start_msg = "Started: {now}"
    if start_msg is not None:
        print(start_msg.format(now=time.strftime('%Y-%m-%d %H:%M:%S')),
              end='\n' if eol else '', flush=not eol)
    start = default_timer()
    try:
        yield
    finally:
        if end_msg is not None:
            time_str = datetime.timedelta(seconds=default_timer()-start)
            print(end_msg.format(time_str))


def save_to_file(filename, data, overwrite=False, verbose=True,
                 showname='data', mkpath=True):
    r"""Save an object to disk.

    This uses `numpy.save()` to store an object in a file. Use
    load_from_file() to restore the data afterwards.

    @param filename
        The file name to store the data in. An extension ``'.npy'`` will be
        added if not already there.
    @param overwrite
        Whether to overwrite an existing file with the same name. If `False`
        (default) and such a file exists, a `RuntimeError` is raised. This is
        not completely atomic, since we first write the data to a temporary
        file, which is then renamed to the destination.
    @param verbose
        Whether to print when the file was written. Default is `True`.
    @param showname
        Name to print in the confirmation message in case `verbose==True`.
    @param mkpath
        If the parent folder(s) of the given filename don't exist, they are
        created if ``mkpath==True`` (default). Otherwise, an error is raised.

    @b Notes

    The data will be put into a 1-element object array. This avoids numpy
    interpreting sequence-like objects (such as derivative series) as data
    to be converted.
    """
    filename = op.expanduser(filename)
    if not filename.endswith('.npy'):
        filename += '.npy'
    path = op.abspath(op.normpath(op.dirname(filename)))
    if mkpath:
        os.makedirs(path, exist_ok=True)
    if op.exists(filename) and not overwrite:
        raise RuntimeError("File already exists.")
    container = np.empty(1, dtype=object)
    container[0] = data
    tname = None
    try:
        with NamedTemporaryFile(dir=path, delete=False) as tfile:
            tname = tfile.name
            np.save(tfile, container, allow_pickle=True)
        # Check again, since writing may have taken some time.
        if op.exists(filename) and not overwrite:
            raise RuntimeError("File already exists.")
        os.replace(tname, filename)
        tname = None
        if verbose:
            print("%s saved to: %s" % (showname, filename))
    finally:
        if tname is not None:
            os.unlink(tname) # clean up after any failures


def load_from_file(filename, allow_pickle=True, **kw):
    r"""Load an object from disk.

    If the object had been stored using save_to_file(), the result should be a
    perfect copy of the object.

    @param allow_pickle
        Passed to `numpy.load()` to allow loading objects stored in the file.
    @param **kw
        Further keyword arguments are passed to `numpy.load()`.

    @b Notes

    This assumes the object is the only element of a list stored in the file,
    which will be the case if the file was created using save_to_file(). If
    the data is not a single-element list, it is returned as is.
    """
    filename = op.expanduser(filename)
    result = np.load(filename, allow_pickle=allow_pickle, **kw)
    if result.shape == (1,):
        return result[0]
    # Not a single value. Return as is.
    return result
