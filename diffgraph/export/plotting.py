r"""@package diffgraph.export.plotting

Plot all derivatives of a series into one figure.

@b Examples

```
    series = DerivativeSeries(Sin.power(3), 2).optimized()
    plot_series(series, domain=(0, 5), basename="sin3")   # writes sin3.svg
```
"""

import os.path as op

import numpy as np
import matplotlib as mpl
try:
    import matplotlib.pyplot as plt
except ModuleNotFoundError:
    mpl.use('agg', force=True)  # switch to a more basic backend
    import matplotlib.pyplot as plt

from ..utils import check_basename
from ..exprs.common import with_ordinal_suffix


__all__ = [
    "sample_series",
    "plot_series",
]


def sample_series(series, domain=(0, 10), points=1001):
    r"""Evaluate all derivatives of a series on an equidistant grid.

    @return Tuple ``(xs, ys)``, where `ys` has one row per derivative order.
        Values that cannot be computed are `inf` or `nan` and are left as
        is.
    """
    if points < 2:
        raise ValueError("Need at least two points to sample.")
    xs = np.linspace(domain[0], domain[1], points)
    ys = np.array([[node.evaluate(x) for x in xs] for node in series])
    return xs, ys


def plot_series(series, domain=(0, 10), points=1001, basename=None,
                figsize=(8, 5), legend=True, show=False, close=False):
    r"""Plot the original function and all derivatives of a series.

    @param series
        The derivative series to plot.
    @param domain
        Interval of the variable to plot over. Default is `(0, 10)`.
    @param points
        Number of equidistant sample points. Default is `1001`.
    @param basename
        If given, the figure is saved as ``'<basename>.svg'``. The name must
        not contain an extension.
    @param figsize
        Size of the figure in inches.
    @param legend
        Whether to add a legend naming the derivative orders.
    @param show
        Whether to call `pyplot.show()` after plotting.
    @param close
        Whether to close the figure after plotting (and saving). Cannot be
        combined with `show`.

    @return The Matplotlib figure.
    """
    if close and show:
        raise ValueError("Cannot close and show figures.")
    if basename is not None:
        basename = check_basename(basename)
    xs, ys = sample_series(series, domain=domain, points=points)
    fig, ax = plt.subplots(figsize=figsize)
    for k, values in enumerate(ys):
        ax.plot(xs, values, label="%s derivative" % with_ordinal_suffix(k))
    ax.set(title="%s up to %s derivative"
           % (series[0].description, with_ordinal_suffix(series.order)))
    ax.set_xlabel("X")
    if legend:
        ax.legend()
    if basename is not None:
        fname = op.expanduser(basename) + ".svg"
        fig.savefig(fname)
        print("Plot saved to: %s" % fname)
    if show:
        plt.show()
    elif close:
        plt.close(fig)
    return fig
