"""Numba JIT compiled implementation of basic statistics functions."""

import numba as nb
import numpy as np

__all__ = ["mean_sigma"]


@nb.njit(cache=True)
def mean_sigma(x: nb.float64[:]) -> (nb.float64, nb.float64):
    """Computes the mean and the population standard deviation of a sequence.

    The standard deviation is computed about the mean in a second pass, i.e.
    `sqrt(sum((mean - x)**2) / n)`.

    Parameters
    ----------
    x : np.ndarray
        (N) Array of values, N > 0

    Returns
    -------
    float
        Mean of the values
    float
        Population standard deviation of the values
    """
    assert len(x) > 0, "Cannot compute the statistics of an empty sequence"
    n = len(x)
    total = 0.0
    for i in range(n):
        total += x[i]
    mean = total / n

    var = 0.0
    for i in range(n):
        var += (mean - x[i]) ** 2

    return mean, np.sqrt(var / n)
