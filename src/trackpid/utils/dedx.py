"""Functions used to condition the dE/dx sequence of a track.

The network expects a fixed-length dE/dx sequence which is free of
saturated values and isolated spikes. The functions in this module
- Clamp and smooth the raw sequence (:func:`smooth_dedx`)
- Summarize a middle section of the track (:func:`dedx_window`,
  :func:`dedx_mean_sigma`)
- Pad short tracks with synthetic early points (:func:`pad_dedx`)
"""

import numba as nb
import numpy as np

from trackpid.errors import InvalidInputError
from trackpid.math import mean_sigma

__all__ = ["smooth_dedx", "dedx_window", "dedx_mean_sigma", "pad_dedx"]


def smooth_dedx(dedx, max_value, max_jump):
    """Clamps and smooths a dE/dx sequence in place.

    The sequence is first clamped to [0, `max_value`]. Single-point jumps are
    then removed in one forward pass:
    - The first (last) point is linearly extrapolated from its two neighbors
      if it exceeds its neighbor by more than `max_jump`;
    - Each interior point is replaced by the average of its neighbors if it
      exceeds the previous (possibly already smoothed) point by more than
      `max_jump`.

    Extrapolated end points are clamped back to [0, `max_value`].

    Parameters
    ----------
    dedx : np.ndarray
        (N) Array of dE/dx values, N >= 3. Modified in place.
    max_value : float
        Saturation value of the sequence
    max_jump : float
        Maximum allowed rise between two successive points

    Returns
    -------
    np.ndarray
        (N) Smoothed dE/dx values (same object as the input)
    """
    if dedx.ndim != 1 or len(dedx) < 3:
        raise InvalidInputError(
            "Need at least 3 points to smooth a dE/dx sequence, "
            f"got {len(dedx)}."
        )
    if not np.issubdtype(dedx.dtype, np.floating):
        raise InvalidInputError("The dE/dx sequence must be a floating point array.")
    if not np.all(np.isfinite(dedx)):
        raise InvalidInputError("The dE/dx sequence contains non-finite values.")

    _smooth_dedx(dedx, max_value, max_jump)

    return dedx


@nb.njit(cache=True)
def _smooth_dedx(dedx: nb.float64[:], max_value: nb.float64, max_jump: nb.float64):
    # Get rid of all very high and negative values
    for i in range(len(dedx)):
        if dedx[i] > max_value:
            dedx[i] = max_value
        if dedx[i] < 0.0:
            dedx[i] = 0.0

    # First and last points are special cases
    n = len(dedx)
    if dedx[0] - dedx[1] > max_jump:
        dedx[0] = min(max_value, max(0.0, 2 * dedx[1] - dedx[2]))
    if dedx[n - 1] - dedx[n - 2] > max_jump:
        dedx[n - 1] = min(max_value, max(0.0, 2 * dedx[n - 2] - dedx[n - 3]))

    # Smooth over rising jumps in the rest of the points
    for i in range(1, n - 1):
        if dedx[i] - dedx[i - 1] > max_jump:
            dedx[i] = 0.5 * (dedx[i - 1] + dedx[i + 1])


def dedx_window(dedx, window_size):
    """Selects the section of the track used to summarize the dE/dx.

    The window spans `window_size` points, ending `window_size` points
    before the end of the track and read backwards from there, i.e. it is
    the middle third of the last `3 * window_size` points of the track.

    Parameters
    ----------
    dedx : np.ndarray
        (N) Array of dE/dx values, N >= 2 * `window_size`
    window_size : int
        Number of points in the window, > 0

    Returns
    -------
    np.ndarray
        (window_size) Array of dE/dx values, in reverse track order
    """
    if window_size < 1:
        raise InvalidInputError(
            f"The dE/dx summary window must contain at least 1 point, got {window_size}."
        )
    if len(dedx) < 2 * window_size:
        raise InvalidInputError(
            f"Need at least {2 * window_size} points to select a window of "
            f"{window_size} points, got {len(dedx)}."
        )

    start = len(dedx) - 1 - window_size
    end = len(dedx) - 1 - 2 * window_size
    if end < 0:
        return dedx[start::-1]

    return dedx[start:end:-1]


def dedx_mean_sigma(values):
    """Computes the mean and population standard deviation of a sequence.

    Parameters
    ----------
    values : array_like
        (N) Sequence of values, N > 0

    Returns
    -------
    float
        Mean of the sequence
    float
        Standard deviation of the sequence
    """
    values = np.ascontiguousarray(values, dtype=np.float64)
    if values.ndim != 1 or len(values) == 0:
        raise InvalidInputError("Cannot summarize an empty sequence.")

    mean, sigma = mean_sigma(values)

    return float(mean), float(sigma)


def pad_dedx(dedx, length, mean, sigma, rng):
    """Pads a dE/dx sequence at the front to reach a target length.

    Each synthetic point is drawn from a normal distribution of the given
    mean and standard deviation, redrawing until a non-negative value is
    obtained. Points are prepended one by one, so the first draw sits right
    before the first real point and the last draw becomes the first point
    of the padded sequence.

    Parameters
    ----------
    dedx : np.ndarray
        (N) Array of dE/dx values
    length : int
        Target length of the sequence
    mean : float
        Mean of the normal distribution to sample from
    sigma : float
        Standard deviation of the normal distribution to sample from
    rng : np.random.Generator
        Random number generator used to sample the synthetic points

    Returns
    -------
    np.ndarray
        (max(N, length)) Padded array of dE/dx values
    """
    if not (np.isfinite(mean) and np.isfinite(sigma)):
        raise InvalidInputError(
            f"Cannot sample padding values from non-finite statistics ({mean}, {sigma})."
        )
    if sigma < 0.0:
        raise InvalidInputError(
            f"Cannot sample padding values with a negative sigma ({sigma})."
        )
    if mean < 0.0 and sigma == 0.0:
        raise InvalidInputError(
            f"Cannot sample non-negative padding values around {mean} with no spread."
        )

    num_pad = length - len(dedx)
    if num_pad <= 0:
        return dedx

    # Fill the buffer from the real data backwards
    padded = np.empty(length, dtype=dedx.dtype)
    padded[num_pad:] = dedx
    for i in range(num_pad - 1, -1, -1):
        value = rng.normal(mean, sigma)
        while value < 0.0:
            value = rng.normal(mean, sigma)

        padded[i] = value

    return padded
