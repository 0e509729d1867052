"""Numba JIT compiled implementation of linear algebra routines."""

import numba as nb
import numpy as np

__all__ = ["norm", "successive_angles"]


@nb.njit(cache=True)
def norm(x: nb.float64[:, :]) -> nb.float64[:]:
    """Numba implementation of `np.linalg.norm(x, axis=1)`.

    Parameters
    ----------
    x : np.ndarray
        (N, M) array of vectors

    Returns
    -------
    np.ndarray
        (N) array of vector norms
    """
    res = np.empty(len(x), dtype=x.dtype)
    for i in range(len(x)):
        res[i] = np.sqrt(np.sum(x[i] ** 2))

    return res


@nb.njit(cache=True)
def successive_angles(dirs: nb.float64[:, :]) -> nb.float64[:]:
    """Computes the angle between each pair of successive vectors.

    Uses the simple arc-cosine of the normalized dot product. Vectors
    do not need to be normalized. If either vector of a pair has zero
    length, the angle is set to 0.

    Parameters
    ----------
    dirs : np.ndarray
        (N, 3) Array of directions

    Returns
    -------
    np.ndarray
        (N - 1) Array of successive angles in radians, in [0, pi]
    """
    norms = norm(dirs)
    angles = np.zeros(max(len(dirs) - 1, 0), dtype=dirs.dtype)
    for i in range(1, len(dirs)):
        denom = norms[i] * norms[i - 1]
        if denom <= 0.0:
            continue

        cos = np.sum(dirs[i] * dirs[i - 1]) / denom
        angles[i - 1] = np.arccos(min(1.0, max(-1.0, cos)))

    return angles
