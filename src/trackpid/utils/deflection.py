"""Measures the angular deflection ("wobble") along a track trajectory."""

import numpy as np

from trackpid.errors import InvalidInputError
from trackpid.math import mean_sigma
from trackpid.math.linalg import successive_angles

__all__ = ["deflection_angles", "deflection_mean_sigma"]


def deflection_angles(dirs):
    """Compute the angles between successive trajectory directions.

    Parameters
    ----------
    dirs : array_like
        (N, 3) Directions at each trajectory point, N >= 2

    Returns
    -------
    np.ndarray
        (N - 1) Angle between each direction and the previous one in radians
    """
    dirs = np.ascontiguousarray(dirs, dtype=np.float64)
    if dirs.ndim != 2 or dirs.shape[1] != 3:
        raise InvalidInputError(
            f"Trajectory directions must be provided as an (N, 3) array, "
            f"got shape {dirs.shape}."
        )
    if len(dirs) < 2:
        raise InvalidInputError(
            "Need at least 2 trajectory points to measure a deflection, "
            f"got {len(dirs)}."
        )

    return successive_angles(dirs)


def deflection_mean_sigma(dirs):
    """Compute the mean and standard deviation of the angular deflection
    between successive trajectory points.

    Parameters
    ----------
    dirs : array_like
        (N, 3) Directions at each trajectory point, N >= 2

    Returns
    -------
    float
        Mean deflection angle in radians
    float
        Standard deviation of the deflection angle in radians
    """
    mean, sigma = mean_sigma(deflection_angles(dirs))

    return float(mean), float(sigma)
