"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.
"""

import numpy as np
import pytest

from trackpid.data import Particle, Track
from trackpid.utils.globals import MICHL_SHP, SHOWR_SHP, TRACK_SHP


def make_directions(num_points, step_angle=0.0):
    """Builds a planar trajectory which turns by a fixed angle at each point.

    Parameters
    ----------
    num_points : int
        Number of trajectory points
    step_angle : float, default 0.
        Angle between successive directions in radians

    Returns
    -------
    np.ndarray
        (N, 3) Unit directions
    """
    phi = step_angle * np.arange(num_points)
    return np.column_stack([np.cos(phi), np.sin(phi), np.zeros(num_points)])


@pytest.fixture(name="rng")
def fixture_rng():
    """Seeded random number generator, so that there are no surprises."""
    return np.random.default_rng(seed=0)


@pytest.fixture(name="straight_dirs")
def fixture_straight_dirs():
    """Trajectory of a track which goes in a straight line."""
    return make_directions(60)


@pytest.fixture(name="particles")
def fixture_particles():
    """Small particle hierarchy.

    Particle 0 is a track with a track child (1), a shower child (2) and a
    Michel child (3). Particle 1 has two children and particle 2 has one,
    so particle 0 has three grandchildren.
    """
    dedx = np.full(60, 5.0)
    track = Track(dedx=dedx, directions=make_directions(60))
    return [
        Particle(id=0, shape=TRACK_SHP, children_id=[1, 2, 3], track=track),
        Particle(id=1, shape=TRACK_SHP, parent_id=0, children_id=[4, 5]),
        Particle(id=2, shape=SHOWR_SHP, parent_id=0, children_id=[6]),
        Particle(id=3, shape=MICHL_SHP, parent_id=0),
        Particle(id=4, shape=SHOWR_SHP, parent_id=1),
        Particle(id=5, shape=SHOWR_SHP, parent_id=1),
        Particle(id=6, shape=SHOWR_SHP, parent_id=2),
    ]


@pytest.fixture(name="make_dirs")
def fixture_make_dirs():
    """Provides the trajectory builder to the tests."""
    return make_directions
