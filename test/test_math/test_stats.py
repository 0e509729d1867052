"""Tests for the compiled statistics and angle routines."""

import numpy as np
import pytest

from trackpid.math import mean_sigma
from trackpid.math.linalg import norm, successive_angles


class TestMeanSigma:
    """Test the mean and population standard deviation kernel."""

    @pytest.mark.parametrize("value", [0.0, 5.0, 999.5])
    def test_constant(self, value):
        """A constant sequence has no spread."""
        mean, sigma = mean_sigma(np.full(10, value))
        assert mean == pytest.approx(value)
        assert sigma == pytest.approx(0.0)

    def test_population_formula(self):
        """The standard deviation is normalized by N, not N - 1."""
        x = np.array([1.0, 2.0, 3.0, 4.0])
        mean, sigma = mean_sigma(x)
        assert mean == pytest.approx(2.5)
        assert sigma == pytest.approx(np.sqrt(1.25))
        assert sigma == pytest.approx(np.std(x))

    def test_random(self, rng):
        """Matches numpy on an arbitrary sequence."""
        x = rng.uniform(0.0, 100.0, size=137)
        mean, sigma = mean_sigma(x)
        assert mean == pytest.approx(np.mean(x))
        assert sigma == pytest.approx(np.std(x))


class TestLinalg:
    """Test the angle routines."""

    def test_norm(self):
        """Row norms of a set of vectors."""
        x = np.array([[3.0, 4.0, 0.0], [0.0, 0.0, 2.0]])
        assert np.allclose(norm(x), [5.0, 2.0])

    def test_successive_angles(self):
        """Angles between consecutive directions."""
        dirs = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 1.0, 0.0]])
        assert np.allclose(successive_angles(dirs), [np.pi / 2, 0.0])

    def test_unnormalized(self):
        """Directions do not have to be unit vectors."""
        dirs = np.array([[2.0, 0.0, 0.0], [-3.0, 0.0, 0.0]])
        assert np.allclose(successive_angles(dirs), [np.pi])

    def test_zero_vector(self):
        """A null direction makes no angle with its neighbors."""
        dirs = np.array([[1.0, 0.0, 0.0], [0.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
        assert np.allclose(successive_angles(dirs), [0.0, 0.0])

    def test_rounding(self):
        """Nearly identical unit vectors do not produce NaN."""
        v = np.array([0.6, 0.8, 0.0])
        dirs = np.array([v, v * (1.0 + 1e-16)])
        angles = successive_angles(dirs)
        assert not np.any(np.isnan(angles))
        assert angles[0] == pytest.approx(0.0, abs=1e-6)
