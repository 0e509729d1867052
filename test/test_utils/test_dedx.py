"""Tests for the dE/dx sequence conditioning functions."""

import numpy as np
import pytest

from trackpid.errors import InvalidInputError
from trackpid.utils.dedx import dedx_mean_sigma, dedx_window, pad_dedx, smooth_dedx


class SequenceGenerator:
    """Mock random number generator which returns predetermined values."""

    def __init__(self, values):
        self.values = list(values)

    def normal(self, mean, sigma):
        return self.values.pop(0)


class TestSmoothDedx:
    """Test the clamping and jump removal of the dE/dx sequence."""

    def test_interior_jump(self):
        """A single-point spike is replaced by the average of its neighbors."""
        dedx = np.array([10.0, 10.0, 10.0, 600.0, 12.0, 10.0])
        smooth_dedx(dedx, 1000.0, 500.0)
        assert np.allclose(dedx, [10.0, 10.0, 10.0, 11.0, 12.0, 10.0])

    def test_in_place(self):
        """The sequence is modified in place and returned."""
        dedx = np.array([10.0, 10.0, 10.0, 600.0, 12.0, 10.0])
        out = smooth_dedx(dedx, 1000.0, 500.0)
        assert out is dedx

    def test_clamp(self):
        """Values are clamped to [0, max_value] before looking for jumps."""
        dedx = np.array([-5.0, 10.0, 20.0, 1500.0])
        smooth_dedx(dedx, 1000.0, 500.0)
        assert np.allclose(dedx, [0.0, 10.0, 20.0, 30.0])

    def test_first_point(self):
        """A high first point is extrapolated from the next two."""
        dedx = np.array([900.0, 100.0, 120.0, 130.0])
        smooth_dedx(dedx, 1000.0, 500.0)
        assert np.allclose(dedx, [80.0, 100.0, 120.0, 130.0])

    def test_last_point(self):
        """A high last point is extrapolated from the previous two."""
        dedx = np.array([130.0, 120.0, 100.0, 900.0])
        smooth_dedx(dedx, 1000.0, 500.0)
        assert np.allclose(dedx, [130.0, 120.0, 100.0, 80.0])

    def test_extrapolation_bounds(self):
        """Extrapolated end points do not leave [0, max_value]."""
        dedx = np.array([1000.0, 0.0, 400.0, 400.0])
        smooth_dedx(dedx, 1000.0, 500.0)
        assert np.allclose(dedx, [0.0, 0.0, 400.0, 400.0])

    def test_forward_only(self):
        """Only rising jumps with respect to the previous point are smoothed."""
        dedx = np.array([10.0, 10.0, 600.0, 600.0, 600.0, 10.0])
        smooth_dedx(dedx, 1000.0, 500.0)
        assert np.allclose(dedx, [10.0, 10.0, 305.0, 600.0, 600.0, 10.0])

    def test_float32(self):
        """Single precision sequences are supported."""
        dedx = np.array([10.0, 10.0, 10.0, 600.0, 12.0, 10.0], dtype=np.float32)
        smooth_dedx(dedx, 1000.0, 500.0)
        assert dedx.dtype == np.float32
        assert dedx[3] == pytest.approx(11.0)

    def test_noop(self, rng):
        """A sequence within bounds and without jumps is left untouched."""
        dedx = rng.uniform(100.0, 200.0, size=200)
        ref = dedx.copy()
        smooth_dedx(dedx, 1000.0, 500.0)
        assert np.array_equal(dedx, ref)

    def test_bounds(self, rng):
        """The smoothed sequence always lies within [0, max_value]."""
        for _ in range(20):
            dedx = rng.uniform(-2000.0, 3000.0, size=50)
            smooth_dedx(dedx, 1000.0, 500.0)
            assert np.all(dedx >= 0.0)
            assert np.all(dedx <= 1000.0)

    @pytest.mark.parametrize("length", [0, 1, 2])
    def test_too_short(self, length):
        """Smoothing needs at least three points."""
        with pytest.raises(InvalidInputError):
            smooth_dedx(np.ones(length), 1000.0, 500.0)

    @pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
    def test_non_finite(self, bad):
        """Non-finite values cannot be clamped and are reported."""
        dedx = np.array([10.0, bad, 10.0, 10.0])
        with pytest.raises(InvalidInputError):
            smooth_dedx(dedx, 1000.0, 500.0)

    def test_integer(self):
        """Integer sequences cannot be smoothed in place."""
        with pytest.raises(InvalidInputError):
            smooth_dedx(np.ones(5, dtype=np.int64), 1000.0, 500.0)


class TestDedxWindow:
    """Test the selection of the dE/dx summary window."""

    def test_window(self):
        """The window is the middle third of the last points, reversed."""
        dedx = np.arange(60.0)
        window = dedx_window(dedx, 16)
        assert len(window) == 16
        assert np.array_equal(window, np.arange(43.0, 27.0, -1.0))

    def test_shortest(self):
        """A track of exactly twice the window size uses its first points."""
        dedx = np.arange(32.0)
        window = dedx_window(dedx, 16)
        assert np.array_equal(window, np.arange(15.0, -1.0, -1.0))

    def test_too_short(self):
        """The window must fit in the track."""
        with pytest.raises(InvalidInputError):
            dedx_window(np.arange(31.0), 16)

    def test_empty_window(self):
        """The window must contain at least one point."""
        with pytest.raises(InvalidInputError):
            dedx_window(np.arange(31.0), 0)


class TestDedxMeanSigma:
    """Test the dE/dx summary statistics."""

    def test_constant(self):
        """A constant sequence has mean v and no spread."""
        assert dedx_mean_sigma([5.0] * 16) == pytest.approx((5.0, 0.0))

    def test_values(self):
        """Population statistics of an arbitrary sequence."""
        mean, sigma = dedx_mean_sigma(np.array([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]))
        assert mean == pytest.approx(5.0)
        assert sigma == pytest.approx(2.0)

    def test_empty(self):
        """The statistics of an empty sequence are undefined."""
        with pytest.raises(InvalidInputError):
            dedx_mean_sigma([])


class TestPadDedx:
    """Test the padding of short dE/dx sequences."""

    def test_length_and_suffix(self, rng):
        """The real points are kept, in order, at the end."""
        dedx = np.arange(1.0, 11.0)
        padded = pad_dedx(dedx, 25, 5.0, 10.0, rng)
        assert len(padded) == 25
        assert np.array_equal(padded[15:], dedx)
        assert np.all(padded >= 0.0)

    def test_prepend_order(self):
        """Negative draws are rejected, each accepted draw is prepended."""
        dedx = np.array([1.0, 2.0])
        padded = pad_dedx(dedx, 5, 3.0, 2.0, SequenceGenerator([-1.0, 3.0, 4.0, -2.0, 5.0]))
        assert np.allclose(padded, [5.0, 4.0, 3.0, 1.0, 2.0])

    def test_no_spread(self):
        """With no spread, padding repeats the mean."""
        padded = pad_dedx(np.full(60, 5.0), 100, 5.0, 0.0, np.random.default_rng())
        assert np.allclose(padded, 5.0)

    def test_long_enough(self, rng):
        """Sequences already long enough are returned as is."""
        dedx = np.ones(10)
        assert pad_dedx(dedx, 10, 1.0, 1.0, rng) is dedx

    def test_reproducible(self):
        """Two generators with the same seed produce the same padding."""
        dedx = np.ones(10)
        a = pad_dedx(dedx, 30, 10.0, 3.0, np.random.default_rng(42))
        b = pad_dedx(dedx, 30, 10.0, 3.0, np.random.default_rng(42))
        assert np.array_equal(a, b)

    def test_dtype(self, rng):
        """The padded sequence keeps the input precision."""
        dedx = np.ones(10, dtype=np.float32)
        assert pad_dedx(dedx, 20, 1.0, 1.0, rng).dtype == np.float32

    def test_negative_sigma(self, rng):
        """A negative spread is not a distribution."""
        with pytest.raises(InvalidInputError):
            pad_dedx(np.ones(10), 20, 1.0, -1.0, rng)

    @pytest.mark.parametrize("mean, sigma", [(np.nan, 1.0), (1.0, np.nan), (np.inf, 1.0)])
    def test_non_finite_statistics(self, rng, mean, sigma):
        """Non-finite statistics cannot be sampled from."""
        with pytest.raises(InvalidInputError):
            pad_dedx(np.ones(10), 20, mean, sigma, rng)

    def test_unreachable(self, rng):
        """A negative mean with no spread can never be accepted."""
        with pytest.raises(InvalidInputError):
            pad_dedx(np.ones(10), 20, -1.0, 0.0, rng)
