"""Tests for importance-weighted RDP simplification."""

import numpy as np
import pytest

from curve_compress.algorithms import (
    RDPSimplifier,
    compress_rdp,
    point_segment_distances,
    ImportanceWeights,
)
from curve_compress.curves import TimeSeries, CurveType


def slow_sine(n=201):
    """sin(t) on [0, 2 pi]; slopes never exceed 1."""
    t = np.linspace(0, 2 * np.pi, n)
    return TimeSeries(t, np.sin(t))


class TestPointSegmentDistance:
    """Tests for the clamped projection distance."""

    def test_perpendicular(self):
        d = point_segment_distances(np.array([[1.0, 1.0]]), np.array([0.0, 0.0]), np.array([2.0, 0.0]))
        np.testing.assert_allclose(d, [1.0])

    def test_beyond_endpoint(self):
        """Test points past the segment measure to the nearer endpoint."""
        d = point_segment_distances(np.array([[3.0, 0.0]]), np.array([0.0, 0.0]), np.array([2.0, 0.0]))
        np.testing.assert_allclose(d, [1.0])

    def test_zero_length_chord(self):
        d = point_segment_distances(np.array([[3.0, 4.0]]), np.array([0.0, 0.0]), np.array([0.0, 0.0]))
        np.testing.assert_allclose(d, [5.0])


class TestRDPSimplifier:
    """Tests for sample selection."""

    def test_endpoints_always_kept(self):
        indices = RDPSimplifier(0.5).simplify(slow_sine())
        assert indices[0] == 0
        assert indices[-1] == 200

    def test_sorted_unique(self):
        indices = RDPSimplifier(0.01).simplify(slow_sine())
        assert np.all(np.diff(indices) > 0)

    def test_constant_signal_collapses(self):
        """Test that a constant signal keeps only its endpoints."""
        series = TimeSeries(np.linspace(0, 1, 100), np.full(100, 2.5))
        for tol in (1e-6, 0.01, 1.0):
            np.testing.assert_array_equal(RDPSimplifier(tol).simplify(series), [0, 99])

    def test_straight_line_collapses(self):
        series = TimeSeries(np.linspace(0, 1, 50), np.linspace(-1, 3, 50))
        np.testing.assert_array_equal(RDPSimplifier(1e-3).simplify(series), [0, 49])

    def test_first_max_wins(self):
        """Test that equal distances split at the earliest sample."""
        series = TimeSeries([0.0, 1.0, 2.0, 3.0, 4.0], [0.0, 1.0, 0.0, 1.0, 0.0])
        indices = RDPSimplifier(0.5, importance_threshold=0.0).simplify(series)
        assert 1 in indices

    def test_short_inputs(self):
        series = TimeSeries([0.0, 1.0], [0.0, 1.0])
        np.testing.assert_array_equal(RDPSimplifier(0.1).simplify(series), [0, 1])

    def test_long_input_no_recursion_limit(self):
        """Test a signal needing very deep splitting."""
        n = 5000
        t = np.arange(n, dtype=float)
        series = TimeSeries(t, (t % 2) * 10.0)
        indices = RDPSimplifier(0.1, importance_threshold=0.0).simplify(series)
        assert len(indices) == n

    def test_importance_keeps_more_points(self):
        """Test that the importance boost never keeps fewer samples."""
        series = slow_sine()
        plain = RDPSimplifier(0.05, importance_threshold=0.0).simplify(series)
        boosted = RDPSimplifier(0.05, importance_threshold=5.0).simplify(series)
        assert len(boosted) >= len(plain)

    def test_invalid_parameters(self):
        with pytest.raises(ValueError):
            RDPSimplifier(0.0)
        with pytest.raises(ValueError):
            RDPSimplifier(0.1, importance_threshold=-1.0)


class TestCompressRDP:
    """Tests for RDP-based compression."""

    def test_linear_error_bound(self):
        """Test that the reconstruction stays close to the tolerance."""
        series = slow_sine()
        tol = 0.01
        curve = compress_rdp(series, tol)
        assert curve.max_error(series) <= 1.5 * tol
        assert set(curve.curve_types) == {CurveType.LINEAR}

    @pytest.mark.parametrize("curve_type", [CurveType.BEZIER, CurveType.BSPLINE])
    def test_refit_types(self, curve_type):
        """Test refitting the sub-ranges between retained samples."""
        series = slow_sine()
        curve = compress_rdp(series, 0.01, curve_type)
        assert curve.start_time == series.t_start
        assert curve.end_time == series.t_end
        assert curve.max_error(series) <= 0.015

    def test_bezier_refit_within_tolerance(self):
        """Test that Bezier refits only accept leaves within tolerance."""
        series = slow_sine()
        curve = compress_rdp(series, 0.01, CurveType.BEZIER)
        assert curve.max_error(series) <= 0.01 + 1e-12

    def test_monotonic_in_tolerance(self):
        """Test that a larger tolerance never gives more segments."""
        series = slow_sine()
        counts = [compress_rdp(series, tol).n_segments for tol in (0.001, 0.005, 0.01, 0.05, 0.2)]
        assert all(a >= b for a, b in zip(counts, counts[1:]))

    def test_continuity(self):
        series = slow_sine()
        curve = compress_rdp(series, 0.02)
        for a, b in zip(curve.segments, curve.segments[1:]):
            assert a.end_time == b.start_time
            assert a.end_value == pytest.approx(b.start_value)

    def test_custom_weights(self):
        series = slow_sine()
        curve = compress_rdp(series, 0.02, weights=ImportanceWeights(1.0, 0.0, 0.0, 0.0))
        assert curve.n_segments >= 1
