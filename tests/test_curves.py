"""Tests for samples, curve segments and compressed curves."""

import numpy as np
import pytest

from curve_compress.curves import (
    Sample,
    TimeSeries,
    as_time_series,
    CurveType,
    LinearSegment,
    BezierSegment,
    BSplineSegment,
    CompressedCurve,
)


class TestTimeSeries:
    """Tests for sample containers."""

    def test_from_pairs(self):
        """Test construction from (time, value) pairs."""
        series = as_time_series([(0.0, 1.0), (1.0, 2.0), (2.0, 0.0)])
        assert series.n_samples == 3
        assert series.duration == 2.0
        assert series.value_range == 2.0

    def test_from_samples(self):
        series = as_time_series([Sample(0.0, 1.0), Sample(0.5, 3.0)])
        np.testing.assert_array_equal(series.values, [1.0, 3.0])
        assert series.sample(1) == Sample(0.5, 3.0)

    def test_passthrough(self):
        """Test that a TimeSeries is returned unchanged."""
        series = TimeSeries([0.0, 1.0], [0.0, 1.0])
        assert as_time_series(series) is series

    def test_unsorted_times_rejected(self):
        """Test that out-of-order times raise instead of being re-sorted."""
        with pytest.raises(ValueError, match="non-decreasing"):
            TimeSeries([0.0, 2.0, 1.0], [0.0, 0.0, 0.0])

    def test_duplicate_times_allowed(self):
        series = TimeSeries([0.0, 1.0, 1.0, 2.0], [0.0, 1.0, 1.0, 0.0])
        assert series.n_samples == 4

    def test_invalid_inputs(self):
        """Test empty, mismatched, non-finite and None inputs."""
        with pytest.raises(ValueError, match="empty"):
            as_time_series([])
        with pytest.raises(ValueError, match="Length mismatch"):
            TimeSeries([0.0, 1.0], [0.0])
        with pytest.raises(ValueError, match="finite"):
            TimeSeries([0.0, 1.0], [0.0, np.nan])
        with pytest.raises(ValueError, match="shape"):
            as_time_series(np.zeros((3, 3)))
        with pytest.raises(TypeError):
            as_time_series(None)

    def test_slice_is_inclusive_copy(self):
        """Test that slice includes both ends and copies data."""
        series = TimeSeries(np.arange(5.0), np.arange(5.0) ** 2)
        part = series.slice(1, 3)
        np.testing.assert_array_equal(part.times, [1.0, 2.0, 3.0])
        part.values[0] = -1.0
        assert series.values[1] == 1.0


class TestSegments:
    """Tests for segment evaluation."""

    def test_linear(self):
        """Test interpolation and clamping."""
        seg = LinearSegment(0.0, 0.0, 2.0, 4.0)
        assert seg.curve_type == CurveType.LINEAR
        assert seg.evaluate(1.0) == 2.0
        assert seg.evaluate(-1.0) == 0.0
        assert seg.evaluate(3.0) == 4.0
        np.testing.assert_allclose(seg.evaluate(np.array([0.5, 1.5])), [1.0, 3.0])

    def test_linear_zero_duration(self):
        """Test a degenerate segment does not divide by zero."""
        seg = LinearSegment(1.0, 2.0, 1.0, 5.0)
        assert seg.evaluate(1.0) == 2.0
        assert seg.evaluate(1.5) == 5.0

    def test_bezier_endpoints(self):
        """Test that a Bezier segment passes through its endpoints."""
        seg = BezierSegment(0.0, 1.0, 2.0, 3.0, in_tangent=5.0, out_tangent=-5.0)
        assert seg.curve_type == CurveType.BEZIER
        assert seg.evaluate(0.0) == pytest.approx(1.0)
        assert seg.evaluate(2.0) == pytest.approx(3.0)

    def test_bezier_reproduces_cubic(self):
        """Test that exact tangents reproduce a cubic polynomial."""
        f = lambda t: t ** 3 - t
        df = lambda t: 3 * t ** 2 - 1
        seg = BezierSegment(0.0, f(0.0), 2.0, f(2.0), df(0.0), df(2.0))
        t = np.linspace(0, 2, 9)
        np.testing.assert_allclose(seg.evaluate(t), f(t), atol=1e-12)

    def test_bspline_shapes(self):
        """Test 2, 3 and 4 control point evaluation."""
        two = BSplineSegment(np.array([[0.0, 0.0], [1.0, 2.0]]))
        assert two.evaluate(0.5) == pytest.approx(1.0)

        three = BSplineSegment(np.array([[0.0, 0.0], [1.0, 2.0], [2.0, 0.0]]))
        assert three.evaluate(1.0) == pytest.approx(2.0)
        assert three.evaluate(0.5) == pytest.approx(1.0)

        four = BSplineSegment(np.array([[0.0, 1.0], [1.0, 1.0], [2.0, 1.0], [3.0, 1.0]]))
        np.testing.assert_allclose(four.evaluate(np.linspace(0, 3, 7)), np.ones(7))

    def test_bspline_pinned_boundaries(self):
        """Test that B-spline boundaries equal the end control values."""
        points = np.array([[0.0, 0.0], [1.0, 3.0], [2.0, -1.0], [3.0, 2.0]])
        seg = BSplineSegment(points)
        assert seg.evaluate(0.0) == 0.0
        assert seg.evaluate(3.0) == 2.0
        assert seg.start_time == 0.0 and seg.end_time == 3.0
        assert seg.n_control_points == 4

    def test_bspline_validation(self):
        with pytest.raises(ValueError, match="shape"):
            BSplineSegment(np.zeros(4))
        with pytest.raises(ValueError, match="At least 2"):
            BSplineSegment(np.zeros((1, 2)))

    def test_bspline_immutable(self):
        seg = BSplineSegment(np.array([[0.0, 0.0], [1.0, 1.0]]))
        with pytest.raises(ValueError):
            seg.control_points[0, 1] = 5.0

    def test_evaluation_idempotent(self):
        """Test that repeated evaluation is bit-identical."""
        seg = BezierSegment(0.0, 0.3, 1.0, -0.7, 1.1, 2.2)
        first = seg.evaluate(0.37)
        for _ in range(10):
            assert seg.evaluate(0.37) == first


class TestCompressedCurve:
    """Tests for the piecewise evaluator."""

    def _curve(self):
        return CompressedCurve([
            LinearSegment(0.0, 0.0, 1.0, 1.0),
            LinearSegment(1.0, 1.0, 2.0, 0.0),
            BezierSegment(2.0, 0.0, 3.0, 1.0),
        ])

    def test_lookup(self):
        """Test segment lookup is half-open except the last."""
        curve = self._curve()
        assert curve.segment_index(0.5) == 0
        assert curve.segment_index(1.0) == 1
        assert curve.segment_index(3.0) == 2
        assert curve.segment_index(-5.0) == 0
        assert curve.segment_index(10.0) == 2

    def test_evaluate(self):
        """Test scalar and array evaluation agree."""
        curve = self._curve()
        t = np.linspace(-1, 4, 21)
        expected = [curve.evaluate(float(ti)) for ti in t]
        np.testing.assert_allclose(curve.evaluate(t), expected)
        assert curve(0.5) == 0.5
        assert curve(-1.0) == 0.0
        assert curve(4.0) == 1.0

    def test_to_samples(self):
        curve = self._curve()
        samples = curve.to_samples(7)
        assert samples.n_samples == 7
        assert samples.t_start == 0.0 and samples.t_end == 3.0
        with pytest.raises(ValueError):
            curve.to_samples(0)

    def test_errors(self):
        curve = CompressedCurve([LinearSegment(0.0, 0.0, 2.0, 2.0)])
        series = TimeSeries([0.0, 1.0, 2.0], [0.0, 1.5, 2.0])
        assert curve.max_error(series) == pytest.approx(0.5)
        assert curve.mean_error(series) == pytest.approx(0.5 / 3)

    def test_validation(self):
        """Test empty, overlapping and non-segment inputs."""
        with pytest.raises(ValueError, match="empty"):
            CompressedCurve([])
        with pytest.raises(ValueError, match="overlap"):
            CompressedCurve([LinearSegment(0.0, 0.0, 2.0, 1.0), LinearSegment(1.0, 0.0, 3.0, 1.0)])
        with pytest.raises(TypeError):
            CompressedCurve([(0.0, 1.0)])

    def test_concatenate(self):
        a = CompressedCurve([LinearSegment(0.0, 0.0, 1.0, 1.0)])
        b = CompressedCurve([LinearSegment(1.0, 1.0, 2.0, 0.0)])
        joined = CompressedCurve.concatenate([a, b])
        assert joined.n_segments == 2
        assert joined.curve_types == [CurveType.LINEAR, CurveType.LINEAR]
