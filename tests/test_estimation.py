"""Tests for control point count estimators."""

import numpy as np
import pytest

from curve_compress.algorithms import RDPSimplifier, approximate_with_fixed_control_points
from curve_compress.curves import TimeSeries
from curve_compress.estimation import (
    EstimationMethod,
    EstimationResult,
    estimate_by_elbow,
    estimate_by_curvature,
    estimate_by_entropy,
    estimate_by_rdp_adaptive,
    estimate_by_total_variation,
    estimate_by_error_bound,
    estimate_by_statistics,
    estimate,
    estimate_all,
    shannon_entropy,
    total_variation,
    noise_level,
    local_curvatures,
)
from curve_compress.estimation.metrics import histogram_bins, max_abs_error


def sine_series(n=101):
    t = np.linspace(0, 1, n)
    return TimeSeries(t, np.sin(2 * np.pi * t))


def constant_series(n=60):
    return TimeSeries(np.linspace(0, 1, n), np.full(n, 1.5))


class TestMetrics:
    """Tests for signal statistics."""

    def test_histogram_bins(self):
        assert histogram_bins(3) == 1
        assert histogram_bins(50) == 10
        assert histogram_bins(1000) == 20

    def test_entropy(self):
        """Test constant and two-level signals."""
        assert shannon_entropy(constant_series()) == 0.0
        values = np.array([0.0, 1.0] * 25)
        series = TimeSeries(np.arange(50.0), values)
        assert shannon_entropy(series) == pytest.approx(1.0)

    def test_total_variation(self):
        series = TimeSeries([0.0, 1.0, 2.0, 3.0], [0.0, 2.0, 1.0, 1.5])
        assert total_variation(series) == pytest.approx(3.5)

    def test_noise_level(self):
        assert noise_level(TimeSeries([0.0, 1.0], [0.0, 5.0])) == 0.0
        line = TimeSeries(np.arange(10.0), 2 * np.arange(10.0))
        assert noise_level(line) == pytest.approx(0.0)

    def test_curvatures(self):
        """Test a right-angle corner and a straight run."""
        series = TimeSeries([0.0, 1.0, 2.0], [0.0, 1.0, 0.0])
        np.testing.assert_allclose(local_curvatures(series), [np.pi / 2])
        line = TimeSeries(np.arange(5.0), np.arange(5.0))
        np.testing.assert_allclose(local_curvatures(line), np.zeros(3), atol=1e-7)


class TestEstimators:
    """Tests for the individual estimators."""

    @pytest.mark.parametrize("estimator", [
        estimate_by_elbow,
        estimate_by_curvature,
        estimate_by_entropy,
        estimate_by_rdp_adaptive,
        estimate_by_total_variation,
        estimate_by_error_bound,
        estimate_by_statistics,
    ])
    def test_within_bounds(self, estimator):
        """Test that every recommendation lies in [min_points, max_points]."""
        result = estimator(sine_series(), 0.01, min_points=3, max_points=30)
        assert isinstance(result, EstimationResult)
        assert 3 <= result.optimal_point_count <= 30
        assert result.method_name

    def test_max_points_clipped_to_samples(self):
        series = sine_series(8)
        for result in estimate_all(series, 0.001, max_points=50).values():
            assert result.optimal_point_count <= 8

    def test_validation(self):
        with pytest.raises(ValueError, match="min_points"):
            estimate_by_error_bound(sine_series(), 0.01, min_points=1)
        with pytest.raises(ValueError, match="max_points"):
            estimate_by_error_bound(sine_series(), 0.01, min_points=10, max_points=5)
        with pytest.raises(ValueError, match="tolerance"):
            estimate_by_error_bound(sine_series(), 0.0)

    def test_constant_signal(self):
        """Test that estimators with a zero baseline return min_points."""
        series = constant_series()
        assert estimate_by_entropy(series, 0.01).optimal_point_count == 2
        assert estimate_by_total_variation(series, 0.01).optimal_point_count == 2
        assert estimate_by_error_bound(series, 0.01).optimal_point_count == 2
        assert estimate_by_rdp_adaptive(series, 0.01).optimal_point_count == 2

    def test_error_bound_meets_tolerance(self):
        """Test that the chosen count satisfies the tolerance."""
        series = sine_series()
        result = estimate_by_error_bound(series, 0.05)
        assert result.optimal_point_count < 50
        control = approximate_with_fixed_control_points(series, result.optimal_point_count)
        assert max_abs_error(series, control) <= 0.05
        assert result.metrics['max_error'] == pytest.approx(result.score)

    def test_error_bound_unreachable(self):
        """Test that max_points is returned when no count is good enough."""
        rng = np.random.default_rng(3)
        series = TimeSeries(np.linspace(0, 1, 200), rng.normal(size=200))
        result = estimate_by_error_bound(series, 1e-6, max_points=20)
        assert result.optimal_point_count == 20

    def test_rdp_adaptive_between_sweep_extremes(self):
        series = sine_series()
        tol = 0.01
        result = estimate_by_rdp_adaptive(series, tol, max_points=101)
        loose = len(RDPSimplifier(tol * 10).simplify(series))
        tight = len(RDPSimplifier(tol * 0.1).simplify(series))
        assert loose <= result.optimal_point_count <= tight

    def test_statistical_formula(self):
        """Test the SNR based count against a hand computation."""
        series = sine_series()
        std = np.std(series.values)
        noise = np.std(np.diff(series.values))
        snr = std / (noise + 1e-4)
        upper = max(2, min(101 // 2, 200))
        expected = int(np.clip(np.rint(10 + 5 * snr), min(10, upper), upper))
        result = estimate_by_statistics(series, 0.01, max_points=100)
        assert result.optimal_point_count == expected
        assert result.score == pytest.approx(snr)

    def test_statistical_small_series(self):
        """Test the upper limit for short series."""
        series = sine_series(6)
        result = estimate_by_statistics(series, 0.01)
        assert result.optimal_point_count == 3

    def test_elbow_metrics(self):
        result = estimate_by_elbow(sine_series(), 0.01, max_points=20)
        assert set(result.metrics) == {'error', 'second_derivative'}
        assert result.score == result.metrics['error']

    def test_curvature_corner(self):
        """Test that a single sharp corner needs few extra points."""
        t = np.linspace(0, 2, 21)
        series = TimeSeries(t, np.abs(t - 1.0))
        result = estimate_by_curvature(series, 0.01)
        assert result.optimal_point_count == 2
        assert result.metrics['significant_points'] == 1.0


class TestDispatch:
    """Tests for estimator dispatch."""

    def test_estimate_all_keys(self):
        results = estimate_all(sine_series(), 0.01)
        assert set(results) == {
            'elbow', 'curvature', 'entropy', 'rdp_adaptive',
            'total_variation', 'error_bound', 'statistical',
        }

    def test_estimate_matches_direct_call(self):
        series = sine_series()
        via_dispatch = estimate(series, EstimationMethod.TOTAL_VARIATION, 0.01)
        direct = estimate_by_total_variation(series, 0.01)
        assert via_dispatch == direct

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            estimate(sine_series(), "elbow", 0.01)

    def test_repr(self):
        result = estimate_by_statistics(sine_series(), 0.01)
        assert "Statistical" in repr(result)
