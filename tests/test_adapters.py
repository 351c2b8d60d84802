"""Tests for host curve adapters."""

import numpy as np
import pytest
from scipy.interpolate import CubicHermiteSpline

from curve_compress.adapters import (
    HostCurveAdapter,
    KeyframeCurveAdapter,
    keyframe_curve,
    compressed_from_host_curve,
)
from curve_compress.algorithms import TangentMode
from curve_compress.compression import compress
from curve_compress.curves import TimeSeries, CompressedCurve, LinearSegment, CurveType


def keys():
    t = np.linspace(0, 2, 9)
    return TimeSeries(t, np.sin(np.pi * t))


class TestKeyframeCurve:
    """Tests for building keyframe curves."""

    def test_passes_through_keys(self):
        series = keys()
        curve = keyframe_curve(series)
        assert isinstance(curve, CubicHermiteSpline)
        np.testing.assert_allclose(curve(series.times), series.values, atol=1e-12)

    def test_linear_data(self):
        """Test that a line is reproduced between keys for every mode."""
        t = np.linspace(0, 1, 5)
        series = TimeSeries(t, 2 * t - 1)
        for mode in (TangentMode.LINEAR, TangentMode.SMOOTH, TangentMode.CATMULL_ROM):
            curve = keyframe_curve(series, mode)
            fine = np.linspace(0, 1, 41)
            np.testing.assert_allclose(curve(fine), 2 * fine - 1, atol=1e-12)

    def test_requires_strictly_increasing_times(self):
        with pytest.raises(ValueError, match="strictly"):
            keyframe_curve(TimeSeries([0.0, 1.0, 1.0], [0.0, 1.0, 2.0]))

    def test_requires_two_keys(self):
        with pytest.raises(ValueError):
            keyframe_curve(TimeSeries([0.0], [1.0]))


class TestKeyframeCurveAdapter:
    """Tests for the adapter round trip."""

    def test_satisfies_protocol(self):
        assert isinstance(KeyframeCurveAdapter(), HostCurveAdapter)

    def test_from_host_curve(self):
        """Test even sampling across the key range."""
        adapter = KeyframeCurveAdapter()
        host = keyframe_curve(keys())
        series = adapter.from_host_curve(host, 33)
        assert series.n_samples == 33
        assert series.t_start == 0.0
        assert series.t_end == 2.0
        np.testing.assert_allclose(np.diff(series.times), np.full(32, 2.0 / 32))

    def test_to_host_curve(self):
        """Test that a compressed curve is keyed at its own samples."""
        adapter = KeyframeCurveAdapter()
        compressed = CompressedCurve([LinearSegment(0.0, 0.0, 1.0, 2.0)])
        host = adapter.to_host_curve(compressed, 11)
        np.testing.assert_allclose(host.x, np.linspace(0, 1, 11))
        np.testing.assert_allclose(host(np.array([0.25, 0.5])), [0.5, 1.0], atol=1e-12)

    def test_round_trip(self):
        """Test sampling, compressing and rebuilding a host curve."""
        adapter = KeyframeCurveAdapter()
        host = keyframe_curve(keys())
        series = adapter.from_host_curve(host, 200)
        compressed = compress(series, 0.01)
        rebuilt = adapter.to_host_curve(compressed, 200)
        assert np.max(np.abs(rebuilt(series.times) - series.values)) <= 0.012

    @pytest.mark.parametrize("count", [1, 0, 10001])
    def test_sample_count_range(self, count):
        adapter = KeyframeCurveAdapter()
        host = keyframe_curve(keys())
        with pytest.raises(ValueError):
            adapter.from_host_curve(host, count)
        with pytest.raises(ValueError):
            adapter.to_host_curve(CompressedCurve([LinearSegment(0.0, 0.0, 1.0, 1.0)]), count)

    def test_sample_count_limits_accepted(self):
        adapter = KeyframeCurveAdapter()
        host = keyframe_curve(keys())
        assert adapter.from_host_curve(host, 2).n_samples == 2
        assert adapter.from_host_curve(host, 10000).n_samples == 10000

    def test_zero_duration_rejected(self):
        adapter = KeyframeCurveAdapter()
        compressed = CompressedCurve([LinearSegment(1.0, 0.0, 1.0, 0.0)])
        with pytest.raises(ValueError, match="zero-length"):
            adapter.to_host_curve(compressed, 10)


class TestCompressedFromHostCurve:
    """Tests for lossless keyframe conversion."""

    def test_exact_reproduction(self):
        host = keyframe_curve(keys(), TangentMode.CATMULL_ROM)
        curve = compressed_from_host_curve(host)
        assert curve.n_segments == 8
        assert set(curve.curve_types) == {CurveType.BEZIER}
        fine = np.linspace(0, 2, 301)
        np.testing.assert_allclose(curve.evaluate(fine), host(fine), atol=1e-12)
