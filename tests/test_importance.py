"""Tests for importance scoring."""

import numpy as np
import pytest

from curve_compress.algorithms import (
    DataType,
    ImportanceWeights,
    ImportanceScorer,
    importance,
    resolve_weights,
)
from curve_compress.curves import TimeSeries


class TestImportanceWeights:
    """Tests for weight presets."""

    def test_presets(self):
        """Test preset constants."""
        assert ImportanceWeights.default() == ImportanceWeights(0.4, 0.25, 0.2, 0.15)
        assert ImportanceWeights.for_animation() == ImportanceWeights(0.5, 0.2, 0.15, 0.15)
        assert ImportanceWeights.for_sensor_data() == ImportanceWeights(0.3, 0.15, 0.35, 0.2)
        assert ImportanceWeights.for_financial_data() == ImportanceWeights(0.25, 0.3, 0.15, 0.3)

    def test_for_data_type(self):
        assert ImportanceWeights.for_data_type(DataType.SENSOR_DATA) == ImportanceWeights.for_sensor_data()
        assert ImportanceWeights.for_data_type(DataType.CUSTOM) == ImportanceWeights.default()

    def test_explicit_weights_win(self):
        """Test that explicit weights override the data type preset."""
        custom = ImportanceWeights(1.0, 0.0, 0.0, 0.0)
        assert resolve_weights(DataType.ANIMATION, custom) is custom
        assert resolve_weights(DataType.ANIMATION) == ImportanceWeights.for_animation()

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="curvature"):
            ImportanceWeights(curvature=-0.1)

    def test_normalized(self):
        w = ImportanceWeights(2.0, 1.0, 1.0, 0.0).normalized()
        assert w.total == pytest.approx(1.0)
        assert w.curvature == pytest.approx(0.5)


class TestImportanceScorer:
    """Tests for per-sample importance."""

    def test_boundaries_score_zero(self):
        t = np.linspace(0, 1, 20)
        series = TimeSeries(t, np.sin(6 * t))
        scores = ImportanceScorer(series).scores()
        assert scores[0] == 0.0
        assert scores[-1] == 0.0
        assert importance(series, 0) == 0.0
        assert importance(series, 19) == 0.0

    def test_constant_signal(self):
        """Test that every sample of a constant signal scores 0."""
        series = TimeSeries(np.linspace(0, 1, 50), np.full(50, 3.0))
        np.testing.assert_array_equal(ImportanceScorer(series).scores(), np.zeros(50))

    def test_peak_scores_highest(self):
        """Test that a sharp spike is the most important sample."""
        values = np.zeros(21)
        values[10] = 1.0
        series = TimeSeries(np.linspace(0, 2, 21), values)
        scores = ImportanceScorer(series).scores()
        assert int(np.argmax(scores)) == 10

    def test_components_in_unit_range(self):
        rng = np.random.default_rng(0)
        series = TimeSeries(np.linspace(0, 1, 100), rng.normal(size=100))
        for name, term in ImportanceScorer(series).components.items():
            assert np.all(term >= 0.0) and np.all(term <= 1.0), name

    def test_score_bounded_by_weight_total(self):
        """Test that weights summing to 1 keep scores in [0, 1]."""
        rng = np.random.default_rng(1)
        series = TimeSeries(np.linspace(0, 1, 100), rng.normal(size=100))
        scores = ImportanceScorer(series, ImportanceWeights.default()).scores()
        assert np.all(scores >= 0.0) and np.all(scores <= 1.0 + 1e-12)

    def test_single_index_matches_vector(self):
        t = np.linspace(0, 1, 30)
        series = TimeSeries(t, t ** 2 + np.sin(9 * t))
        scores = ImportanceScorer(series).scores()
        assert importance(series, 7) == pytest.approx(scores[7])

    def test_duplicate_times(self):
        """Test that zero-length chords do not produce NaN."""
        series = TimeSeries([0.0, 1.0, 1.0, 2.0], [0.0, 1.0, 1.0, 0.0])
        scores = ImportanceScorer(series).scores()
        assert np.all(np.isfinite(scores))

    def test_score_index_error(self):
        series = TimeSeries([0.0, 1.0, 2.0], [0.0, 1.0, 0.0])
        with pytest.raises(IndexError):
            ImportanceScorer(series).score(5)
