"""Signal statistics shared by the control point estimators."""

from __future__ import annotations

import numpy as np
from scipy import stats

from ..core.numeric import normalize_vector
from ..curves.samples import TimeSeries

# Value ranges below this are treated as constant when histogramming
ENTROPY_RANGE_EPSILON = 1e-4
MAX_HISTOGRAM_BINS = 20


def histogram_bins(n_samples: int) -> int:
    """Bin count for an entropy histogram: ``clip(n // 5, 1, 20)``."""
    return int(np.clip(n_samples // 5, 1, MAX_HISTOGRAM_BINS))


def shannon_entropy(series: TimeSeries) -> float:
    """Base-2 Shannon entropy of the value histogram.

    Values map to bin ``int((v - min) / range * (bins - 1))``, so only the
    maximum lands in the last bin. Constant or single-sample series have
    zero entropy.
    """
    if series.n_samples <= 1:
        return 0.0

    values = series.values
    low = float(np.min(values))
    value_range = float(np.max(values)) - low
    if value_range < ENTROPY_RANGE_EPSILON:
        return 0.0

    bins = histogram_bins(series.n_samples)
    indices = ((values - low) / value_range * (bins - 1)).astype(int)
    counts = np.bincount(np.clip(indices, 0, bins - 1), minlength=bins)
    return float(stats.entropy(counts, base=2))


def total_variation(series: TimeSeries) -> float:
    """Sum of absolute differences between consecutive values."""
    return float(np.sum(np.abs(np.diff(series.values))))


def noise_level(series: TimeSeries) -> float:
    """Standard deviation of the first differences (0 below three samples)."""
    if series.n_samples < 3:
        return 0.0
    return float(np.std(np.diff(series.values)))


def local_curvatures(series: TimeSeries) -> np.ndarray:
    """Turning angle in radians at every interior sample."""
    if series.n_samples < 3:
        return np.zeros(0)
    points = series.as_array()
    u1 = normalize_vector(points[1:-1] - points[:-2])
    u2 = normalize_vector(points[2:] - points[1:-1])
    return np.arccos(np.clip(np.sum(u1 * u2, axis=1), -1.0, 1.0))


def interpolation_residuals(series: TimeSeries, control: TimeSeries) -> np.ndarray:
    """Residuals of the samples against linear interpolation of ``control``."""
    if control.n_samples == 1:
        return series.values - control.values[0]
    return series.values - np.interp(series.times, control.times, control.values)


def mean_squared_error(series: TimeSeries, control: TimeSeries) -> float:
    return float(np.mean(interpolation_residuals(series, control) ** 2))


def max_abs_error(series: TimeSeries, control: TimeSeries) -> float:
    return float(np.max(np.abs(interpolation_residuals(series, control))))
