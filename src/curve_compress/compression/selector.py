"""Data characteristic analysis and compression method selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from scipy.signal import savgol_filter

from ..algorithms.importance import DataType
from ..core.numeric import EPSILON, safe_divide
from ..curves.samples import SampleData, TimeSeries, as_time_series
from .params import CompressionMethod

logger = logging.getLogger(__name__)

SAVGOL_WINDOW = 11
SAVGOL_POLYORDER = 3


@dataclass(frozen=True)
class DataCharacteristics:
    """Descriptive summary of a series.

    Attributes:
        smoothness: 1 minus the mean turning angle between consecutive
            chords divided by pi; 1 for a straight line.
        complexity: Standard deviation of the second differences over the
            value range, clipped to [0, 1].
        noise_level: Standard deviation of the residual against a
            Savitzky-Golay smoothing, over the value range.
        variability: Coefficient of variation (std / |mean|); 0 when the
            mean is zero.
        temporal_density: Samples per unit time (0 for a zero duration).
        data_type_guess: Signal kind suggested by the other statistics.
        n_samples: Number of samples analysed.
    """
    smoothness: float
    complexity: float
    noise_level: float
    variability: float
    temporal_density: float
    data_type_guess: DataType
    n_samples: int

    def to_dict(self) -> dict:
        return {
            'smoothness': self.smoothness,
            'complexity': self.complexity,
            'noise_level': self.noise_level,
            'variability': self.variability,
            'temporal_density': self.temporal_density,
            'data_type_guess': self.data_type_guess.name,
            'n_samples': self.n_samples,
        }


@dataclass(frozen=True)
class AlgorithmSelection:
    """Outcome of :func:`select_best_algorithm`.

    Attributes:
        primary: Highest scoring method.
        fallback: Second highest scoring method.
        confidence: Relative margin of the primary over the fallback, in [0, 1].
        scores: Score of every method.
    """
    primary: CompressionMethod
    fallback: CompressionMethod
    confidence: float
    scores: dict[CompressionMethod, float] = field(default_factory=dict)


def _smoothness(series: TimeSeries) -> float:
    if series.n_samples < 3:
        return 1.0
    angles = np.arctan2(np.diff(series.values), np.diff(series.times))
    return float(1.0 - np.mean(np.abs(np.diff(angles))) / np.pi)


def _noise_level(series: TimeSeries, value_range: float) -> float:
    n = series.n_samples
    window = min(SAVGOL_WINDOW, n if n % 2 == 1 else n - 1)
    if window < SAVGOL_POLYORDER + 2 or value_range < EPSILON:
        return 0.0
    smoothed = savgol_filter(series.values, window, SAVGOL_POLYORDER)
    return float(np.std(series.values - smoothed) / value_range)


def _guess_data_type(smoothness: float, complexity: float, noise: float) -> DataType:
    if noise > 0.1:
        return DataType.SENSOR_DATA
    if smoothness > 0.8 and noise < 0.02:
        return DataType.ANIMATION
    if complexity > 0.3:
        return DataType.FINANCIAL_DATA
    return DataType.CUSTOM


def analyze_data_characteristics(samples: SampleData) -> DataCharacteristics:
    """Summarise the shape of a series.

    Args:
        samples: Input samples.

    Returns:
        DataCharacteristics of the series.
    """
    series = as_time_series(samples)
    values = series.values
    value_range = series.value_range

    smoothness = _smoothness(series)

    complexity = 0.0
    if series.n_samples >= 3 and value_range >= EPSILON:
        complexity = float(np.clip(np.std(np.diff(values, n=2)) / value_range, 0.0, 1.0))

    noise = _noise_level(series, value_range)
    variability = safe_divide(float(np.std(values)), abs(float(np.mean(values))))
    density = safe_divide(float(series.n_samples), series.duration)

    characteristics = DataCharacteristics(
        smoothness=smoothness,
        complexity=complexity,
        noise_level=noise,
        variability=variability,
        temporal_density=density,
        data_type_guess=_guess_data_type(smoothness, complexity, noise),
        n_samples=series.n_samples,
    )
    logger.debug("Analysed %d samples: %s", series.n_samples, characteristics)
    return characteristics


def score_methods(characteristics: DataCharacteristics) -> dict[CompressionMethod, float]:
    """Suitability score of each method for the given characteristics.

    RDP variants favour simple or noisy data; the direct fitters favour
    smooth, clean data. A new dictionary is built on every call.
    """
    s = characteristics.smoothness
    c = characteristics.complexity
    noise = float(np.clip(characteristics.noise_level * 10.0, 0.0, 1.0))

    return {
        CompressionMethod.RDP_LINEAR: 0.4 * (1 - c) + 0.4 * noise + 0.2 * (1 - s),
        CompressionMethod.RDP_BSPLINE: 0.3 * s + 0.3 * c + 0.2 * noise + 0.2 * (1 - c),
        CompressionMethod.RDP_BEZIER: 0.3 * s + 0.3 * (1 - c) + 0.2 * noise + 0.1 * (1 - noise),
        CompressionMethod.BSPLINE_DIRECT: 0.4 * s + 0.3 * c + 0.3 * (1 - noise),
        CompressionMethod.BEZIER_DIRECT: 0.5 * s + 0.3 * (1 - noise) + 0.2 * (1 - c),
    }


def select_best_algorithm(
    data: SampleData | DataCharacteristics
) -> AlgorithmSelection:
    """Pick a primary and a fallback compression method.

    Args:
        data: Samples to analyse, or characteristics already computed.

    Returns:
        AlgorithmSelection. Ties are broken in favour of ``BEZIER_DIRECT``.
    """
    if isinstance(data, DataCharacteristics):
        characteristics = data
    else:
        characteristics = analyze_data_characteristics(data)

    scores = score_methods(characteristics)
    preference = [CompressionMethod.BEZIER_DIRECT] + [
        m for m in CompressionMethod if m != CompressionMethod.BEZIER_DIRECT
    ]
    ranked = sorted(preference, key=lambda m: scores[m], reverse=True)
    primary, fallback = ranked[0], ranked[1]

    best = scores[primary]
    confidence = float(np.clip(safe_divide(best - scores[fallback], best), 0.0, 1.0))

    logger.debug("Selected %s (fallback %s, confidence %.3f)", primary.name, fallback.name, confidence)
    return AlgorithmSelection(primary, fallback, confidence, scores)
