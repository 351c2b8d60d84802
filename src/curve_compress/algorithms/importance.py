"""Per-sample importance scoring.

The importance of an interior sample combines four salience terms, each
normalized to [0, 1]:

- curvature: turning angle between the incoming and outgoing chords / pi
- change rate: central-difference slope magnitude / global value range
- local variance: variance in a +-min(5, n/10) window / global variance
- extremum prominence: for a strict local max/min, the smaller adjacent
  delta / global value range

The weighted sum is not renormalized. Weights summing to about 1 give a
score in [0, 1]; larger weights are tolerated and simply boost the score.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto

import numpy as np

from ..core.numeric import EPSILON, normalize_vector
from ..curves.samples import SampleData, TimeSeries, as_time_series


class DataType(Enum):
    """Kind of signal being compressed; selects an importance weight preset."""
    ANIMATION = auto()
    SENSOR_DATA = auto()
    FINANCIAL_DATA = auto()
    CUSTOM = auto()


@dataclass(frozen=True)
class ImportanceWeights:
    """Weights of the four importance terms.

    Attributes:
        curvature: Weight of the turning-angle term.
        change_rate: Weight of the normalized slope term.
        local_variance: Weight of the local irregularity term.
        extreme_value: Weight of the extremum prominence term.
    """
    curvature: float = 0.4
    change_rate: float = 0.25
    local_variance: float = 0.2
    extreme_value: float = 0.15

    def __post_init__(self) -> None:
        for name in ('curvature', 'change_rate', 'local_variance', 'extreme_value'):
            value = getattr(self, name)
            if not np.isfinite(value) or value < 0:
                raise ValueError(f"{name} weight must be non-negative, but got {value}")

    @property
    def total(self) -> float:
        return self.curvature + self.change_rate + self.local_variance + self.extreme_value

    def normalized(self) -> ImportanceWeights:
        """Copy of the weights scaled to sum to 1 (unchanged if all zero)."""
        total = self.total
        if total <= 0:
            return self
        return replace(
            self,
            curvature=self.curvature / total,
            change_rate=self.change_rate / total,
            local_variance=self.local_variance / total,
            extreme_value=self.extreme_value / total,
        )

    def as_array(self) -> np.ndarray:
        return np.array([
            self.curvature, self.change_rate, self.local_variance, self.extreme_value
        ])

    @classmethod
    def default(cls) -> ImportanceWeights:
        return cls()

    @classmethod
    def for_animation(cls) -> ImportanceWeights:
        return cls(curvature=0.5, change_rate=0.2, local_variance=0.15, extreme_value=0.15)

    @classmethod
    def for_sensor_data(cls) -> ImportanceWeights:
        return cls(curvature=0.3, change_rate=0.15, local_variance=0.35, extreme_value=0.2)

    @classmethod
    def for_financial_data(cls) -> ImportanceWeights:
        return cls(curvature=0.25, change_rate=0.3, local_variance=0.15, extreme_value=0.3)

    @classmethod
    def for_data_type(cls, data_type: DataType) -> ImportanceWeights:
        """Preset for a data type; ``CUSTOM`` maps to the default weights."""
        presets = {
            DataType.ANIMATION: cls.for_animation,
            DataType.SENSOR_DATA: cls.for_sensor_data,
            DataType.FINANCIAL_DATA: cls.for_financial_data,
        }
        return presets.get(data_type, cls.default)()


def resolve_weights(
    data_type: DataType = DataType.CUSTOM,
    weights: ImportanceWeights | None = None
) -> ImportanceWeights:
    """Explicit weights win; otherwise use the preset for ``data_type``."""
    if weights is not None:
        return weights
    return ImportanceWeights.for_data_type(data_type)


@dataclass(eq=False)
class ImportanceScorer:
    """Scores every sample of a series at once.

    Global statistics (value range, variance) are computed a single time,
    so scoring all samples is O(n) rather than O(n^2).

    Attributes:
        series: Samples to score.
        weights: Term weights.
    """
    series: TimeSeries
    weights: ImportanceWeights = field(default_factory=ImportanceWeights)

    _components: dict[str, np.ndarray] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.series = as_time_series(self.series)

    @property
    def components(self) -> dict[str, np.ndarray]:
        """Each normalized term for every sample (zero at the boundaries)."""
        if self._components is None:
            self._components = self._compute_components()
        return self._components

    def _compute_components(self) -> dict[str, np.ndarray]:
        t = self.series.times
        v = self.series.values
        n = len(v)

        terms = {
            'curvature': np.zeros(n),
            'change_rate': np.zeros(n),
            'local_variance': np.zeros(n),
            'extreme_value': np.zeros(n),
        }
        if n < 3:
            return terms

        interior = slice(1, n - 1)
        value_range = float(np.max(v) - np.min(v))
        global_variance = float(np.var(v))

        # Curvature: angle between consecutive chord directions
        points = np.column_stack([t, v])
        incoming = points[1:-1] - points[:-2]
        outgoing = points[2:] - points[1:-1]
        u1 = normalize_vector(incoming)
        u2 = normalize_vector(outgoing)
        dot = np.clip(np.sum(u1 * u2, axis=1), -1.0, 1.0)
        degenerate = (np.linalg.norm(incoming, axis=1) < EPSILON) | (
            np.linalg.norm(outgoing, axis=1) < EPSILON
        )
        terms['curvature'][interior] = np.where(degenerate, 0.0, np.arccos(dot) / np.pi)

        if value_range < EPSILON:
            return terms

        # Change rate: central difference over the value range
        span = t[2:] - t[:-2]
        delta = np.abs(v[2:] - v[:-2])
        safe_span = np.where(np.abs(span) < EPSILON, 1.0, span)
        rate = np.where(np.abs(span) < EPSILON, 0.0, delta / safe_span)
        terms['change_rate'][interior] = np.clip(rate / value_range, 0.0, 1.0)

        # Local variance relative to the global variance
        if global_variance > 0:
            w = min(5, n // 10)
            local = np.array([
                np.var(v[max(0, i - w):min(n, i + w + 1)]) for i in range(1, n - 1)
            ])
            terms['local_variance'][interior] = np.clip(local / global_variance, 0.0, 1.0)

        # Extremum prominence
        prev_delta = v[1:-1] - v[:-2]
        next_delta = v[1:-1] - v[2:]
        is_max = (prev_delta > 0) & (next_delta > 0)
        is_min = (prev_delta < 0) & (next_delta < 0)
        prominence = np.minimum(np.abs(prev_delta), np.abs(next_delta)) / value_range
        terms['extreme_value'][interior] = np.where(
            is_max | is_min, np.clip(prominence, 0.0, 1.0), 0.0
        )

        return terms

    def scores(self) -> np.ndarray:
        """Weighted importance of every sample, shape (n_samples,)."""
        c = self.components
        w = self.weights
        return (
            w.curvature * c['curvature']
            + w.change_rate * c['change_rate']
            + w.local_variance * c['local_variance']
            + w.extreme_value * c['extreme_value']
        )

    def score(self, index: int) -> float:
        """Weighted importance of one sample (0 for the first and last)."""
        n = self.series.n_samples
        if not -n <= index < n:
            raise IndexError(f"index {index} is out of range [0, {n - 1}]")
        return float(self.scores()[index])


def importance(
    samples: SampleData,
    index: int,
    weights: ImportanceWeights | None = None
) -> float:
    """Importance of the sample at ``index``.

    Boundary samples have no neighbours on one side and score 0. To score
    many samples of the same series, use :class:`ImportanceScorer` directly.

    Args:
        samples: Input samples.
        index: Sample index.
        weights: Term weights (defaults to ``ImportanceWeights.default()``).

    Returns:
        Non-negative importance score.
    """
    series = as_time_series(samples)
    if index <= 0 or index >= series.n_samples - 1:
        return 0.0
    scorer = ImportanceScorer(series, weights or ImportanceWeights.default())
    return scorer.score(index)
