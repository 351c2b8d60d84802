"""Compressed curve: an ordered sequence of segments and its evaluator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence

import numpy as np

from ..core.numeric import EPSILON
from .samples import SampleData, TimeSeries, as_time_series
from .segments import CurveSegment, CurveType


@dataclass
class CompressedCurve:
    """Piecewise curve reconstructing a compressed signal.

    Segments are sorted by start time and do not overlap. Segment ``i``
    covers ``[start_i, start_{i+1})``; the last segment is closed on the
    right. Outside the covered range the curve holds the first start value
    or the last end value.

    Attributes:
        segments: Ordered, non-empty list of curve segments.
    """
    segments: list[CurveSegment]

    _starts: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.segments = list(self.segments)
        if len(self.segments) == 0:
            raise ValueError("segments cannot be empty")

        for i, segment in enumerate(self.segments):
            if not isinstance(segment, CurveSegment):
                raise TypeError(
                    f"segments[{i}] must be a CurveSegment, got {type(segment).__name__}"
                )
            if segment.end_time < segment.start_time:
                raise ValueError(
                    f"segments[{i}] ends before it starts "
                    f"({segment.end_time} < {segment.start_time})"
                )

        for i in range(len(self.segments) - 1):
            if self.segments[i].end_time > self.segments[i + 1].start_time + EPSILON:
                raise ValueError(
                    f"segments[{i}] and segments[{i + 1}] overlap or are out of order"
                )

        self._starts = np.array([s.start_time for s in self.segments])

    @property
    def n_segments(self) -> int:
        """Number of segments."""
        return len(self.segments)

    @property
    def start_time(self) -> float:
        return self.segments[0].start_time

    @property
    def end_time(self) -> float:
        return self.segments[-1].end_time

    @property
    def curve_types(self) -> list[CurveType]:
        return [s.curve_type for s in self.segments]

    def segment_index(self, time: float) -> int:
        """Index of the segment responsible for ``time``."""
        i = int(np.searchsorted(self._starts, time, side='right')) - 1
        return min(max(i, 0), self.n_segments - 1)

    def evaluate(self, time: float | np.ndarray) -> float | np.ndarray:
        """Evaluate the curve at given time(s).

        Args:
            time: Time point(s).

        Returns:
            Curve value(s); a float for scalar input.
        """
        t = np.asarray(time, dtype=float)
        if t.ndim == 0:
            return self.segments[self.segment_index(float(t))].evaluate(float(t))

        flat = t.ravel()
        indices = np.searchsorted(self._starts, flat, side='right') - 1
        indices = np.clip(indices, 0, self.n_segments - 1)

        result = np.empty_like(flat)
        for i in np.unique(indices):
            mask = indices == i
            result[mask] = self.segments[i].evaluate(flat[mask])
        return result.reshape(t.shape)

    def to_samples(self, sample_count: int) -> TimeSeries:
        """Sample the curve at ``sample_count`` evenly spaced times.

        Args:
            sample_count: Number of output samples (at least 1).

        Returns:
            TimeSeries spanning the covered time range.
        """
        if isinstance(sample_count, bool) or not isinstance(sample_count, (int, np.integer)):
            raise TypeError(
                f"sample_count must be an integer, got {type(sample_count).__name__}"
            )
        if sample_count < 1:
            raise ValueError(f"sample_count must be at least 1, but got {sample_count}")

        times = np.linspace(self.start_time, self.end_time, int(sample_count))
        return TimeSeries(times, self.evaluate(times))

    def errors(self, samples: SampleData) -> np.ndarray:
        """Absolute reconstruction error at each sample."""
        series = as_time_series(samples)
        return np.abs(series.values - self.evaluate(series.times))

    def max_error(self, samples: SampleData) -> float:
        return float(np.max(self.errors(samples)))

    def mean_error(self, samples: SampleData) -> float:
        return float(np.mean(self.errors(samples)))

    @classmethod
    def concatenate(cls, curves: Sequence[CompressedCurve]) -> CompressedCurve:
        """Join curves covering consecutive time ranges."""
        segments: list[CurveSegment] = []
        for curve in curves:
            segments.extend(curve.segments)
        return cls(segments)

    def __call__(self, time: float | np.ndarray) -> float | np.ndarray:
        return self.evaluate(time)

    def __len__(self) -> int:
        return self.n_segments

    def __iter__(self) -> Iterator[CurveSegment]:
        return iter(self.segments)

    def __repr__(self) -> str:
        return (
            f"CompressedCurve(n_segments={self.n_segments}, "
            f"t=[{self.start_time:.4f}, {self.end_time:.4f}])"
        )
