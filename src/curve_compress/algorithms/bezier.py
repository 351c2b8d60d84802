"""Adaptive cubic Bezier (Hermite form) fitting with estimated tangents."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.numeric import is_valid_time_interval, safe_divide
from ..core.validation import validate_index_range, validate_point_count, validate_tolerance
from ..curves.compressed import CompressedCurve
from ..curves.samples import SampleData, TimeSeries, as_time_series
from ..curves.segments import BezierSegment, CurveSegment
from .bspline import linear_segment, max_segment_error

logger = logging.getLogger(__name__)

# Number of neighbouring intervals used for a tangent estimate
TANGENT_WINDOW = 3


def _weighted_slope(series: TimeSeries, pairs: list[tuple[int, int]]) -> float:
    weighted = 0.0
    total = 0.0
    for i, (a, b) in enumerate(pairs):
        dt = series.times[b] - series.times[a]
        if not is_valid_time_interval(dt):
            continue
        weight = 1.0 / (i + 1)
        weighted += weight * (series.values[b] - series.values[a]) / dt
        total += weight
    return safe_divide(weighted, total)


def estimate_in_tangent(series: TimeSeries, start: int, end: int) -> float:
    """Slope at the start of ``start..end`` from the first few intervals.

    Uses up to three leading intervals, weighted 1, 1/2, 1/3 from the start
    outward. Intervals with no positive duration are skipped. Ranges of
    fewer than three samples give 0.
    """
    if end - start < 2:
        return 0.0
    count = min(TANGENT_WINDOW, end - start)
    pairs = [(start + i, start + i + 1) for i in range(count)]
    return _weighted_slope(series, pairs)


def estimate_out_tangent(series: TimeSeries, start: int, end: int) -> float:
    """Slope at the end of ``start..end``; mirror of :func:`estimate_in_tangent`."""
    if end - start < 2:
        return 0.0
    count = min(TANGENT_WINDOW, end - start)
    pairs = [(end - i - 1, end - i) for i in range(count)]
    return _weighted_slope(series, pairs)


def fit_bezier_segment(series: TimeSeries, start: int, end: int) -> BezierSegment:
    """Hermite candidate pinned to samples ``start`` and ``end``."""
    return BezierSegment(
        start_time=float(series.times[start]),
        start_value=float(series.values[start]),
        end_time=float(series.times[end]),
        end_value=float(series.values[end]),
        in_tangent=estimate_in_tangent(series, start, end),
        out_tangent=estimate_out_tangent(series, start, end),
    )


@dataclass
class AdaptiveBezierFitter:
    """Recursive bisection fitter emitting cubic Bezier segments.

    Attributes:
        tolerance: Maximum accepted absolute error per segment.
        max_segments: Optional cap on emitted segments. Once reached, every
            remaining range becomes a single linear segment.
    """
    tolerance: float = 0.01
    max_segments: int | None = None

    def __post_init__(self) -> None:
        self.tolerance = validate_tolerance(self.tolerance)
        if self.max_segments is not None and self.max_segments < 1:
            raise ValueError(f"max_segments must be at least 1, but got {self.max_segments}")

    def fit(
        self,
        samples: SampleData,
        start: int = 0,
        end: int | None = None
    ) -> list[CurveSegment]:
        """Fit segments to samples ``start..end`` (inclusive)."""
        series = as_time_series(samples)
        if end is None:
            end = series.n_samples - 1
        validate_index_range(start, end, series.n_samples)

        segments: list[CurveSegment] = []
        self._fit_range(series, start, end, segments)
        return segments

    def _fit_range(
        self,
        series: TimeSeries,
        start: int,
        end: int,
        segments: list[CurveSegment]
    ) -> None:
        capped = self.max_segments is not None and len(segments) >= self.max_segments
        if capped or end - start <= 1:
            segments.append(linear_segment(series, start, end))
            return

        candidate = fit_bezier_segment(series, start, end)
        if max_segment_error(series, start, end, candidate) <= self.tolerance:
            segments.append(candidate)
            return

        mid = (start + end) // 2
        self._fit_range(series, start, mid, segments)
        self._fit_range(series, mid, end, segments)

    def compress(self, samples: SampleData) -> CompressedCurve:
        """Compress a whole series into a :class:`CompressedCurve`."""
        series = as_time_series(samples)
        validate_point_count(series.n_samples, 2, "samples")
        return CompressedCurve(self.fit(series))


def compress_bezier(
    samples: SampleData,
    tolerance: float,
    max_segments: int | None = None
) -> CompressedCurve:
    """Adaptive Bezier compression of a series.

    Args:
        samples: Input samples (at least 2).
        tolerance: Maximum accepted absolute error per fitted segment.
        max_segments: Optional cap on the number of segments.

    Returns:
        CompressedCurve of Bezier and linear segments.
    """
    curve = AdaptiveBezierFitter(tolerance, max_segments).compress(samples)
    logger.debug("Bezier fit produced %d segments", curve.n_segments)
    return curve
