"""Adaptive cubic B-spline fitting and fixed-budget control point placement."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from ..core.validation import (
    validate_control_point_count,
    validate_index_range,
    validate_point_count,
    validate_tolerance,
)
from ..curves.compressed import CompressedCurve
from ..curves.samples import SampleData, TimeSeries, as_time_series
from ..curves.segments import (
    BezierSegment,
    BSplineSegment,
    CurveSegment,
    CurveType,
    LinearSegment,
)
from .tangents import TangentMode, smooth_tangents

logger = logging.getLogger(__name__)

# A cubic B-spline candidate needs four control points
MIN_BSPLINE_SPAN = 4


def linear_segment(series: TimeSeries, start: int, end: int) -> LinearSegment:
    """Straight segment joining samples ``start`` and ``end``."""
    return LinearSegment(
        float(series.times[start]), float(series.values[start]),
        float(series.times[end]), float(series.values[end])
    )


def max_segment_error(
    series: TimeSeries,
    start: int,
    end: int,
    segment: CurveSegment
) -> float:
    """Largest absolute error of ``segment`` over samples ``start..end``."""
    times = series.times[start:end + 1]
    values = series.values[start:end + 1]
    return float(np.max(np.abs(values - segment.evaluate(times))))


def fit_bspline_segment(series: TimeSeries, start: int, end: int) -> CurveSegment:
    """Four-control-point cubic B-spline candidate over ``start..end``.

    The end control points are pinned to the range's first and last samples;
    the interior ones sit on the samples at the 1/3 and 2/3 index offsets.
    Ranges with fewer than four samples fall back to a line.
    """
    count = end - start + 1
    if count < MIN_BSPLINE_SPAN:
        return linear_segment(series, start, end)

    indices = [start, start + count // 3, start + 2 * count // 3, end]
    control_points = np.column_stack([series.times[indices], series.values[indices]])
    return BSplineSegment(control_points)


@dataclass
class AdaptiveBSplineFitter:
    """Recursive bisection fitter emitting cubic B-spline segments.

    A range is accepted as one B-spline segment when the candidate's
    maximum absolute error is within tolerance; otherwise it is split at
    its middle index and both halves are fitted. Ranges spanning three or
    fewer intervals become linear segments.

    Attributes:
        tolerance: Maximum accepted absolute error per segment.
    """
    tolerance: float = 0.01

    def __post_init__(self) -> None:
        self.tolerance = validate_tolerance(self.tolerance)

    def fit(
        self,
        samples: SampleData,
        start: int = 0,
        end: int | None = None
    ) -> list[CurveSegment]:
        """Fit segments to samples ``start..end`` (inclusive).

        Args:
            samples: Input samples.
            start: First sample index.
            end: Last sample index (defaults to the last sample).

        Returns:
            Ordered list of segments covering the range.
        """
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
        if end - start <= MIN_BSPLINE_SPAN - 1:
            segments.append(linear_segment(series, start, end))
            return

        candidate = fit_bspline_segment(series, start, end)
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
        if series.n_samples <= 2:
            return CompressedCurve([linear_segment(series, 0, series.n_samples - 1)])
        return CompressedCurve(self.fit(series))


def compress_bspline(samples: SampleData, tolerance: float) -> CompressedCurve:
    """Adaptive B-spline compression of a series.

    Args:
        samples: Input samples (at least 2).
        tolerance: Maximum accepted absolute error per fitted segment.

    Returns:
        CompressedCurve of B-spline and linear segments.
    """
    curve = AdaptiveBSplineFitter(tolerance).compress(samples)
    logger.debug("B-spline fit produced %d segments", curve.n_segments)
    return curve


def approximate_with_fixed_control_points(
    samples: SampleData,
    n_control_points: int
) -> TimeSeries:
    """Place a fixed number of control points along a series.

    Control points start on samples at uniformly spaced indices. Each
    interior control point is then moved to the mean of the samples within
    ``n_samples // (2 * n_control_points)`` sample spacings of it; the first
    and last control points never move. The sample spacing is the mean
    spacing ``duration / (n_samples - 1)``, not the first interval, so
    irregularly sampled series get a window matching their overall density.

    Args:
        samples: Input samples (at least 2).
        n_control_points: Number of control points, in ``[2, n_samples]``.

    Returns:
        TimeSeries of control points. Requests for as many control points as
        samples (or series of two samples) return a copy of the input.
    """
    series = as_time_series(samples)
    n = series.n_samples
    validate_point_count(n, 2, "samples")
    k = validate_control_point_count(n_control_points, n)

    if n <= 2 or k >= n:
        return series.slice(0, n - 1)

    indices = np.rint(np.linspace(0, n - 1, k)).astype(int)
    times = series.times[indices].copy()
    values = series.values[indices].copy()

    window = max(1, n // (k * 2))
    radius = window * series.duration / (n - 1)

    for i in range(1, k - 1):
        mask = np.abs(series.times - times[i]) < radius
        if np.any(mask):
            times[i] = np.mean(series.times[mask])
            values[i] = np.mean(series.values[mask])

    return TimeSeries(times, values)


def fixed_control_point_curve(
    samples: SampleData,
    n_control_points: int,
    curve_type: CurveType = CurveType.LINEAR
) -> CompressedCurve:
    """Compressed curve through a fixed number of control points.

    Consecutive control points from
    :func:`approximate_with_fixed_control_points` are joined by one segment
    each: a line, a two-point B-spline, or a Bezier segment whose tangents
    are the smooth tangents of the control points.

    Args:
        samples: Input samples (at least 2).
        n_control_points: Number of control points, in ``[2, n_samples]``.
        curve_type: Segment type joining consecutive control points.

    Returns:
        CompressedCurve with ``n_control_points - 1`` segments.
    """
    control = approximate_with_fixed_control_points(samples, n_control_points)
    t = control.times
    v = control.values
    pairs = range(control.n_samples - 1)

    if curve_type == CurveType.LINEAR:
        segments: list[CurveSegment] = [linear_segment(control, i, i + 1) for i in pairs]
    elif curve_type == CurveType.BSPLINE:
        segments = [
            BSplineSegment(np.array([[t[i], v[i]], [t[i + 1], v[i + 1]]]))
            for i in pairs
        ]
    elif curve_type == CurveType.BEZIER:
        tangents = smooth_tangents(control, TangentMode.SMOOTH)
        segments = [
            BezierSegment(
                float(t[i]), float(v[i]), float(t[i + 1]), float(v[i + 1]),
                in_tangent=float(tangents[i]),
                out_tangent=float(tangents[i + 1]),
            )
            for i in pairs
        ]
    else:
        raise ValueError(f"Unknown curve type: {curve_type}")
    return CompressedCurve(segments)
