"""Keyframe curve adapter backed by scipy's cubic Hermite spline.

A :class:`scipy.interpolate.CubicHermiteSpline` is a keyframe curve: values
and slopes at strictly increasing key times, cubic Hermite between keys.
That is exactly the form of :class:`BezierSegment`, so a keyframe curve
converts to a compressed curve without loss.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.interpolate import CubicHermiteSpline

from ..algorithms.tangents import TangentMode, smooth_tangents
from ..core.validation import validate_sample_count, validate_time_order
from ..curves.compressed import CompressedCurve
from ..curves.samples import SampleData, TimeSeries, as_time_series
from ..curves.segments import BezierSegment
from .base import MAX_SAMPLE_COUNT, MIN_SAMPLE_COUNT


def keyframe_curve(
    samples: SampleData,
    tangent_mode: TangentMode = TangentMode.SMOOTH,
    tension: float = 0.5
) -> CubicHermiteSpline:
    """Keyframe curve with a key at every sample.

    Args:
        samples: Keys; times must be strictly increasing.
        tangent_mode: Rule deriving key slopes from neighbouring keys.
        tension: Cardinal tension (``TangentMode.CARDINAL`` only).

    Returns:
        CubicHermiteSpline through the keys.
    """
    series = as_time_series(samples)
    if series.n_samples < 2:
        raise ValueError(f"At least 2 keys are required, but got {series.n_samples}")
    validate_time_order(series.times, "times", strict=True)

    tangents = smooth_tangents(series, tangent_mode, tension)
    return CubicHermiteSpline(series.times, series.values, tangents, extrapolate=False)


@dataclass
class KeyframeCurveAdapter:
    """Host curve adapter for :class:`scipy.interpolate.CubicHermiteSpline`.

    Attributes:
        tangent_mode: Key slope rule used when building host curves.
        tension: Cardinal tension for ``TangentMode.CARDINAL``.
    """
    tangent_mode: TangentMode = TangentMode.SMOOTH
    tension: float = 0.5

    def from_host_curve(self, curve: CubicHermiteSpline, sample_count: int) -> TimeSeries:
        """Sample a keyframe curve evenly between its first and last key."""
        sample_count = validate_sample_count(sample_count, MIN_SAMPLE_COUNT, MAX_SAMPLE_COUNT)
        times = np.linspace(curve.x[0], curve.x[-1], sample_count)
        return TimeSeries(times, curve(times))

    def to_host_curve(self, compressed: CompressedCurve, sample_count: int) -> CubicHermiteSpline:
        """Key a keyframe curve at evenly spaced samples of ``compressed``."""
        sample_count = validate_sample_count(sample_count, MIN_SAMPLE_COUNT, MAX_SAMPLE_COUNT)
        if compressed.end_time <= compressed.start_time:
            raise ValueError("Cannot build a keyframe curve over a zero-length time range")
        samples = compressed.to_samples(sample_count)
        return keyframe_curve(samples, self.tangent_mode, self.tension)


def compressed_from_host_curve(curve: CubicHermiteSpline) -> CompressedCurve:
    """Convert every key interval of a keyframe curve into a Bezier segment.

    The key slopes become the segment tangents, so the result evaluates to
    the same values as ``curve`` between its first and last key.
    """
    keys = np.asarray(curve.x, dtype=float)
    values = curve(keys)
    slopes = curve(keys, 1)

    segments = [
        BezierSegment(
            start_time=float(keys[i]),
            start_value=float(values[i]),
            end_time=float(keys[i + 1]),
            end_value=float(values[i + 1]),
            in_tangent=float(slopes[i]),
            out_tangent=float(slopes[i + 1]),
        )
        for i in range(len(keys) - 1)
    ]
    return CompressedCurve(segments)
