"""Curves module: samples, curve segments, and compressed curves."""

from .samples import Sample, TimeSeries, SampleData, as_time_series
from .segments import (
    CurveType,
    CurveSegment,
    LinearSegment,
    BezierSegment,
    BSplineSegment,
)
from .compressed import CompressedCurve

__all__ = [
    # Samples
    "Sample",
    "TimeSeries",
    "SampleData",
    "as_time_series",
    # Segments
    "CurveType",
    "CurveSegment",
    "LinearSegment",
    "BezierSegment",
    "BSplineSegment",
    # Curves
    "CompressedCurve",
]
