"""Algorithms module: importance scoring, simplification, and curve fitting."""

from .importance import (
    DataType,
    ImportanceWeights,
    ImportanceScorer,
    importance,
    resolve_weights,
)
from .rdp import RDPSimplifier, compress_rdp, point_segment_distances
from .bspline import (
    AdaptiveBSplineFitter,
    compress_bspline,
    fit_bspline_segment,
    approximate_with_fixed_control_points,
    fixed_control_point_curve,
    max_segment_error,
)
from .bezier import (
    AdaptiveBezierFitter,
    compress_bezier,
    fit_bezier_segment,
    estimate_in_tangent,
    estimate_out_tangent,
)
from .tangents import TangentMode, smooth_tangents

__all__ = [
    # Importance
    "DataType",
    "ImportanceWeights",
    "ImportanceScorer",
    "importance",
    "resolve_weights",
    # RDP
    "RDPSimplifier",
    "compress_rdp",
    "point_segment_distances",
    # B-spline
    "AdaptiveBSplineFitter",
    "compress_bspline",
    "fit_bspline_segment",
    "approximate_with_fixed_control_points",
    "fixed_control_point_curve",
    "max_segment_error",
    # Bezier
    "AdaptiveBezierFitter",
    "compress_bezier",
    "fit_bezier_segment",
    "estimate_in_tangent",
    "estimate_out_tangent",
    # Tangents
    "TangentMode",
    "smooth_tangents",
]
