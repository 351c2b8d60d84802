"""Estimation module: control point count estimators."""

from .estimators import (
    EstimationMethod,
    EstimationResult,
    estimate_by_elbow,
    estimate_by_curvature,
    estimate_by_entropy,
    estimate_by_rdp_adaptive,
    estimate_by_total_variation,
    estimate_by_error_bound,
    estimate_by_statistics,
    estimate,
    estimate_all,
)
from .metrics import (
    shannon_entropy,
    total_variation,
    noise_level,
    local_curvatures,
)

__all__ = [
    # Results
    "EstimationMethod",
    "EstimationResult",
    # Estimators
    "estimate_by_elbow",
    "estimate_by_curvature",
    "estimate_by_entropy",
    "estimate_by_rdp_adaptive",
    "estimate_by_total_variation",
    "estimate_by_error_bound",
    "estimate_by_statistics",
    "estimate",
    "estimate_all",
    # Metrics
    "shannon_entropy",
    "total_variation",
    "noise_level",
    "local_curvatures",
]
