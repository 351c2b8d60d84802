"""Core module: numeric safety kernel, validation, and interpolation bases."""

from .numeric import (
    EPSILON,
    safe_divide,
    safe_slope,
    safe_lerp_parameter,
    is_valid_time_interval,
    distance_squared,
    clamp,
    clamp01,
    normalize_vector,
    clamped_acos,
)
from .validation import (
    validate_tolerance,
    validate_positive,
    validate_point_count,
    validate_control_point_count,
    validate_index_range,
    validate_time_order,
    validate_sample_count,
)
from .interpolation import (
    hermite_basis,
    hermite_interpolate,
    cubic_bspline_basis,
    linear_interpolate,
)

__all__ = [
    # Numeric kernel
    "EPSILON",
    "safe_divide",
    "safe_slope",
    "safe_lerp_parameter",
    "is_valid_time_interval",
    "distance_squared",
    "clamp",
    "clamp01",
    "normalize_vector",
    "clamped_acos",
    # Validation
    "validate_tolerance",
    "validate_positive",
    "validate_point_count",
    "validate_control_point_count",
    "validate_index_range",
    "validate_time_order",
    "validate_sample_count",
    # Interpolation
    "hermite_basis",
    "hermite_interpolate",
    "cubic_bspline_basis",
    "linear_interpolate",
]
