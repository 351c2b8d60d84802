"""Input validation for the public entry points.

Every check raises ``ValueError`` naming the offending parameter. Numeric
degeneracies inside the algorithms are not validated here; they are absorbed
by :mod:`curve_compress.core.numeric`.
"""

from __future__ import annotations

import numpy as np


def validate_tolerance(tolerance: float, name: str = "tolerance") -> float:
    """Check that a tolerance is a finite positive number."""
    return validate_positive(tolerance, name)


def validate_positive(value: float, name: str) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}") from None
    if not np.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be positive, but got {value}")
    return value


def validate_point_count(n_points: int, min_required: int = 2, name: str = "points") -> None:
    if n_points == 0:
        raise ValueError(f"{name} cannot be empty")
    if n_points < min_required:
        raise ValueError(
            f"At least {min_required} {name} are required, but got {n_points}"
        )


def validate_control_point_count(
    n_control_points: int,
    data_length: int,
    name: str = "n_control_points"
) -> int:
    """Check that a requested control point count lies in ``[2, data_length]``."""
    if isinstance(n_control_points, bool) or not isinstance(n_control_points, (int, np.integer)):
        raise TypeError(f"{name} must be an integer, got {type(n_control_points).__name__}")
    if n_control_points < 2:
        raise ValueError(
            f"{name} must be at least 2, but got {n_control_points}"
        )
    if n_control_points > data_length:
        raise ValueError(
            f"{name} ({n_control_points}) cannot exceed data length ({data_length})"
        )
    return int(n_control_points)


def validate_index_range(start: int, end: int, length: int) -> None:
    if not 0 <= start < length:
        raise ValueError(f"start index {start} is out of range [0, {length - 1}]")
    if not 0 <= end < length:
        raise ValueError(f"end index {end} is out of range [0, {length - 1}]")
    if start > end:
        raise ValueError(f"start index ({start}) cannot be greater than end index ({end})")


def validate_time_order(times: np.ndarray, name: str = "times", strict: bool = False) -> None:
    """Check that time values are non-decreasing (or increasing if ``strict``).

    Samples are never re-sorted; out-of-order input is reported instead.
    """
    times = np.asarray(times)
    if len(times) < 2:
        return
    steps = np.diff(times)
    bad = np.flatnonzero(steps <= 0) if strict else np.flatnonzero(steps < 0)
    if len(bad) > 0:
        i = int(bad[0])
        order = "strictly increasing" if strict else "non-decreasing"
        raise ValueError(
            f"{name} must be {order}. Found {name}[{i}]={times[i]} "
            f"then {name}[{i + 1}]={times[i + 1]}"
        )


def validate_sample_count(
    sample_count: int,
    lower: int = 2,
    upper: int = 10000,
    name: str = "sample_count"
) -> int:
    if isinstance(sample_count, bool) or not isinstance(sample_count, (int, np.integer)):
        raise TypeError(f"{name} must be an integer, got {type(sample_count).__name__}")
    if not lower <= sample_count <= upper:
        raise ValueError(f"{name} {sample_count} is out of range [{lower}, {upper}]")
    return int(sample_count)
