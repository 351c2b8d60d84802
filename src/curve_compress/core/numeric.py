"""Guarded arithmetic used by every geometric formula in the package.

Time deltas and chord lengths can be zero (duplicate timestamps, constant
signals, degenerate segments). None of the functions here raise: a
degenerate denominator yields a caller-supplied default instead.
"""

from __future__ import annotations

import math

import numpy as np

EPSILON = 1e-6


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` when ``|denominator| < EPSILON``."""
    if abs(denominator) < EPSILON:
        return default
    return numerator / denominator


def safe_slope(t1: float, v1: float, t2: float, v2: float) -> float:
    """Slope of the line through two samples (0 for a vertical pair)."""
    return safe_divide(v2 - v1, t2 - t1, 0.0)


def safe_lerp_parameter(value: float, start: float, end: float) -> float:
    """Position of ``value`` between ``start`` and ``end``.

    Returns 0 when the interval is degenerate. The result is not clamped,
    so values outside the interval map outside [0, 1].
    """
    return safe_divide(value - start, end - start, 0.0)


def is_valid_time_interval(dt: float) -> bool:
    """Whether a time step is long enough to divide by."""
    return dt > EPSILON


def distance_squared(dx: float, dy: float) -> float:
    return dx * dx + dy * dy


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def normalize_vector(v: np.ndarray) -> np.ndarray:
    """Unit vector(s) along the last axis; zero-length vectors stay zero.

    Args:
        v: Vector of shape (2,) or stack of vectors of shape (n, 2).

    Returns:
        Array of the same shape with unit length rows.
    """
    v = np.asarray(v, dtype=float)
    norms = np.linalg.norm(v, axis=-1, keepdims=True)
    safe_norms = np.where(norms < EPSILON, 1.0, norms)
    return np.where(norms < EPSILON, 0.0, v / safe_norms)


def clamped_acos(x: float | np.ndarray) -> float | np.ndarray:
    """``acos`` with its argument clamped to [-1, 1] against rounding error."""
    if np.ndim(x) == 0:
        return math.acos(clamp(float(x), -1.0, 1.0))
    return np.arccos(np.clip(x, -1.0, 1.0))
