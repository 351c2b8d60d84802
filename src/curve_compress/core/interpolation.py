"""Basis functions shared by the segment evaluators.

All functions accept scalars or numpy arrays for the local parameter.
"""

from __future__ import annotations

import numpy as np

from .numeric import safe_lerp_parameter


def hermite_basis(t):
    """Cubic Hermite basis (h1, h2, h3, h4) at local parameter ``t``.

    h1 and h2 weight the start and end values, h3 and h4 the start and end
    tangents.
    """
    t2 = t * t
    t3 = t2 * t
    h1 = 2 * t3 - 3 * t2 + 1
    h2 = -2 * t3 + 3 * t2
    h3 = t3 - 2 * t2 + t
    h4 = t3 - t2
    return h1, h2, h3, h4


def hermite_interpolate(start_value, end_value, start_tangent, end_tangent, t):
    """Blend two values and two (already duration-scaled) tangents."""
    h1, h2, h3, h4 = hermite_basis(t)
    return h1 * start_value + h2 * end_value + h3 * start_tangent + h4 * end_tangent


def cubic_bspline_basis(u):
    """Uniform non-rational cubic B-spline weights (b0, b1, b2, b3) at ``u``."""
    u2 = u * u
    u3 = u2 * u
    b0 = (1 - u) ** 3 / 6
    b1 = (3 * u3 - 6 * u2 + 4) / 6
    b2 = (-3 * u3 + 3 * u2 + 3 * u + 1) / 6
    b3 = u3 / 6
    return b0, b1, b2, b3


def linear_interpolate(times: np.ndarray, values: np.ndarray, time):
    """Piecewise-linear interpolation with constant extrapolation.

    Args:
        times: Non-decreasing knot times, shape (n,).
        values: Values at the knots, shape (n,).
        time: Query time(s).

    Returns:
        Interpolated value(s); a float for scalar input.
    """
    times = np.asarray(times, dtype=float)
    values = np.asarray(values, dtype=float)

    if len(times) == 1:
        if np.ndim(time) == 0:
            return float(values[0])
        return np.full(np.shape(time), values[0])

    if np.ndim(time) == 0:
        t = float(time)
        if t <= times[0]:
            return float(values[0])
        if t >= times[-1]:
            return float(values[-1])
        i = int(np.searchsorted(times, t, side='right')) - 1
        i = min(max(i, 0), len(times) - 2)
        u = safe_lerp_parameter(t, times[i], times[i + 1])
        return float(values[i] + (values[i + 1] - values[i]) * u)

    return np.interp(np.asarray(time, dtype=float), times, values)
