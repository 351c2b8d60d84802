"""Per-sample tangent estimation for keyframe-style curves."""

from __future__ import annotations

from enum import Enum, auto

import numpy as np

from ..core.numeric import safe_divide, safe_slope
from ..curves.samples import SampleData, as_time_series


class TangentMode(Enum):
    """How the slope at each sample is derived from its neighbours.

    LINEAR: slope towards the next sample (one-sided at the last sample).
    SMOOTH: slopes on both sides blended, the shorter interval weighing more.
    CATMULL_ROM: slope of the chord joining both neighbours.
    CARDINAL: Catmull-Rom slope scaled by ``1 - tension``.
    """
    LINEAR = auto()
    SMOOTH = auto()
    CATMULL_ROM = auto()
    CARDINAL = auto()


def smooth_tangents(
    samples: SampleData,
    mode: TangentMode = TangentMode.SMOOTH,
    tension: float = 0.5
) -> np.ndarray:
    """Tangent (dv/dt) at every sample.

    The first and last samples always use the one-sided slope to their only
    neighbour. Zero-length intervals give a slope of 0.

    Args:
        samples: Input samples.
        mode: Tangent rule for interior samples.
        tension: Cardinal tension in [0, 1]; only used by ``CARDINAL``.

    Returns:
        Array of tangents, shape (n_samples,).
    """
    series = as_time_series(samples)
    t = series.times
    v = series.values
    n = series.n_samples

    tangents = np.zeros(n)
    if n < 2:
        return tangents

    tangents[0] = safe_slope(t[0], v[0], t[1], v[1])
    tangents[-1] = safe_slope(t[-2], v[-2], t[-1], v[-1])

    for i in range(1, n - 1):
        if mode == TangentMode.LINEAR:
            tangents[i] = safe_slope(t[i], v[i], t[i + 1], v[i + 1])
        elif mode == TangentMode.CATMULL_ROM:
            tangents[i] = safe_slope(t[i - 1], v[i - 1], t[i + 1], v[i + 1])
        elif mode == TangentMode.CARDINAL:
            tangents[i] = (1.0 - tension) * safe_slope(t[i - 1], v[i - 1], t[i + 1], v[i + 1])
        else:
            prev_slope = safe_slope(t[i - 1], v[i - 1], t[i], v[i])
            next_slope = safe_slope(t[i], v[i], t[i + 1], v[i + 1])
            prev_dt = t[i] - t[i - 1]
            next_dt = t[i + 1] - t[i]
            total = prev_dt + next_dt
            prev_weight = safe_divide(next_dt, total, 0.5)
            next_weight = safe_divide(prev_dt, total, 0.5)
            tangents[i] = prev_slope * prev_weight + next_slope * next_weight

    return tangents
