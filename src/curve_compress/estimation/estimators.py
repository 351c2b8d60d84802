"""Control point count estimators.

Seven independent heuristics recommend how many control points a series
needs. Each takes ``(samples, tolerance, min_points, max_points)`` and
returns an :class:`EstimationResult`; none depends on another's output.
``max_points`` is clipped to the number of samples.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable

import numpy as np

from ..algorithms.bspline import approximate_with_fixed_control_points
from ..algorithms.rdp import RDPSimplifier
from ..core.validation import validate_point_count, validate_tolerance
from ..curves.samples import SampleData, TimeSeries, as_time_series
from .metrics import (
    local_curvatures,
    max_abs_error,
    mean_squared_error,
    noise_level,
    shannon_entropy,
    total_variation,
)

logger = logging.getLogger(__name__)

CURVATURE_COVERAGE = 0.9
ENTROPY_RETENTION = 0.95
VARIATION_RETENTION = 0.9
RDP_TOLERANCE_STEPS = 20
STATISTICAL_BASE_POINTS = 10
STATISTICAL_UPPER_LIMIT = 200
SNR_NOISE_FLOOR = 1e-4


class EstimationMethod(Enum):
    """Available control point estimators."""
    ELBOW = auto()
    CURVATURE = auto()
    ENTROPY = auto()
    RDP_ADAPTIVE = auto()
    TOTAL_VARIATION = auto()
    ERROR_BOUND = auto()
    STATISTICAL = auto()


@dataclass(frozen=True)
class EstimationResult:
    """Recommendation of one estimator.

    Attributes:
        optimal_point_count: Recommended number of control points.
        score: Estimator-specific score (error, entropy rate, SNR, ...).
        method_name: Human readable estimator name.
        metrics: Side metrics reported by the estimator.
    """
    optimal_point_count: int
    score: float
    method_name: str
    metrics: dict[str, float] = field(default_factory=dict)

    def __repr__(self) -> str:
        return (
            f"EstimationResult(method='{self.method_name}', "
            f"points={self.optimal_point_count}, score={self.score:.4g})"
        )


def _prepare(
    samples: SampleData,
    tolerance: float,
    min_points: int,
    max_points: int
) -> tuple[TimeSeries, int, int]:
    series = as_time_series(samples)
    validate_point_count(series.n_samples, 2, "samples")
    validate_tolerance(tolerance)
    if min_points < 2:
        raise ValueError(f"min_points must be at least 2, but got {min_points}")
    if max_points < min_points:
        raise ValueError(
            f"max_points ({max_points}) must not be less than min_points ({min_points})"
        )
    max_points = min(max_points, series.n_samples)
    min_points = min(min_points, max_points)
    return series, min_points, max_points


def _clamp_count(count: float, min_points: int, max_points: int) -> int:
    return int(np.clip(np.rint(count), min_points, max_points))


def estimate_by_elbow(
    samples: SampleData,
    tolerance: float,
    min_points: int = 2,
    max_points: int = 50
) -> EstimationResult:
    """Elbow of the error-vs-count curve.

    The mean squared error of the fixed control point fit is computed for
    every count in range; the count with the largest absolute discrete
    second derivative of that error curve is recommended.
    """
    series, min_points, max_points = _prepare(samples, tolerance, min_points, max_points)

    counts = np.arange(min_points, max_points + 1)
    errors = np.array([
        mean_squared_error(series, approximate_with_fixed_control_points(series, int(n)))
        for n in counts
    ])

    elbow_index = min(1, len(errors) - 1)
    max_d2 = 0.0
    if len(errors) >= 3:
        d2 = np.abs(errors[2:] - 2 * errors[1:-1] + errors[:-2])
        k = int(np.argmax(d2))
        if d2[k] > 0:
            elbow_index = k + 1
            max_d2 = float(d2[k])

    error = float(errors[elbow_index])
    return EstimationResult(
        optimal_point_count=int(counts[elbow_index]),
        score=error,
        method_name="Elbow Method",
        metrics={'error': error, 'second_derivative': max_d2},
    )


def estimate_by_curvature(
    samples: SampleData,
    tolerance: float,
    min_points: int = 2,
    max_points: int = 50
) -> EstimationResult:
    """Count from the distribution of turning angles.

    Finds how many of the sharpest turns account for 90% of the total
    turning angle, and recommends half that many points on top of
    ``min_points``.
    """
    series, min_points, max_points = _prepare(samples, tolerance, min_points, max_points)

    curvatures = np.sort(local_curvatures(series))[::-1]
    total = float(np.sum(curvatures))

    significant = 0
    if len(curvatures) > 0:
        cumulative = np.cumsum(curvatures)
        significant = int(np.searchsorted(cumulative, total * CURVATURE_COVERAGE)) + 1
        significant = min(significant, len(curvatures))

    return EstimationResult(
        optimal_point_count=_clamp_count(significant * 0.5 + min_points, min_points, max_points),
        score=total,
        method_name="Curvature Based",
        metrics={'total_curvature': total, 'significant_points': float(significant)},
    )


def estimate_by_entropy(
    samples: SampleData,
    tolerance: float,
    min_points: int = 2,
    max_points: int = 50
) -> EstimationResult:
    """Smallest count whose control points keep 95% of the value entropy.

    Entropy is the base-2 Shannon entropy of a ``clip(n // 5, 1, 20)`` bin
    histogram. A zero-entropy series needs only ``min_points``; if no count
    reaches the target, ``max_points`` is recommended.
    """
    series, min_points, max_points = _prepare(samples, tolerance, min_points, max_points)

    original = shannon_entropy(series)
    if original <= 0:
        return EstimationResult(
            optimal_point_count=min_points,
            score=1.0,
            method_name="Information Entropy",
            metrics={'original_entropy': 0.0, 'information_rate': 1.0},
        )

    rate = 0.0
    for n in range(min_points, max_points + 1):
        compressed = shannon_entropy(approximate_with_fixed_control_points(series, n))
        rate = compressed / original
        if rate >= ENTROPY_RETENTION:
            return EstimationResult(
                optimal_point_count=n,
                score=rate,
                method_name="Information Entropy",
                metrics={
                    'original_entropy': original,
                    'compressed_entropy': compressed,
                    'information_rate': rate,
                },
            )

    return EstimationResult(
        optimal_point_count=max_points,
        score=rate,
        method_name="Information Entropy",
        metrics={'original_entropy': original, 'information_rate': rate},
    )


def estimate_by_rdp_adaptive(
    samples: SampleData,
    tolerance: float,
    min_points: int = 2,
    max_points: int = 50
) -> EstimationResult:
    """Count RDP keeps at ``tolerance``, read off a tolerance sweep.

    RDP runs at 20 log-spaced tolerances in ``[0.1 * tolerance,
    10 * tolerance]``; the surviving point counts are interpolated in
    log-tolerance at ``tolerance``.
    """
    series, min_points, max_points = _prepare(samples, tolerance, min_points, max_points)

    tolerances = np.geomspace(tolerance * 0.1, tolerance * 10, RDP_TOLERANCE_STEPS)
    kept = np.array([
        len(RDPSimplifier(float(t)).simplify(series)) for t in tolerances
    ], dtype=float)
    interpolated = float(np.interp(np.log(tolerance), np.log(tolerances), kept))

    return EstimationResult(
        optimal_point_count=_clamp_count(interpolated, min_points, max_points),
        score=tolerance,
        method_name="Douglas-Peucker Adaptive",
        metrics={'tolerance': tolerance, 'interpolated_points': interpolated},
    )


def estimate_by_total_variation(
    samples: SampleData,
    tolerance: float,
    min_points: int = 2,
    max_points: int = 50
) -> EstimationResult:
    """Smallest count whose control points keep 90% of the total variation.

    A series without variation needs only ``min_points``; if no count
    reaches the target, ``max_points`` is recommended.
    """
    series, min_points, max_points = _prepare(samples, tolerance, min_points, max_points)

    original = total_variation(series)
    if original <= 0:
        return EstimationResult(
            optimal_point_count=min_points,
            score=1.0,
            method_name="Total Variation",
            metrics={'original_variation': 0.0, 'variation_rate': 1.0},
        )

    rate = 0.0
    for n in range(min_points, max_points + 1):
        compressed = total_variation(approximate_with_fixed_control_points(series, n))
        rate = compressed / original
        if rate >= VARIATION_RETENTION:
            return EstimationResult(
                optimal_point_count=n,
                score=rate,
                method_name="Total Variation",
                metrics={
                    'original_variation': original,
                    'compressed_variation': compressed,
                    'variation_rate': rate,
                },
            )

    return EstimationResult(
        optimal_point_count=max_points,
        score=rate,
        method_name="Total Variation",
        metrics={'original_variation': original, 'variation_rate': rate},
    )


def estimate_by_error_bound(
    samples: SampleData,
    tolerance: float,
    min_points: int = 2,
    max_points: int = 50
) -> EstimationResult:
    """Smallest count whose fixed control point fit stays within tolerance.

    Binary search over ``[min_points, max_points]`` on the maximum absolute
    error of the linearly interpolated control points. Returns
    ``max_points`` when no count in range meets the tolerance.
    """
    series, min_points, max_points = _prepare(samples, tolerance, min_points, max_points)

    lo, hi = min_points, max_points
    while lo < hi:
        mid = (lo + hi) // 2
        error = max_abs_error(series, approximate_with_fixed_control_points(series, mid))
        if error <= tolerance:
            hi = mid
        else:
            lo = mid + 1

    final_error = max_abs_error(series, approximate_with_fixed_control_points(series, lo))
    return EstimationResult(
        optimal_point_count=lo,
        score=final_error,
        method_name="Error Bound",
        metrics={'max_points': float(max_points), 'tolerance': tolerance, 'max_error': final_error},
    )


def estimate_by_statistics(
    samples: SampleData,
    tolerance: float,
    min_points: int = 2,
    max_points: int = 50
) -> EstimationResult:
    """Upper bound on the point count from the signal-to-noise ratio.

    Noise is the standard deviation of the first differences and
    ``snr = std / (noise + 1e-4)``. The count ``round(10 + 5 * snr)`` is
    clipped to ``[min(10, U), U]`` with ``U = max(2, min(n // 2, 200))``,
    then into ``[min_points, max_points]``.
    """
    series, min_points, max_points = _prepare(samples, tolerance, min_points, max_points)

    variance = float(np.var(series.values))
    noise = noise_level(series)
    snr = float(np.sqrt(variance)) / (noise + SNR_NOISE_FLOOR)

    upper = max(2, min(series.n_samples // 2, STATISTICAL_UPPER_LIMIT))
    count = _clamp_count(
        STATISTICAL_BASE_POINTS + 5 * snr, min(STATISTICAL_BASE_POINTS, upper), upper
    )

    return EstimationResult(
        optimal_point_count=int(np.clip(count, min_points, max_points)),
        score=snr,
        method_name="Statistical",
        metrics={'variance': variance, 'noise_level': noise, 'snr': snr},
    )


_ESTIMATORS: dict[EstimationMethod, Callable[..., EstimationResult]] = {
    EstimationMethod.ELBOW: estimate_by_elbow,
    EstimationMethod.CURVATURE: estimate_by_curvature,
    EstimationMethod.ENTROPY: estimate_by_entropy,
    EstimationMethod.RDP_ADAPTIVE: estimate_by_rdp_adaptive,
    EstimationMethod.TOTAL_VARIATION: estimate_by_total_variation,
    EstimationMethod.ERROR_BOUND: estimate_by_error_bound,
    EstimationMethod.STATISTICAL: estimate_by_statistics,
}


def estimate(
    samples: SampleData,
    method: EstimationMethod,
    tolerance: float,
    min_points: int = 2,
    max_points: int = 50
) -> EstimationResult:
    """Run a single estimator selected by ``method``."""
    if method not in _ESTIMATORS:
        raise ValueError(f"Unknown estimation method: {method}")
    result = _ESTIMATORS[method](samples, tolerance, min_points, max_points)
    logger.debug("%s recommends %d points", result.method_name, result.optimal_point_count)
    return result


def estimate_all(
    samples: SampleData,
    tolerance: float,
    min_points: int = 2,
    max_points: int = 50
) -> dict[str, EstimationResult]:
    """Run all seven estimators.

    Returns:
        Dictionary keyed by ``"elbow"``, ``"curvature"``, ``"entropy"``,
        ``"rdp_adaptive"``, ``"total_variation"``, ``"error_bound"`` and
        ``"statistical"``.
    """
    series = as_time_series(samples)
    return {
        method.name.lower(): estimate(series, method, tolerance, min_points, max_points)
        for method in EstimationMethod
    }
