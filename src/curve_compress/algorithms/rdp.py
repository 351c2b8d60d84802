"""Importance-weighted Ramer-Douglas-Peucker simplification."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from ..core.numeric import EPSILON
from ..core.validation import validate_point_count, validate_positive, validate_tolerance
from ..curves.compressed import CompressedCurve
from ..curves.samples import SampleData, TimeSeries, as_time_series
from ..curves.segments import CurveSegment, CurveType
from .bezier import AdaptiveBezierFitter
from .bspline import AdaptiveBSplineFitter, linear_segment
from .importance import ImportanceScorer, ImportanceWeights

logger = logging.getLogger(__name__)


def point_segment_distances(
    points: np.ndarray,
    a: np.ndarray,
    b: np.ndarray
) -> np.ndarray:
    """Euclidean distance from each point to the segment ``a``-``b``.

    The projection parameter is clamped to [0, 1], so points beyond the
    segment measure to the nearer endpoint. A segment shorter than
    ``EPSILON`` is treated as the point ``a``.

    Args:
        points: Array of shape (n, 2).
        a: Segment start, shape (2,).
        b: Segment end, shape (2,).

    Returns:
        Distances, shape (n,).
    """
    d = b - a
    length_sq = float(np.dot(d, d))
    if length_sq < EPSILON:
        return np.linalg.norm(points - a, axis=1)

    u = np.clip((points - a) @ d / length_sq, 0.0, 1.0)
    projection = a + u[:, None] * d
    return np.linalg.norm(points - projection, axis=1)


@dataclass
class RDPSimplifier:
    """Selects the samples that survive importance-weighted simplification.

    Each interior sample's distance to the current chord is scaled by
    ``1 + importance * importance_threshold``, so salient samples survive
    looser tolerances. The recursion runs on an explicit work stack.

    Attributes:
        tolerance: Maximum weighted distance a discarded sample may have.
        importance_threshold: Scale of the importance boost (0 disables it).
        weights: Importance term weights.
    """
    tolerance: float = 0.01
    importance_threshold: float = 1.0
    weights: ImportanceWeights | None = None

    def __post_init__(self) -> None:
        self.tolerance = validate_tolerance(self.tolerance)
        if not np.isfinite(self.importance_threshold) or self.importance_threshold < 0:
            raise ValueError(
                f"importance_threshold must be non-negative, but got {self.importance_threshold}"
            )
        if self.weights is None:
            self.weights = ImportanceWeights.default()

    def simplify(self, samples: SampleData) -> np.ndarray:
        """Indices of the surviving samples.

        Args:
            samples: Input samples.

        Returns:
            Sorted, unique integer indices that always include the first and
            last sample.
        """
        series = as_time_series(samples)
        n = series.n_samples
        if n <= 2:
            return np.arange(n)

        points = series.as_array()
        boost = 1.0 + ImportanceScorer(series, self.weights).scores() * self.importance_threshold

        keep = np.zeros(n, dtype=bool)
        keep[0] = keep[-1] = True

        stack = [(0, n - 1)]
        while stack:
            start, end = stack.pop()
            if end - start < 2:
                continue

            distances = point_segment_distances(
                points[start + 1:end], points[start], points[end]
            ) * boost[start + 1:end]

            # argmax returns the first maximum, so ties keep the earliest sample
            k = int(np.argmax(distances))
            if distances[k] <= self.tolerance:
                continue

            split = start + 1 + k
            keep[split] = True
            stack.append((split, end))
            stack.append((start, split))

        return np.flatnonzero(keep)

    def simplify_series(self, samples: SampleData) -> TimeSeries:
        """The surviving samples as a new series."""
        series = as_time_series(samples)
        indices = self.simplify(series)
        return TimeSeries(series.times[indices], series.values[indices])


def compress_rdp(
    samples: SampleData,
    tolerance: float,
    curve_type: CurveType = CurveType.LINEAR,
    importance_threshold: float = 1.0,
    weights: ImportanceWeights | None = None
) -> CompressedCurve:
    """Compress a series by RDP simplification.

    Consecutive surviving samples are joined by a linear segment, or, for
    ``CurveType.BEZIER`` and ``CurveType.BSPLINE``, the original samples
    between them are refitted with the matching adaptive fitter at the same
    tolerance.

    Args:
        samples: Input samples (at least 2).
        tolerance: Simplification tolerance.
        curve_type: Segment type joining surviving samples.
        importance_threshold: Scale of the importance boost.
        weights: Importance term weights.

    Returns:
        CompressedCurve covering the input's time range.
    """
    series = as_time_series(samples)
    validate_point_count(series.n_samples, 2, "samples")
    validate_positive(tolerance, "tolerance")

    simplifier = RDPSimplifier(tolerance, importance_threshold, weights)
    indices = simplifier.simplify(series)

    if curve_type == CurveType.LINEAR:
        segments: list[CurveSegment] = [
            linear_segment(series, int(a), int(b)) for a, b in zip(indices[:-1], indices[1:])
        ]
    else:
        if curve_type == CurveType.BEZIER:
            fitter = AdaptiveBezierFitter(tolerance)
        elif curve_type == CurveType.BSPLINE:
            fitter = AdaptiveBSplineFitter(tolerance)
        else:
            raise ValueError(f"Unknown curve type: {curve_type}")
        segments = []
        for a, b in zip(indices[:-1], indices[1:]):
            segments.extend(fitter.fit(series, int(a), int(b)))

    logger.debug(
        "RDP kept %d of %d samples, %d segments",
        len(indices), series.n_samples, len(segments)
    )
    return CompressedCurve(segments)
