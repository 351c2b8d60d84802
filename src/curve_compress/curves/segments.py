"""Curve segment variants: Linear, Bezier (Hermite form), and cubic B-spline.

Each segment covers ``[start_time, end_time]`` and clamps to its endpoint
values outside that interval. ``evaluate`` accepts a scalar time (returning a
float) or an array of times (returning an array).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

from ..core.interpolation import cubic_bspline_basis, hermite_interpolate
from ..core.numeric import EPSILON
from ..core.validation import validate_time_order


class CurveType(Enum):
    """Shape of a curve segment."""
    LINEAR = auto()
    BEZIER = auto()
    BSPLINE = auto()


class CurveSegment(ABC):
    """Common interface of all segment shapes."""

    start_time: float
    start_value: float
    end_time: float
    end_value: float

    @property
    @abstractmethod
    def curve_type(self) -> CurveType:
        ...

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    @abstractmethod
    def _evaluate_array(self, t: np.ndarray) -> np.ndarray:
        """Evaluate at an array of times (already converted to float)."""

    def evaluate(self, time: float | np.ndarray) -> float | np.ndarray:
        """Evaluate the segment at given time(s).

        Args:
            time: Time point(s).

        Returns:
            Segment value(s) at the given time(s).
        """
        t = np.asarray(time, dtype=float)
        scalar_input = t.ndim == 0
        result = self._evaluate_array(np.atleast_1d(t))
        if scalar_input:
            return float(result[0])
        return result.reshape(t.shape)

    def local_parameter(self, t: np.ndarray) -> np.ndarray:
        """Map times to the segment's local parameter, clamped to [0, 1]."""
        t = np.asarray(t, dtype=float)
        duration = self.duration
        if duration < EPSILON:
            return (t > self.start_time).astype(float)
        return np.clip((t - self.start_time) / duration, 0.0, 1.0)

    def __call__(self, time: float | np.ndarray) -> float | np.ndarray:
        return self.evaluate(time)


@dataclass(frozen=True)
class LinearSegment(CurveSegment):
    """Straight line between two samples."""
    start_time: float
    start_value: float
    end_time: float
    end_value: float

    @property
    def curve_type(self) -> CurveType:
        return CurveType.LINEAR

    def _evaluate_array(self, t: np.ndarray) -> np.ndarray:
        u = self.local_parameter(t)
        return self.start_value + (self.end_value - self.start_value) * u


@dataclass(frozen=True)
class BezierSegment(CurveSegment):
    """Cubic segment in Hermite form.

    Tangents are slopes (value per unit time); they are scaled by the
    segment duration before blending with the Hermite basis.
    """
    start_time: float
    start_value: float
    end_time: float
    end_value: float
    in_tangent: float = 0.0
    out_tangent: float = 0.0

    @property
    def curve_type(self) -> CurveType:
        return CurveType.BEZIER

    def _evaluate_array(self, t: np.ndarray) -> np.ndarray:
        u = self.local_parameter(t)
        dt = self.duration
        return hermite_interpolate(
            self.start_value,
            self.end_value,
            self.in_tangent * dt,
            self.out_tangent * dt,
            u
        )


@dataclass(frozen=True, eq=False)
class BSplineSegment(CurveSegment):
    """Uniform cubic B-spline segment over its control points.

    The segment spans the times of its first and last control point and is
    pinned to their values at the boundaries. Two control points give a
    line, three a polyline through the control values, four or more a
    uniform cubic B-spline with ``m - 3`` spans.

    Attributes:
        control_points: Array of (time, value) control points, shape (m, 2).
    """
    control_points: np.ndarray
    start_time: float = field(init=False)
    start_value: float = field(init=False)
    end_time: float = field(init=False)
    end_value: float = field(init=False)

    def __post_init__(self) -> None:
        points = np.array(self.control_points, dtype=float)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError(
                f"control_points must have shape (m, 2), got shape {points.shape}"
            )
        if len(points) < 2:
            raise ValueError(
                f"At least 2 control_points are required, but got {len(points)}"
            )
        validate_time_order(points[:, 0], "control_points times")
        points.setflags(write=False)

        object.__setattr__(self, 'control_points', points)
        object.__setattr__(self, 'start_time', float(points[0, 0]))
        object.__setattr__(self, 'start_value', float(points[0, 1]))
        object.__setattr__(self, 'end_time', float(points[-1, 0]))
        object.__setattr__(self, 'end_value', float(points[-1, 1]))

    @property
    def curve_type(self) -> CurveType:
        return CurveType.BSPLINE

    @property
    def n_control_points(self) -> int:
        return len(self.control_points)

    def _evaluate_array(self, t: np.ndarray) -> np.ndarray:
        u = self.local_parameter(t)
        y = self.control_points[:, 1]
        m = len(y)

        if m < 4:
            # Polyline through the control values, uniform in u
            s = u * (m - 1)
            k = np.clip(np.floor(s).astype(int), 0, m - 2)
            local = s - k
            values = y[k] + (y[k + 1] - y[k]) * local
        else:
            spans = m - 3
            s = u * spans
            k = np.clip(np.floor(s).astype(int), 0, spans - 1)
            local = s - k
            b0, b1, b2, b3 = cubic_bspline_basis(local)
            values = b0 * y[k] + b1 * y[k + 1] + b2 * y[k + 2] + b3 * y[k + 3]

        values = np.where(t <= self.start_time, self.start_value, values)
        return np.where(t >= self.end_time, self.end_value, values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BSplineSegment):
            return NotImplemented
        return np.array_equal(self.control_points, other.control_points)

    def __hash__(self) -> int:
        return hash(self.control_points.tobytes())

    def __repr__(self) -> str:
        return (
            f"BSplineSegment(n_control_points={self.n_control_points}, "
            f"t=[{self.start_time:.4f}, {self.end_time:.4f}])"
        )
