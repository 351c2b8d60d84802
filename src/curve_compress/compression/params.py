"""Compression parameters and method enumerations."""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from enum import Enum, auto

import numpy as np

from ..algorithms.importance import DataType, ImportanceWeights, resolve_weights
from ..core.validation import validate_positive, validate_tolerance
from ..curves.segments import CurveType
from ..estimation.estimators import EstimationMethod

logger = logging.getLogger(__name__)


class CompressionMethod(Enum):
    """Compression algorithm variants."""
    RDP_LINEAR = auto()
    RDP_BSPLINE = auto()
    RDP_BEZIER = auto()
    BSPLINE_DIRECT = auto()
    BEZIER_DIRECT = auto()

    @property
    def is_rdp(self) -> bool:
        return self in (
            CompressionMethod.RDP_LINEAR,
            CompressionMethod.RDP_BSPLINE,
            CompressionMethod.RDP_BEZIER,
        )

    @property
    def curve_type(self) -> CurveType:
        """Segment type the method produces between retained samples."""
        return {
            CompressionMethod.RDP_LINEAR: CurveType.LINEAR,
            CompressionMethod.RDP_BSPLINE: CurveType.BSPLINE,
            CompressionMethod.RDP_BEZIER: CurveType.BEZIER,
            CompressionMethod.BSPLINE_DIRECT: CurveType.BSPLINE,
            CompressionMethod.BEZIER_DIRECT: CurveType.BEZIER,
        }[self]

    @classmethod
    def resolve(cls, method: CompressionMethod | str) -> CompressionMethod:
        """Turn an enum member or a method name into a member.

        Names are matched case-insensitively; the short names ``"rdp"``,
        ``"bspline"`` and ``"bezier"`` are also accepted. Anything else
        falls back to ``BEZIER_DIRECT`` with a warning.
        """
        if isinstance(method, cls):
            return method

        if isinstance(method, str):
            key = method.strip().upper().replace('-', '_')
            aliases = {
                'RDP': cls.RDP_LINEAR,
                'BSPLINE': cls.BSPLINE_DIRECT,
                'BEZIER': cls.BEZIER_DIRECT,
            }
            if key in cls.__members__:
                return cls[key]
            if key in aliases:
                return aliases[key]

        warnings.warn(
            f"Unknown compression method {method!r}. "
            "Falling back to BEZIER_DIRECT."
        )
        logger.debug("Unknown method %r resolved to BEZIER_DIRECT", method)
        return cls.BEZIER_DIRECT


class CompressionMode(Enum):
    """How the size of the compressed curve is decided.

    TOLERANCE: adaptive fitting to the error tolerance.
    FIXED_CONTROL_POINTS: a caller-chosen number of control points.
    ESTIMATED_CONTROL_POINTS: a control point count chosen by an estimator.
    """
    TOLERANCE = auto()
    FIXED_CONTROL_POINTS = auto()
    ESTIMATED_CONTROL_POINTS = auto()


@dataclass
class CompressionParams:
    """Configuration of a compression call.

    Attributes:
        tolerance: Maximum accepted absolute error (must be positive).
        method: Compression algorithm; a method name is also accepted.
        data_type: Signal kind selecting the importance weight preset.
        importance_threshold: Scale of the RDP importance boost (positive).
        weights: Explicit importance weights; overrides the preset.
        mode: How the curve size is decided.
        fixed_control_points: Control point count for fixed mode.
        estimation_method: Estimator used in estimated mode.
        measure_time: Record the compression wall time in results.
    """
    tolerance: float = 0.01
    method: CompressionMethod = CompressionMethod.BEZIER_DIRECT
    data_type: DataType = DataType.CUSTOM
    importance_threshold: float = 1.0
    weights: ImportanceWeights | None = None
    mode: CompressionMode = CompressionMode.TOLERANCE
    fixed_control_points: int = 10
    estimation_method: EstimationMethod = EstimationMethod.TOTAL_VARIATION
    measure_time: bool = False

    def __post_init__(self) -> None:
        self.tolerance = validate_tolerance(self.tolerance)
        self.importance_threshold = validate_positive(
            self.importance_threshold, "importance_threshold"
        )
        self.method = CompressionMethod.resolve(self.method)

        if not isinstance(self.data_type, DataType):
            raise TypeError(f"data_type must be a DataType, got {type(self.data_type).__name__}")
        if self.weights is not None and not isinstance(self.weights, ImportanceWeights):
            raise TypeError(
                f"weights must be ImportanceWeights or None, got {type(self.weights).__name__}"
            )
        if not isinstance(self.mode, CompressionMode):
            raise TypeError(f"mode must be a CompressionMode, got {type(self.mode).__name__}")
        if not isinstance(self.estimation_method, EstimationMethod):
            raise TypeError(
                f"estimation_method must be an EstimationMethod, "
                f"got {type(self.estimation_method).__name__}"
            )
        if (isinstance(self.fixed_control_points, bool)
                or not isinstance(self.fixed_control_points, (int, np.integer))):
            raise TypeError(
                f"fixed_control_points must be an integer, "
                f"got {type(self.fixed_control_points).__name__}"
            )
        if self.fixed_control_points < 2:
            raise ValueError(
                f"fixed_control_points must be at least 2, but got {self.fixed_control_points}"
            )

    @property
    def effective_weights(self) -> ImportanceWeights:
        """Explicit weights if given, else the preset for ``data_type``."""
        return resolve_weights(self.data_type, self.weights)
