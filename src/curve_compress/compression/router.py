"""Compression entry points: method dispatch, modes, and adaptive selection."""

from __future__ import annotations

import logging
import numbers
import time
from typing import Callable

from ..algorithms.bezier import compress_bezier
from ..algorithms.bspline import compress_bspline, fixed_control_point_curve, linear_segment
from ..algorithms.rdp import compress_rdp
from ..core.validation import validate_control_point_count, validate_point_count
from ..curves.compressed import CompressedCurve
from ..curves.samples import SampleData, TimeSeries, as_time_series
from ..estimation.estimators import estimate
from .params import CompressionMethod, CompressionMode, CompressionParams
from .result import CompressionResult
from .selector import select_best_algorithm

logger = logging.getLogger(__name__)


def _rdp(series: TimeSeries, method: CompressionMethod, params: CompressionParams) -> CompressedCurve:
    return compress_rdp(
        series,
        params.tolerance,
        curve_type=method.curve_type,
        importance_threshold=params.importance_threshold,
        weights=params.effective_weights,
    )


_METHODS: dict[CompressionMethod, Callable[[TimeSeries, CompressionMethod, CompressionParams], CompressedCurve]] = {
    CompressionMethod.RDP_LINEAR: _rdp,
    CompressionMethod.RDP_BSPLINE: _rdp,
    CompressionMethod.RDP_BEZIER: _rdp,
    CompressionMethod.BSPLINE_DIRECT: lambda s, m, p: compress_bspline(s, p.tolerance),
    CompressionMethod.BEZIER_DIRECT: lambda s, m, p: compress_bezier(s, p.tolerance),
}


def _to_params(params_or_tolerance: CompressionParams | float | None) -> CompressionParams:
    if params_or_tolerance is None:
        return CompressionParams()
    if isinstance(params_or_tolerance, CompressionParams):
        return params_or_tolerance
    if isinstance(params_or_tolerance, numbers.Real) and not isinstance(params_or_tolerance, bool):
        return CompressionParams(tolerance=float(params_or_tolerance))
    raise TypeError(
        f"Expected CompressionParams or a tolerance, got {type(params_or_tolerance).__name__}"
    )


def _prepare(samples: SampleData) -> TimeSeries:
    series = as_time_series(samples)
    validate_point_count(series.n_samples, 2, "samples")
    return series


def compress_with_method(
    samples: SampleData,
    method: CompressionMethod | str,
    params: CompressionParams | None = None
) -> CompressedCurve:
    """Compress with one specific method at the parameters' tolerance.

    Series of two samples always give a single linear segment. Unknown
    methods fall back to ``BEZIER_DIRECT`` with a warning.

    Args:
        samples: Input samples (at least 2).
        method: Compression method or method name.
        params: Tolerance, importance settings; defaults to CompressionParams().

    Returns:
        CompressedCurve covering the input's time range.
    """
    series = _prepare(samples)
    method = CompressionMethod.resolve(method)
    if params is None:
        params = CompressionParams(method=method)

    if series.n_samples <= 2:
        return CompressedCurve([linear_segment(series, 0, series.n_samples - 1)])

    curve = _METHODS[method](series, method, params)
    logger.debug(
        "%s compressed %d samples into %d segments",
        method.name, series.n_samples, curve.n_segments
    )
    return curve


def _compress_curve(series: TimeSeries, params: CompressionParams) -> CompressedCurve:
    n = series.n_samples
    if params.mode == CompressionMode.FIXED_CONTROL_POINTS:
        count = validate_control_point_count(
            params.fixed_control_points, n, "fixed_control_points"
        )
    if n <= 2 or params.mode == CompressionMode.TOLERANCE:
        return compress_with_method(series, params.method, params)

    if params.mode == CompressionMode.ESTIMATED_CONTROL_POINTS:
        result = estimate(series, params.estimation_method, params.tolerance)
        count = min(max(result.optimal_point_count, 2), n)
        logger.debug("Estimated %d control points with %s", count, result.method_name)

    return fixed_control_point_curve(series, count, params.method.curve_type)


def compress(
    samples: SampleData,
    params_or_tolerance: CompressionParams | float | None = None
) -> CompressedCurve:
    """Compress a series into a curve.

    Args:
        samples: Input samples (at least 2).
        params_or_tolerance: CompressionParams, or a bare tolerance for the
            default method (``BEZIER_DIRECT``).

    Returns:
        CompressedCurve reconstructing the samples.

    Example:
        >>> t = np.linspace(0, 1, 101)
        >>> curve = compress(np.column_stack([t, np.sin(2 * np.pi * t)]), 0.01)
        >>> curve.n_segments < 20
        True
    """
    series = _prepare(samples)
    return _compress_curve(series, _to_params(params_or_tolerance))


def compress_data(
    samples: SampleData,
    params: CompressionParams | float | None = None
) -> CompressionResult:
    """Compress a series and measure the reconstruction.

    Honours ``params.mode``: tolerance-driven fitting, a fixed number of
    control points, or a count chosen by ``params.estimation_method``.

    Returns:
        CompressionResult with the curve and its error metrics.
    """
    series = _prepare(samples)
    params = _to_params(params)

    start = time.perf_counter()
    curve = _compress_curve(series, params)
    elapsed_ms = (time.perf_counter() - start) * 1000 if params.measure_time else 0.0

    return CompressionResult.from_curve(
        series, curve, params.method, params.mode, compression_time_ms=elapsed_ms
    )


def compress_adaptive(
    samples: SampleData,
    tolerance: float = 0.01,
    params: CompressionParams | None = None
) -> CompressionResult:
    """Compress with the method best suited to the data.

    The series is analysed and compressed with the selected primary method.
    If that misses the tolerance, the fallback method is tried as well and
    the result with the better quality score is kept.

    Args:
        samples: Input samples (at least 2).
        tolerance: Maximum accepted absolute error.
        params: Optional base parameters (importance settings); their
            tolerance is replaced by ``tolerance``.

    Returns:
        CompressionResult of the chosen method.
    """
    series = _prepare(samples)
    base = params or CompressionParams()
    selection = select_best_algorithm(series)

    def run(method: CompressionMethod) -> CompressionResult:
        run_params = CompressionParams(
            tolerance=tolerance,
            method=method,
            data_type=base.data_type,
            importance_threshold=base.importance_threshold,
            weights=base.weights,
            measure_time=base.measure_time,
        )
        return compress_data(series, run_params)

    result = run(selection.primary)
    if result.max_error > tolerance:
        alternative = run(selection.fallback)
        logger.debug(
            "Primary %s missed tolerance (%.4g); fallback %s quality %.4g vs %.4g",
            selection.primary.name, result.max_error, selection.fallback.name,
            alternative.quality, result.quality
        )
        if alternative.quality < result.quality:
            result = alternative
    return result
