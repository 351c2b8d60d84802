"""Visualization utilities for compressed curves and estimator output."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from ..curves.segments import CurveType

if TYPE_CHECKING:
    from ..curves.compressed import CompressedCurve
    from ..curves.samples import TimeSeries
    from ..compression.result import CompressionResult
    from ..estimation.estimators import EstimationResult

SEGMENT_COLORS = {
    CurveType.LINEAR: 'tab:gray',
    CurveType.BEZIER: 'tab:blue',
    CurveType.BSPLINE: 'tab:green',
}


def plot_segments(
    curve: CompressedCurve,
    ax: plt.Axes | None = None,
    points_per_segment: int = 50,
    show_boundaries: bool = True
) -> plt.Axes:
    """Plot each segment of a compressed curve, colored by curve type.

    Args:
        curve: Compressed curve to plot.
        ax: Matplotlib axes (creates new if None).
        points_per_segment: Evaluation points per segment.
        show_boundaries: Mark segment start and end points.

    Returns:
        The matplotlib axes.
    """
    if ax is None:
        fig, ax = plt.subplots()

    labelled = set()
    for segment in curve.segments:
        t = np.linspace(segment.start_time, segment.end_time, points_per_segment)
        label = None
        if segment.curve_type not in labelled:
            label = segment.curve_type.name.capitalize()
            labelled.add(segment.curve_type)
        ax.plot(t, segment.evaluate(t), color=SEGMENT_COLORS[segment.curve_type], label=label)

    if show_boundaries:
        times = [s.start_time for s in curve.segments] + [curve.end_time]
        values = [s.start_value for s in curve.segments] + [curve.segments[-1].end_value]
        ax.plot(times, values, 'ko', markersize=3)

    ax.set_xlabel('Time')
    ax.set_ylabel('Value')
    return ax


def plot_compression(
    series: TimeSeries,
    result: CompressionResult,
    ax: plt.Axes | None = None
) -> plt.Axes:
    """Plot original samples against the compressed reconstruction.

    Args:
        series: Original samples.
        result: Compression result for the samples.
        ax: Matplotlib axes.

    Returns:
        The matplotlib axes.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 5))

    ax.plot(series.times, series.values, '.', color='lightgray', label='Original')
    plot_segments(result.curve, ax)

    ax.set_title(
        f'{result.method.name}: {result.compressed_count} segments, '
        f'max error {result.max_error:.4g}'
    )
    ax.legend()
    return ax


def plot_estimates(
    estimates: dict[str, EstimationResult],
    ax: plt.Axes | None = None
) -> plt.Axes:
    """Bar chart of the point count recommended by each estimator.

    Args:
        estimates: Results keyed by estimator name, as from estimate_all.
        ax: Matplotlib axes.

    Returns:
        The matplotlib axes.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 4))

    names = list(estimates.keys())
    counts = [estimates[name].optimal_point_count for name in names]

    ax.bar(range(len(names)), counts, color='tab:blue', alpha=0.8)
    ax.set_xticks(range(len(names)))
    ax.set_xticklabels(names, rotation=30, ha='right')
    ax.set_ylabel('Control points')
    ax.set_title('Estimated control point counts')
    return ax
