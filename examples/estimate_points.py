"""Control point estimation example.

Runs the seven control point estimators on a complex waveform, then
compresses it with a fixed number of control points chosen by the total
variation estimator.

Usage:
    python estimate_points.py
    python estimate_points.py --save --outdir ./figs
"""

import argparse
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from curve_compress.benchmarks import complex_waveform
from curve_compress.compression import CompressionMode, CompressionParams, compress_data
from curve_compress.estimation import EstimationMethod, estimate_all
from curve_compress.utils import plot_compression, plot_estimates


def run(tolerance=0.05):
    series = complex_waveform(n_samples=300)

    print("=" * 60)
    print(f"Control point estimates (tolerance {tolerance})")
    print("=" * 60)
    estimates = estimate_all(series, tolerance, min_points=2, max_points=60)
    for name, result in estimates.items():
        print(f"  {name:<16} {result.optimal_point_count:3d}  {result!r}")

    params = CompressionParams(
        tolerance=tolerance,
        mode=CompressionMode.ESTIMATED_CONTROL_POINTS,
        estimation_method=EstimationMethod.TOTAL_VARIATION,
    )
    result = compress_data(series, params)
    print("\nEstimated-budget compression:")
    print(result.summary())
    return series, estimates, result


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Control point estimation example")
    parser.add_argument('--save', action='store_true', help='Save plots to files')
    parser.add_argument('--outdir', type=str, default='.', help='Output directory')
    args = parser.parse_args()

    series, estimates, result = run()

    if args.save:
        outdir = Path(args.outdir)
        outdir.mkdir(parents=True, exist_ok=True)
        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 4))
        plot_estimates(estimates, ax1)
        plot_compression(series, result, ax2)
        fig.savefig(outdir / 'estimate_points.png', dpi=150, bbox_inches='tight')
        print(f"\nFigure saved to {outdir.absolute()}")
