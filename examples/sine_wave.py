"""Sine wave compression example.

Compresses 101 samples of sin(2 pi t) on [0, 1] with every method at
tolerance 0.01 and prints segment counts and errors. The adaptive Bezier
fitter typically needs fewer than 20 segments.

Usage:
    python sine_wave.py                        # Print results only
    python sine_wave.py --save                 # Save plots to current directory
    python sine_wave.py --save --outdir ./figs # Save plots to specific directory
"""

import argparse
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from curve_compress.benchmarks import sine_wave
from curve_compress.compression import (
    CompressionMethod,
    CompressionParams,
    compress_data,
    compress_adaptive,
)
from curve_compress.utils import plot_compression


def compare_methods(tolerance=0.01):
    """Compress the sine with each method."""
    print("=" * 60)
    print(f"Sine wave, 101 samples, tolerance {tolerance}")
    print("=" * 60)

    series = sine_wave(n_samples=101)
    results = {}
    for method in CompressionMethod:
        params = CompressionParams(tolerance=tolerance, method=method, measure_time=True)
        result = compress_data(series, params)
        results[method] = result
        print(f"  {method.name:<15} {result.compressed_count:3d} segments, "
              f"max error {result.max_error:.5f}, {result.compression_time_ms:.2f} ms")

    adaptive = compress_adaptive(series, tolerance)
    print(f"\nAdaptive selection chose {adaptive.method.name}:")
    print(adaptive.summary())
    return series, results


def parse_args():
    parser = argparse.ArgumentParser(description="Sine wave compression example")
    parser.add_argument('--save', action='store_true',
                        help='Save plots to files')
    parser.add_argument('--outdir', type=str, default='.',
                        help='Output directory for saved plots (default: current dir)')
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    series, results = compare_methods()

    if args.save:
        outdir = Path(args.outdir)
        outdir.mkdir(parents=True, exist_ok=True)
        fig, axes = plt.subplots(len(results), 1, figsize=(10, 3 * len(results)), sharex=True)
        for ax, result in zip(axes, results.values()):
            plot_compression(series, result, ax)
        fig.tight_layout()
        fig.savefig(outdir / 'sine_wave_methods.png', dpi=150, bbox_inches='tight')
        print(f"\nFigure saved to {outdir.absolute()}")
