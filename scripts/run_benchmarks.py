#!/usr/bin/env python3
"""Run the curve-compress benchmarks.

This script runs:
1. Method comparison on every standard signal
2. Tolerance sweeps (segment count vs. tolerance)
3. Control point estimation on every standard signal

Usage:
    python scripts/run_benchmarks.py [--quick] [--save] [--outdir DIR] [--tolerance TOL]

Options:
    --quick      Run on the sine and noisy signals only
    --save       Save figures and results
    --outdir     Output directory (default: ./results/benchmarks)
    --tolerance  Compression tolerance (default: 0.01)
"""

from __future__ import annotations

import argparse
import json
import logging
import time
from pathlib import Path
from typing import Any

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from curve_compress.benchmarks import BenchmarkRunner, BenchmarkSuite, get_standard_signals
from curve_compress.compression import CompressionMethod
from curve_compress.estimation import estimate_all
from curve_compress.utils import get_logger

logger = get_logger("curve_compress.benchmarks", level=logging.INFO)

QUICK_SIGNALS = ('sine', 'noisy_sine')


def run_sweeps(
    signals: dict,
    tolerances: list[float],
    verbose: bool = True
) -> dict[str, BenchmarkSuite]:
    """Sweep the tolerance for each signal with each direct fitter."""
    runner = BenchmarkRunner(verbose=verbose)
    sweeps = {}
    for name, series in signals.items():
        for method in (CompressionMethod.BEZIER_DIRECT, CompressionMethod.BSPLINE_DIRECT):
            sweep = runner.run_tolerance_sweep(name, series, tolerances, method)
            sweeps[sweep.name + f"_{method.name.lower()}"] = sweep
    return sweeps


def run_estimation(signals: dict, tolerance: float) -> dict[str, Any]:
    """Run all control point estimators on each signal."""
    print("\n" + "=" * 60)
    print("Control Point Estimation")
    print("=" * 60)

    results = {}
    for name, series in signals.items():
        start = time.perf_counter()
        estimates = estimate_all(series, tolerance)
        elapsed = time.perf_counter() - start
        counts = {key: r.optimal_point_count for key, r in estimates.items()}
        print(f"  {name:<12} {counts}  [{elapsed:.2f}s]")
        results[name] = counts
    return results


def plot_sweeps(sweeps: dict[str, BenchmarkSuite], save_path: Path):
    """Plot segment count against tolerance for every sweep."""
    fig, ax = plt.subplots(figsize=(8, 5))
    for name, sweep in sweeps.items():
        tolerances = [r.tolerance for r in sweep.results]
        segments = [r.n_segments for r in sweep.results]
        ax.plot(tolerances, segments, 'o-', label=name)
    ax.set_xscale('log')
    ax.set_xlabel('Tolerance')
    ax.set_ylabel('Segments')
    ax.set_title('Segment count vs. tolerance')
    ax.legend(fontsize=7)
    fig.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    logger.info("Saved figure to %s", save_path)


def save_results(results: dict[str, Any], save_path: Path):
    """Save results to JSON."""
    def convert(obj):
        if isinstance(obj, BenchmarkSuite):
            return obj.to_dict()
        if isinstance(obj, dict):
            return {k: convert(v) for k, v in obj.items()}
        if isinstance(obj, (np.integer, np.floating)):
            return obj.item()
        return obj

    with open(save_path, 'w') as f:
        json.dump(convert(results), f, indent=2)
    logger.info("Saved results to %s", save_path)


def main():
    parser = argparse.ArgumentParser(
        description="Run curve-compress benchmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--quick', action='store_true',
                        help='Run on the sine and noisy signals only')
    parser.add_argument('--save', action='store_true',
                        help='Save figures and results')
    parser.add_argument('--outdir', type=str, default='./results/benchmarks',
                        help='Output directory')
    parser.add_argument('--tolerance', type=float, default=0.01,
                        help='Compression tolerance (default: 0.01)')
    args = parser.parse_args()

    outdir = Path(args.outdir)
    if args.save:
        outdir.mkdir(parents=True, exist_ok=True)

    signals = get_standard_signals()
    if args.quick:
        signals = {k: v for k, v in signals.items() if k in QUICK_SIGNALS}

    print("=" * 60)
    print("Curve-Compress Benchmark Suite")
    print("=" * 60)
    print(f"Mode: {'quick' if args.quick else 'full'}, tolerance {args.tolerance:g}")

    total_start = time.perf_counter()
    all_results: dict[str, Any] = {}

    runner = BenchmarkRunner(tolerance=args.tolerance)
    all_results['methods'] = runner.run_suite('standard_signals', signals)

    tolerances = [args.tolerance * f for f in (0.25, 0.5, 1.0, 2.0, 4.0, 8.0)]
    sweeps = run_sweeps(signals, tolerances, verbose=not args.quick)
    all_results['sweeps'] = sweeps

    all_results['estimation'] = run_estimation(signals, args.tolerance)

    total_time = time.perf_counter() - total_start

    print("\n" + "=" * 60)
    print("Benchmark Summary")
    print("=" * 60)
    suite = all_results['methods']
    print(f"Within tolerance: {suite.n_within_tolerance}/{suite.n_benchmarks}")
    best = suite.best_by_ratio()
    if best is not None:
        print(f"Best ratio: {best.name} ({best.compression_ratio:.4f})")
    print(f"Total runtime: {total_time:.1f}s")

    if args.save:
        save_results(all_results, outdir / 'benchmark_results.json')
        plot_sweeps(sweeps, outdir / 'tolerance_sweeps.png')

    print("\nBenchmarks complete!")


if __name__ == '__main__':
    main()
