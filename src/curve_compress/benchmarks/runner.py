"""Benchmark runner infrastructure.

Provides classes for running systematic compression benchmarks and
collecting results.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional, Sequence
from pathlib import Path
import json

import numpy as np

from ..compression import CompressionMethod, CompressionParams, compress_with_method
from ..curves.samples import SampleData, as_time_series


@dataclass
class TimingResult:
    """Timing information for a benchmark run.

    Attributes:
        total_time: Total wall-clock time in seconds.
        compression_time: Time spent building the compressed curve.
        evaluation_time: Time spent evaluating it at the sample times.
        n_samples: Number of input samples.
    """
    total_time: float
    compression_time: float = 0.0
    evaluation_time: float = 0.0
    n_samples: int = 0

    @property
    def time_per_sample(self) -> float:
        """Average compression time per input sample."""
        if self.n_samples == 0:
            return 0.0
        return self.compression_time / self.n_samples

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'total_time': self.total_time,
            'compression_time': self.compression_time,
            'evaluation_time': self.evaluation_time,
            'n_samples': self.n_samples,
            'time_per_sample': self.time_per_sample,
        }


@dataclass
class BenchmarkResult:
    """Result of a single benchmark run.

    Attributes:
        name: Name/identifier of the benchmark.
        method: Compression method used.
        tolerance: Requested tolerance.
        n_segments: Number of segments produced.
        compression_ratio: Segments per input sample.
        max_error: Maximum absolute error at the input samples.
        mean_error: Mean absolute error at the input samples.
        timing: Timing information.
        within_tolerance: Whether max_error <= tolerance.
        metadata: Additional benchmark-specific data.
    """
    name: str
    method: CompressionMethod
    tolerance: float
    n_segments: int
    compression_ratio: float
    max_error: float
    mean_error: float
    timing: TimingResult
    within_tolerance: Optional[bool] = None
    metadata: dict = field(default_factory=dict)

    def __post_init__(self):
        if self.within_tolerance is None:
            self.within_tolerance = bool(self.max_error <= self.tolerance)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'name': self.name,
            'method': self.method.name,
            'tolerance': self.tolerance,
            'n_segments': self.n_segments,
            'compression_ratio': self.compression_ratio,
            'max_error': self.max_error,
            'mean_error': self.mean_error,
            'timing': self.timing.to_dict(),
            'within_tolerance': self.within_tolerance,
            'metadata': self.metadata,
        }

    def summary(self) -> str:
        """Return a formatted summary string."""
        return '\n'.join([
            f"Benchmark: {self.name}",
            f"  Method: {self.method.name}",
            f"  Segments: {self.n_segments} (ratio {self.compression_ratio:.4f})",
            f"  Max error: {self.max_error:.6f} (tolerance {self.tolerance:g})",
            f"  Mean error: {self.mean_error:.6f}",
            f"  Within tolerance: {self.within_tolerance}",
            f"  Total time: {self.timing.total_time * 1000:.2f}ms",
        ])


@dataclass
class BenchmarkSuite:
    """Collection of benchmark results.

    Attributes:
        name: Name of the benchmark suite.
        results: List of individual benchmark results.
        metadata: Suite-level metadata.
    """
    name: str
    results: list[BenchmarkResult] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)

    def add_result(self, result: BenchmarkResult):
        """Add a benchmark result to the suite."""
        self.results.append(result)

    @property
    def n_benchmarks(self) -> int:
        """Number of benchmarks in suite."""
        return len(self.results)

    @property
    def n_within_tolerance(self) -> int:
        return sum(1 for r in self.results if r.within_tolerance)

    @property
    def pass_rate(self) -> float:
        """Fraction of runs meeting their tolerance (nan for an empty suite)."""
        if not self.results:
            return float('nan')
        return self.n_within_tolerance / self.n_benchmarks

    @property
    def total_time(self) -> float:
        """Total time for all benchmarks."""
        return sum(r.timing.total_time for r in self.results)

    @property
    def method_counts(self) -> dict[str, int]:
        """Number of runs per compression method."""
        counts: dict[str, int] = {}
        for r in self.results:
            counts[r.method.name] = counts.get(r.method.name, 0) + 1
        return counts

    def best_by_ratio(self) -> BenchmarkResult | None:
        """Run with the lowest compression ratio among those within tolerance."""
        passing = [r for r in self.results if r.within_tolerance]
        if not passing:
            return None
        return min(passing, key=lambda r: r.compression_ratio)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'name': self.name,
            'n_benchmarks': self.n_benchmarks,
            'n_within_tolerance': self.n_within_tolerance,
            'pass_rate': self.pass_rate if not np.isnan(self.pass_rate) else None,
            'total_time': self.total_time,
            'method_counts': self.method_counts,
            'results': [r.to_dict() for r in self.results],
            'metadata': self.metadata,
        }

    def save(self, path: Path | str):
        """Save results to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Path | str) -> BenchmarkSuite:
        """Load results from JSON file."""
        with open(path) as f:
            data = json.load(f)

        suite = cls(name=data['name'], metadata=data.get('metadata', {}))
        for r in data['results']:
            # Filter out computed properties from timing dict
            timing_data = {k: v for k, v in r['timing'].items()
                           if k != 'time_per_sample'}
            result = BenchmarkResult(
                name=r['name'],
                method=CompressionMethod[r['method']],
                tolerance=r['tolerance'],
                n_segments=r['n_segments'],
                compression_ratio=r['compression_ratio'],
                max_error=r['max_error'],
                mean_error=r['mean_error'],
                timing=TimingResult(**timing_data),
                within_tolerance=r['within_tolerance'],
                metadata=r.get('metadata', {}),
            )
            suite.add_result(result)
        return suite

    def summary(self) -> str:
        """Return a formatted summary string."""
        lines = [
            f"Benchmark Suite: {self.name}",
            f"=" * 50,
            f"Total benchmarks: {self.n_benchmarks}",
            f"Method counts: {self.method_counts}",
            f"Within tolerance: {self.n_within_tolerance}/{self.n_benchmarks}",
            f"Total time: {self.total_time:.3f}s",
            "",
        ]
        for r in self.results:
            lines.append(r.summary())
            lines.append("")
        return '\n'.join(lines)


class BenchmarkRunner:
    """Runner for executing compression benchmarks.

    Provides utilities for:
    - Running single benchmarks with timing
    - Comparing all methods on one signal
    - Sweeping the tolerance
    """

    def __init__(
        self,
        tolerance: float = 0.01,
        verbose: bool = True
    ):
        """Initialize benchmark runner.

        Args:
            tolerance: Default tolerance for compression.
            verbose: Whether to print progress.
        """
        self.tolerance = tolerance
        self.verbose = verbose

    def run_single(
        self,
        name: str,
        samples: SampleData,
        method: CompressionMethod = CompressionMethod.BEZIER_DIRECT,
        tolerance: Optional[float] = None,
        **kwargs
    ) -> BenchmarkResult:
        """Run a single benchmark.

        Args:
            name: Benchmark name/identifier.
            samples: Signal to compress.
            method: Compression method.
            tolerance: Override default tolerance.
            **kwargs: Additional CompressionParams fields.

        Returns:
            BenchmarkResult with timing and error data.
        """
        series = as_time_series(samples)
        tol = tolerance or self.tolerance
        params = CompressionParams(tolerance=tol, method=method, **kwargs)

        if self.verbose:
            print(f"Running benchmark: {name} [{params.method.name}]...", end=' ', flush=True)

        start_time = time.perf_counter()
        curve = compress_with_method(series, params.method, params)
        compression_time = time.perf_counter() - start_time

        eval_start = time.perf_counter()
        errors = curve.errors(series)
        evaluation_time = time.perf_counter() - eval_start

        timing = TimingResult(
            total_time=compression_time + evaluation_time,
            compression_time=compression_time,
            evaluation_time=evaluation_time,
            n_samples=series.n_samples,
        )

        result = BenchmarkResult(
            name=name,
            method=params.method,
            tolerance=tol,
            n_segments=curve.n_segments,
            compression_ratio=curve.n_segments / series.n_samples,
            max_error=float(errors.max()),
            mean_error=float(errors.mean()),
            timing=timing,
            metadata={'n_samples': series.n_samples},
        )

        if self.verbose:
            ok = "OK" if result.within_tolerance else "OVER"
            print(f"{result.n_segments} segments, max error {result.max_error:.4g} ({ok}) "
                  f"[{timing.total_time * 1000:.1f}ms]")

        return result

    def run_method_comparison(
        self,
        name: str,
        samples: SampleData,
        methods: Sequence[CompressionMethod] | None = None,
        tolerance: Optional[float] = None
    ) -> BenchmarkSuite:
        """Compress one signal with every method.

        Args:
            name: Signal name; results are named ``{name}_{method}``.
            samples: Signal to compress.
            methods: Methods to compare (defaults to all).
            tolerance: Override default tolerance.

        Returns:
            BenchmarkSuite with one result per method.
        """
        methods = list(methods) if methods is not None else list(CompressionMethod)
        suite = BenchmarkSuite(name=f"{name}_methods", metadata={'signal': name})

        if self.verbose:
            print(f"\nMethod comparison: {name}")
            print("=" * 50)

        for method in methods:
            suite.add_result(self.run_single(
                f"{name}_{method.name.lower()}", samples, method, tolerance
            ))
        return suite

    def run_tolerance_sweep(
        self,
        name: str,
        samples: SampleData,
        tolerances: Sequence[float],
        method: CompressionMethod = CompressionMethod.BEZIER_DIRECT
    ) -> BenchmarkSuite:
        """Compress one signal at several tolerances.

        Useful for checking that the segment count falls as the tolerance
        grows.

        Args:
            name: Signal name; results are named ``{name}_tol{tolerance}``.
            samples: Signal to compress.
            tolerances: Tolerances to try.
            method: Compression method.

        Returns:
            BenchmarkSuite with one result per tolerance.
        """
        suite = BenchmarkSuite(
            name=f"{name}_sweep",
            metadata={'signal': name, 'method': method.name, 'tolerances': list(tolerances)},
        )

        if self.verbose:
            print(f"\nTolerance sweep: {name} [{method.name}]")
            print("=" * 50)

        for tol in tolerances:
            suite.add_result(self.run_single(f"{name}_tol{tol:g}", samples, method, tol))
        return suite

    def run_suite(
        self,
        suite_name: str,
        signals: dict[str, SampleData],
        methods: Sequence[CompressionMethod] | None = None
    ) -> BenchmarkSuite:
        """Run every method on every signal.

        Args:
            suite_name: Name for the benchmark suite.
            signals: Signals keyed by name.
            methods: Methods to run (defaults to all).

        Returns:
            BenchmarkSuite with all results.
        """
        suite = BenchmarkSuite(name=suite_name, metadata={'tolerance': self.tolerance})

        if self.verbose:
            print(f"\nRunning benchmark suite: {suite_name}")
            print("=" * 50)

        for signal_name, samples in signals.items():
            comparison = self.run_method_comparison(signal_name, samples, methods)
            for result in comparison.results:
                suite.add_result(result)

        if self.verbose:
            print("=" * 50)
            print(f"Suite complete: {suite.n_benchmarks} benchmarks in {suite.total_time:.3f}s")
            print(f"Within tolerance: {suite.n_within_tolerance}/{suite.n_benchmarks}")

        return suite
