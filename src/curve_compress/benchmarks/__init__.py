"""Benchmarking infrastructure for curve-compress.

This module provides tools for:
- Generating synthetic test signals
- Running systematic benchmarks (BenchmarkRunner)
- Comparing methods and sweeping tolerances
"""

from .runner import (
    BenchmarkResult,
    BenchmarkRunner,
    BenchmarkSuite,
    TimingResult,
)
from .signals import (
    sine_wave,
    complex_waveform,
    step_function,
    noisy_sine,
    exponential,
    constant,
    get_standard_signals,
)

__all__ = [
    # Runner
    'BenchmarkResult',
    'BenchmarkRunner',
    'BenchmarkSuite',
    'TimingResult',
    # Signals
    'sine_wave',
    'complex_waveform',
    'step_function',
    'noisy_sine',
    'exponential',
    'constant',
    'get_standard_signals',
]
