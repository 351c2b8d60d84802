"""Compression outcome with reconstruction metrics."""

from __future__ import annotations

from dataclasses import dataclass

from ..curves.compressed import CompressedCurve
from ..curves.samples import TimeSeries
from .params import CompressionMethod, CompressionMode

# Weight of the compression ratio in the quality score
RATIO_PENALTY = 0.1


@dataclass
class CompressionResult:
    """Result of compressing one series.

    Attributes:
        curve: The compressed curve.
        reconstructed: The curve resampled at the original sample count.
        original_count: Number of input samples.
        compressed_count: Number of segments in the curve.
        compression_ratio: ``compressed_count / original_count``.
        max_error: Maximum absolute error at the input sample times.
        mean_error: Mean absolute error at the input sample times.
        method: Method that produced the curve.
        mode: How the curve size was decided.
        compression_time_ms: Wall time of the compression (0 if not measured).
    """
    curve: CompressedCurve
    reconstructed: TimeSeries
    original_count: int
    compressed_count: int
    compression_ratio: float
    max_error: float
    mean_error: float
    method: CompressionMethod
    mode: CompressionMode = CompressionMode.TOLERANCE
    compression_time_ms: float = 0.0

    @classmethod
    def from_curve(
        cls,
        series: TimeSeries,
        curve: CompressedCurve,
        method: CompressionMethod,
        mode: CompressionMode = CompressionMode.TOLERANCE,
        compression_time_ms: float = 0.0
    ) -> CompressionResult:
        """Measure ``curve`` against the series it was compressed from."""
        errors = curve.errors(series)
        return cls(
            curve=curve,
            reconstructed=curve.to_samples(series.n_samples),
            original_count=series.n_samples,
            compressed_count=curve.n_segments,
            compression_ratio=curve.n_segments / series.n_samples,
            max_error=float(errors.max()),
            mean_error=float(errors.mean()),
            method=method,
            mode=mode,
            compression_time_ms=compression_time_ms,
        )

    @property
    def quality(self) -> float:
        """Mean error plus a small penalty on the compression ratio (lower is better)."""
        return self.mean_error + RATIO_PENALTY * self.compression_ratio

    def summary(self) -> str:
        """Generate a text summary of the result."""
        lines = [
            f"Method: {self.method.name} ({self.mode.name})",
            f"Samples: {self.original_count} -> {self.compressed_count} segments",
            f"Compression ratio: {self.compression_ratio:.4f}",
            f"Max error: {self.max_error:.6f}",
            f"Mean error: {self.mean_error:.6f}",
        ]
        if self.compression_time_ms > 0:
            lines.append(f"Time: {self.compression_time_ms:.3f} ms")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'method': self.method.name,
            'mode': self.mode.name,
            'original_count': self.original_count,
            'compressed_count': self.compressed_count,
            'compression_ratio': self.compression_ratio,
            'max_error': self.max_error,
            'mean_error': self.mean_error,
            'compression_time_ms': self.compression_time_ms,
        }

    def __repr__(self) -> str:
        return (
            f"CompressionResult(method={self.method.name}, "
            f"segments={self.compressed_count}/{self.original_count}, "
            f"max_error={self.max_error:.4g})"
        )
