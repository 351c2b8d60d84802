"""Utility functions for logging and visualization."""

from .logging import get_logger
from .visualization import plot_compression, plot_segments, plot_estimates

__all__ = [
    "get_logger",
    "plot_compression",
    "plot_segments",
    "plot_estimates",
]
