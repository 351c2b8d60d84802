"""Tests for logging and plotting helpers."""

import logging

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from curve_compress.compression import compress_data
from curve_compress.curves import TimeSeries
from curve_compress.estimation import estimate_all
from curve_compress.utils import get_logger, plot_compression, plot_segments, plot_estimates


def sine_series():
    t = np.linspace(0, 1, 101)
    return TimeSeries(t, np.sin(2 * np.pi * t))


class TestGetLogger:
    """Tests for logger setup."""

    def test_single_handler(self):
        """Test that repeated calls do not stack handlers."""
        logger = get_logger("curve_compress.test_single")
        get_logger("curve_compress.test_single", level=logging.DEBUG)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG


class TestPlots:
    """Smoke tests for the plotting helpers."""

    def test_plot_compression(self):
        series = sine_series()
        result = compress_data(series, 0.01)
        ax = plot_compression(series, result)
        assert "BEZIER_DIRECT" in ax.get_title()
        plt.close('all')

    def test_plot_segments_on_axes(self):
        fig, ax = plt.subplots()
        result = compress_data(sine_series(), 0.05)
        assert plot_segments(result.curve, ax, show_boundaries=False) is ax
        plt.close(fig)

    def test_plot_estimates(self):
        estimates = estimate_all(sine_series(), 0.01, max_points=20)
        ax = plot_estimates(estimates)
        assert len(ax.patches) == len(estimates)
        plt.close('all')
