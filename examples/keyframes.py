"""Keyframe curve round trip example.

Samples a dense keyframe curve, compresses the samples, and converts the
compressed curve back into a keyframe curve with far fewer keys.

Usage:
    python keyframes.py
"""

import logging

import numpy as np
from scipy.interpolate import CubicHermiteSpline

from curve_compress.adapters import KeyframeCurveAdapter, compressed_from_host_curve
from curve_compress.compression import CompressionParams, DataType, compress
from curve_compress.utils import get_logger

# Show the library's segment counts
get_logger("curve_compress", level=logging.DEBUG)


if __name__ == "__main__":
    keys = np.linspace(0.0, 4.0, 41)
    host = CubicHermiteSpline(keys, np.sin(keys) * np.exp(-0.3 * keys),
                              np.cos(keys) * np.exp(-0.3 * keys)
                              - 0.3 * np.sin(keys) * np.exp(-0.3 * keys))

    adapter = KeyframeCurveAdapter()
    samples = adapter.from_host_curve(host, sample_count=400)

    params = CompressionParams(tolerance=0.005, data_type=DataType.ANIMATION)
    curve = compress(samples, params)
    print(f"{samples.n_samples} samples -> {curve.n_segments} segments, "
          f"max error {curve.max_error(samples):.5f}")

    rebuilt = adapter.to_host_curve(curve, sample_count=50)
    t = np.linspace(0.0, 4.0, 1000)
    print(f"Rebuilt keyframe curve: {len(rebuilt.x)} keys, "
          f"max deviation {np.max(np.abs(rebuilt(t) - host(t))):.5f}")

    exact = compressed_from_host_curve(host)
    print(f"Direct conversion: {exact.n_segments} Bezier segments, "
          f"max deviation {np.max(np.abs(exact(t) - host(t))):.2e}")
