"""Synthetic test signals for benchmarks and examples.

All generators sample ``n_samples`` evenly spaced times over
``[0, duration]`` and return a :class:`TimeSeries`. Random components use
``numpy.random.default_rng(seed)`` so runs are reproducible.
"""

from __future__ import annotations

import numpy as np

from ..curves.samples import TimeSeries


def _times(n_samples: int, duration: float) -> np.ndarray:
    if n_samples < 2:
        raise ValueError(f"n_samples must be at least 2, but got {n_samples}")
    if duration <= 0:
        raise ValueError(f"duration must be positive, but got {duration}")
    return np.linspace(0.0, duration, n_samples)


def sine_wave(
    n_samples: int = 101,
    duration: float = 1.0,
    frequency: float = 1.0,
    amplitude: float = 1.0
) -> TimeSeries:
    """``amplitude * sin(2 pi frequency t)``."""
    t = _times(n_samples, duration)
    return TimeSeries(t, amplitude * np.sin(2 * np.pi * frequency * t))


def complex_waveform(
    n_samples: int = 500,
    duration: float = 10.0,
    seed: int = 42
) -> TimeSeries:
    """Three superposed sines plus a slow random drift.

    The drift is value noise: random levels at unit steps of ``t / 2``,
    joined with a smoothstep.
    """
    t = _times(n_samples, duration)
    rng = np.random.default_rng(seed)

    x = t * 0.5
    knots = rng.uniform(0.0, 1.0, int(np.floor(x[-1])) + 2)
    i = np.floor(x).astype(int)
    f = x - i
    f = f * f * (3 - 2 * f)
    drift = knots[i] + (knots[i + 1] - knots[i]) * f

    values = (
        0.5 * np.sin(2.0 * t)
        + 0.3 * np.sin(5.0 * t)
        + 0.2 * np.sin(10.0 * t)
        + 0.4 * drift
    )
    return TimeSeries(t, values)


def step_function(
    n_samples: int = 200,
    duration: float = 10.0,
    steps: int = 5,
    step_height: float = 0.5
) -> TimeSeries:
    """Staircase rising by ``step_height`` ``steps`` times over the duration."""
    t = _times(n_samples, duration)
    level = np.floor(t / (duration / steps))
    return TimeSeries(t, level * step_height)


def noisy_sine(
    n_samples: int = 200,
    duration: float = 10.0,
    noise_level: float = 0.1,
    seed: int = 42
) -> TimeSeries:
    """``sin(2t)`` plus uniform noise in ``[-noise_level, noise_level]``."""
    t = _times(n_samples, duration)
    rng = np.random.default_rng(seed)
    noise = rng.uniform(-noise_level, noise_level, n_samples)
    return TimeSeries(t, np.sin(2.0 * t) + noise)


def exponential(
    n_samples: int = 200,
    duration: float = 5.0,
    rate: float = 0.5
) -> TimeSeries:
    """``exp(rate t) - 1``."""
    t = _times(n_samples, duration)
    return TimeSeries(t, np.exp(rate * t) - 1.0)


def constant(
    n_samples: int = 100,
    duration: float = 1.0,
    value: float = 1.0
) -> TimeSeries:
    """Flat signal."""
    t = _times(n_samples, duration)
    return TimeSeries(t, np.full(n_samples, value))


def get_standard_signals(seed: int = 42) -> dict[str, TimeSeries]:
    """Named set of signals used by the benchmark script."""
    return {
        'sine': sine_wave(),
        'complex': complex_waveform(seed=seed),
        'step': step_function(),
        'noisy_sine': noisy_sine(seed=seed),
        'exponential': exponential(),
        'constant': constant(),
    }
