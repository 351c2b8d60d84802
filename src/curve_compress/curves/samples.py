"""Sample containers: the (time, value) input of every compression call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Union

import numpy as np

from ..core.validation import validate_time_order


@dataclass(frozen=True)
class Sample:
    """A single (time, value) observation."""
    time: float
    value: float

    def __iter__(self) -> Iterator[float]:
        yield self.time
        yield self.value


@dataclass(eq=False)
class TimeSeries:
    """An ordered array of samples stored column-wise.

    Times must be non-decreasing. Input is validated, never re-sorted, so
    that out-of-order data surfaces as an error instead of being silently
    reinterpreted.

    Attributes:
        times: 1D array of sample times, shape (n_samples,)
        values: 1D array of sample values, shape (n_samples,)
    """
    times: np.ndarray
    values: np.ndarray

    def __post_init__(self) -> None:
        self.times = np.asarray(self.times, dtype=float).reshape(-1)
        self.values = np.asarray(self.values, dtype=float).reshape(-1)

        if len(self.times) != len(self.values):
            raise ValueError(
                f"Length mismatch: times has {len(self.times)} points, "
                f"values has {len(self.values)} points"
            )
        if len(self.times) == 0:
            raise ValueError("samples cannot be empty")
        if not (np.all(np.isfinite(self.times)) and np.all(np.isfinite(self.values))):
            raise ValueError("samples must contain only finite times and values")

        validate_time_order(self.times, "times")

    @property
    def n_samples(self) -> int:
        """Number of samples."""
        return len(self.times)

    @property
    def t_start(self) -> float:
        return float(self.times[0])

    @property
    def t_end(self) -> float:
        return float(self.times[-1])

    @property
    def duration(self) -> float:
        """Time span covered by the samples."""
        return self.t_end - self.t_start

    @property
    def value_range(self) -> float:
        """Difference between the largest and smallest value."""
        return float(np.max(self.values) - np.min(self.values))

    def slice(self, start: int, end: int) -> TimeSeries:
        """Return the samples with index in ``[start, end]`` (inclusive)."""
        return TimeSeries(
            times=self.times[start:end + 1].copy(),
            values=self.values[start:end + 1].copy()
        )

    def sample(self, index: int) -> Sample:
        return Sample(float(self.times[index]), float(self.values[index]))

    def to_samples(self) -> list[Sample]:
        return [Sample(float(t), float(v)) for t, v in zip(self.times, self.values)]

    def as_array(self) -> np.ndarray:
        """Samples as an array of shape (n_samples, 2)."""
        return np.column_stack([self.times, self.values])

    def __len__(self) -> int:
        return self.n_samples

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.to_samples())

    def __repr__(self) -> str:
        return (
            f"TimeSeries(n_samples={self.n_samples}, "
            f"t=[{self.t_start:.4f}, {self.t_end:.4f}])"
        )


SampleData = Union[TimeSeries, Sequence[Sample], Sequence[Sequence[float]], np.ndarray]


def as_time_series(data: SampleData, name: str = "samples") -> TimeSeries:
    """Coerce supported sample containers into a validated :class:`TimeSeries`.

    Args:
        data: A TimeSeries, a sequence of Sample, a sequence of (time, value)
            pairs, or an array of shape (n, 2).
        name: Parameter name used in error messages.

    Returns:
        TimeSeries view of the data. A TimeSeries input is returned as is.

    Raises:
        ValueError: If the data is empty, malformed, or not time-ordered.
        TypeError: If ``data`` is None.
    """
    if isinstance(data, TimeSeries):
        return data
    if data is None:
        raise TypeError(f"{name} cannot be None")

    if len(data) > 0 and all(isinstance(s, Sample) for s in data):
        times = [s.time for s in data]
        values = [s.value for s in data]
        return TimeSeries(times, values)

    array = np.asarray(data, dtype=float)
    if array.size == 0:
        raise ValueError(f"{name} cannot be empty")
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError(
            f"{name} must have shape (n, 2) of (time, value) pairs, "
            f"got shape {array.shape}"
        )
    return TimeSeries(array[:, 0], array[:, 1])
