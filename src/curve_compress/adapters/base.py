"""Protocol for converting between host curves and sample arrays."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..curves.compressed import CompressedCurve
from ..curves.samples import TimeSeries

MIN_SAMPLE_COUNT = 2
MAX_SAMPLE_COUNT = 10000


@runtime_checkable
class HostCurveAdapter(Protocol):
    """Protocol for host curve adapters.

    A host curve is whatever keyframed curve type an application uses. The
    adapter samples it into a :class:`TimeSeries` for compression and turns
    a :class:`CompressedCurve` back into a host curve. Sample counts must
    lie in ``[2, 10000]``.
    """

    def from_host_curve(self, curve: Any, sample_count: int) -> TimeSeries:
        """Sample ``curve`` at ``sample_count`` evenly spaced times."""
        ...

    def to_host_curve(self, compressed: CompressedCurve, sample_count: int) -> Any:
        """Build a host curve from ``sample_count`` samples of ``compressed``."""
        ...
