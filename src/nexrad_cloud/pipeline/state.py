"""Lock-guarded state shared between the pipeline job and its readers."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from ..core.errors import ReentrancyError
from ..core.models import PointCloud


@dataclass
class ProcessingStatistics:
    """Elapsed milliseconds per pipeline stage."""

    load_ms: int = 0
    decode_ms: int = 0
    pointing_ms: int = 0
    coloring_ms: int = 0
    sampling_ms: int = 0
    clustering_ms: int = 0
    point_count: int = 0

    @property
    def total_ms(self) -> int:
        return (
            self.load_ms
            + self.decode_ms
            + self.pointing_ms
            + self.coloring_ms
            + self.sampling_ms
            + self.clustering_ms
        )


@dataclass(frozen=True)
class StateSnapshot:
    """A consistent view of :class:`SharedState`, taken under its lock."""

    processing: bool
    points: Optional[PointCloud]
    statistics: Optional[ProcessingStatistics]
    last_error: Optional[str]


class SharedState:
    """
    Result slot shared by one pipeline job at a time and any number of readers.

    A run calls :meth:`begin` before doing any work and exactly one of
    :meth:`complete` or :meth:`fail` when it ends. Installed point clouds are
    never mutated afterwards; readers get them through :meth:`snapshot`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._processing = False
        self._points: Optional[PointCloud] = None
        self._statistics: Optional[ProcessingStatistics] = None
        self._last_error: Optional[str] = None

    @property
    def processing(self) -> bool:
        with self._lock:
            return self._processing

    def begin(self) -> None:
        """Mark a run as started, or raise :class:`ReentrancyError` if one is active."""
        with self._lock:
            if self._processing:
                raise ReentrancyError("cannot process concurrently")
            self._processing = True

    def complete(self, points: PointCloud, statistics: ProcessingStatistics) -> None:
        """Install a finished run's results and release the processing flag.

        The cloud's arrays are made read-only so snapshots can be shared.
        """
        for array in (points.x, points.y, points.z, points.strength, points.raw,
                      points.cluster, points.labels):
            if array is not None:
                array.setflags(write=False)
        with self._lock:
            self._points = points
            self._statistics = statistics
            self._last_error = None
            self._processing = False

    def fail(self, error: BaseException) -> None:
        """Release the processing flag, keeping the last good results."""
        with self._lock:
            self._last_error = f"{type(error).__name__}: {error}"
            self._processing = False

    def snapshot(self) -> StateSnapshot:
        with self._lock:
            return StateSnapshot(
                processing=self._processing,
                points=self._points,
                statistics=self._statistics,
                last_error=self._last_error,
            )
