"""Live location sources — subscription-style providers of position samples.

A source is watched with two callbacks: ``on_sample(Coordinate)`` for each new
fix and ``on_error(LocationUnavailable)`` when positioning is denied or not
supported.  ``on_error`` fires at most once per watch and no samples follow it.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from ride_tracker.geo.models import Coordinate, to_path

_logger = logging.getLogger(__name__)

SampleCallback = Callable[[Coordinate], None]
ErrorCallback = Callable[["LocationUnavailable"], None]


class LocationUnavailable(Exception):
    """Positioning is denied, unsupported, or timed out."""


@dataclass(frozen=True)
class LocationOptions:
    """Watch configuration passed to a :class:`LocationSource`."""

    max_staleness_ms: int = 1000  # accept cached fixes up to this age
    timeout_ms: int = 10000       # per-request hard timeout
    high_accuracy: bool = True


class WatchHandle(Protocol):
    def cancel(self) -> None: ...


class LocationSource(Protocol):
    def watch(
        self,
        on_sample: SampleCallback,
        on_error: ErrorCallback,
        options: LocationOptions,
    ) -> WatchHandle: ...


class _NoopHandle:
    def cancel(self) -> None:
        """Nothing to cancel."""


class NullLocationSource:
    """A source with no positioning capability; reports unavailability once per watch.

    Parameters
    ----------
    reason:
        Message carried by the :class:`LocationUnavailable` error.
    """

    def __init__(self, reason: str = "Geolocation is not supported") -> None:
        self.reason = reason

    def watch(self, on_sample, on_error, options=LocationOptions()) -> WatchHandle:
        on_error(LocationUnavailable(self.reason))
        return _NoopHandle()


class _ReplayWatch:
    def __init__(
        self,
        samples: tuple[Coordinate, ...],
        interval_s: float,
        on_sample: SampleCallback,
    ) -> None:
        self._samples = samples
        self._interval_s = interval_s
        self._on_sample = on_sample
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True, name="ReplayLocation")
        self._thread.start()

    def cancel(self) -> None:
        self._stop_event.set()
        if self._thread is not threading.current_thread():
            self._thread.join(timeout=2.0)

    def _run(self) -> None:
        for sample in self._samples:
            if self._stop_event.wait(self._interval_s):
                return
            self._on_sample(sample)


class ReplayLocationSource:
    """Replays a scripted sequence of fixes on a background thread.

    Useful for driving a live track from recorded data.

    Parameters
    ----------
    samples:
        Fixes as :class:`Coordinate` or ``(lat, lng)`` pairs, in order.
    interval_s:
        Delay before each fix.
    """

    def __init__(
        self,
        samples: Iterable[Coordinate | Sequence[float]],
        interval_s: float = 1.0,
    ) -> None:
        self.samples = to_path(samples)
        self.interval_s = interval_s

    def watch(self, on_sample, on_error, options=LocationOptions()) -> WatchHandle:
        _logger.debug("Replaying %d fixes every %.2fs", len(self.samples), self.interval_s)
        return _ReplayWatch(self.samples, self.interval_s, on_sample)
