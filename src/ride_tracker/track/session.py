"""RideSession — drives a TrackAccumulator from timers and a live location source."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable, Sequence

from ride_tracker.geo.models import Coordinate
from ride_tracker.track.accumulator import TrackAccumulator
from ride_tracker.track.location import (
    LocationOptions,
    LocationSource,
    LocationUnavailable,
    NullLocationSource,
)
from ride_tracker.track.models import RideRecord, TrackSnapshot, TrackState
from ride_tracker.track.timer import RepeatingTimer

_logger = logging.getLogger(__name__)

LIVE_TICK_S = 1.0   # elapsed-time clock in live mode
DEMO_STEP_S = 2.2   # one demo route point per step


class RideSession:
    """Runs one track at a time and reports every change to the caller.

    All accumulator transitions happen under a single re-entrant lock, so
    sample callbacks and timer ticks arriving on different threads never
    interleave.  Each started track gets a new generation number; callbacks
    carrying an older generation are ignored, which makes late samples or
    ticks after :meth:`stop` silent no-ops.

    Parameters
    ----------
    on_update:
        Called with the new :class:`TrackSnapshot` after every change.
    on_finish:
        Called with the :class:`RideRecord` once per finalized track.
    location_source:
        Live fix provider.  Defaults to :class:`NullLocationSource`, which
        leaves live tracks in the degraded "no samples" state.
    clock:
        Returns the current Unix time in seconds.
    timer_factory:
        ``(interval_s, callback, name) -> timer`` with ``start()``/``cancel()``.
    live_tick_s, demo_step_s:
        Timer cadences; the defaults are the production 1.0 s and 2.2 s.
    """

    def __init__(
        self,
        on_update: Callable[[TrackSnapshot], None] | None = None,
        on_finish: Callable[[RideRecord], None] | None = None,
        location_source: LocationSource | None = None,
        clock: Callable[[], float] = time.time,
        timer_factory: Callable[..., RepeatingTimer] = RepeatingTimer,
        location_options: LocationOptions = LocationOptions(),
        accumulator: TrackAccumulator | None = None,
        live_tick_s: float = LIVE_TICK_S,
        demo_step_s: float = DEMO_STEP_S,
    ) -> None:
        self._on_update = on_update
        self._on_finish = on_finish
        self._source = location_source or NullLocationSource()
        self._clock = clock
        self._timer_factory = timer_factory
        self._live_tick_s = live_tick_s
        self._demo_step_s = demo_step_s
        self._options = location_options
        self._acc = accumulator or TrackAccumulator()
        self._lock = threading.RLock()
        self._generation = 0
        self._resources: list = []

    @property
    def snapshot(self) -> TrackSnapshot:
        with self._lock:
            return self._acc.snapshot

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start_live(self) -> TrackSnapshot:
        """Start a live track fed by the location source."""
        self.stop()
        with self._lock:
            token = self._next_generation()
            snap = self._acc.start_live(self._clock())
            self._emit(snap)

            timer = self._timer_factory(self._live_tick_s, lambda: self._on_tick(token), name="LiveClock")
            self._resources.append(timer)
            timer.start()

            watch = self._source.watch(
                lambda sample: self._on_sample(token, sample),
                lambda err: self._on_error(token, err),
                self._options,
            )
            self._resources.append(watch)
            return self._acc.snapshot

    def start_demo(
        self,
        reference_route: Iterable[Coordinate | Sequence[float]] | None = None,
    ) -> TrackSnapshot:
        """Start a demo track replaying *reference_route* (or the built-in loop)."""
        self.stop()
        with self._lock:
            token = self._next_generation()
            snap = self._acc.start_demo(self._clock(), reference_route)
            self._emit(snap)

            timer = self._timer_factory(
                self._demo_step_s, lambda: self._on_demo_step(token), name="DemoRoute"
            )
            self._resources.append(timer)
            timer.start()
            return snap

    def stop(self) -> TrackSnapshot:
        """Stop the current track and cancel its timers and location watch.

        Idempotent: stopping an idle session changes nothing.
        """
        with self._lock:
            self._next_generation()
            before = self._acc.snapshot
            snap = self._acc.stop()
            resources = self._take_resources()
            if snap is not before:
                self._emit(snap)
        self._cancel(resources)
        return snap

    def finish(self) -> RideRecord | None:
        """Finalize the current track and hand the record to ``on_finish``.

        Returns None, without calling ``on_finish``, if there is no
        unfinalized path.  The track still ends in that case, exactly as
        :meth:`stop` would.
        """
        with self._lock:
            self._next_generation()
            before = self._acc.snapshot
            record = self._acc.finish(self._clock())
            if record is None:
                self._acc.stop()
            resources = self._take_resources()
            snap = self._acc.snapshot
            if snap is not before:
                self._emit(snap)
            if record is not None and self._on_finish is not None:
                self._on_finish(record)
        self._cancel(resources)
        return record

    # ------------------------------------------------------------------
    # Callbacks from timers and the location source
    # ------------------------------------------------------------------

    def _on_tick(self, token: int) -> None:
        with self._lock:
            if token != self._generation:
                return
            before = self._acc.snapshot
            snap = self._acc.tick(self._clock())
            if snap is not before:
                self._emit(snap)

    def _on_demo_step(self, token: int) -> None:
        with self._lock:
            if token != self._generation:
                return
            snap = self._acc.advance_demo(self._clock())
            self._emit(snap)
            if snap.state is TrackState.FINISHED:
                resources = self._take_resources()
            else:
                resources = []
        self._cancel(resources)

    def _on_sample(self, token: int, sample: Coordinate) -> None:
        with self._lock:
            if token != self._generation:
                return
            before = self._acc.snapshot
            snap = self._acc.handle_sample(sample)
            if snap is not before:
                self._emit(snap)

    def _on_error(self, token: int, error: LocationUnavailable) -> None:
        with self._lock:
            if token != self._generation:
                return
            _logger.info("Location source reported: %s", error)
            before = self._acc.snapshot
            snap = self._acc.location_unavailable()
            if snap is not before:
                self._emit(snap)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _take_resources(self) -> list:
        resources, self._resources = self._resources, []
        return resources

    @staticmethod
    def _cancel(resources: list) -> None:
        for resource in resources:
            resource.cancel()

    def _emit(self, snap: TrackSnapshot) -> None:
        if self._on_update is not None:
            self._on_update(snap)
