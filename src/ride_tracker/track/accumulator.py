"""TrackAccumulator — finite-state machine turning position samples into a path and stats.

The accumulator owns no timers and no location source.  Every transition takes
the current time explicitly (Unix epoch seconds) and returns the new immutable
:class:`~ride_tracker.track.models.TrackSnapshot`, so the whole state machine
can be driven step by step in tests.  :class:`~ride_tracker.track.session.RideSession`
wires it to real timers and sample callbacks.

States::

    IDLE ──start_live/start_demo──▶ TRACKING ──stop──▶ IDLE
                                       │
                                       └─(demo path complete)──▶ FINISHED

    any state ──finish──▶ IDLE (finalized, RideRecord produced)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import replace

from ride_tracker.geo.distance import haversine_m, path_length_m
from ride_tracker.geo.models import Coordinate, to_path
from ride_tracker.track.fallback import FALLBACK_LOOP_ROUTE
from ride_tracker.track.models import (
    RideRecord,
    TrackMode,
    TrackSnapshot,
    TrackState,
    TrackStats,
)

_logger = logging.getLogger(__name__)

NOISE_THRESHOLD_M = 5.0


def compute_stats(path: Sequence[Coordinate], elapsed_s: int) -> TrackStats:
    """Recompute stats from scratch over the whole *path*."""
    total = path_length_m(path)
    return TrackStats(
        total_distance_m=total,
        elapsed_s=elapsed_s,
        average_speed_mps=total / max(elapsed_s, 1),
    )


def resolve_demo_route(
    reference_route: Iterable[Coordinate | Sequence[float]] | None,
) -> tuple[Coordinate, ...]:
    """Return *reference_route* as a path, or the built-in loop if it has < 2 points."""
    route = to_path(reference_route) if reference_route is not None else ()
    if len(route) < 2:
        return FALLBACK_LOOP_ROUTE
    return route


class TrackAccumulator:
    """Accumulates accepted samples into a path and derives live stats.

    Parameters
    ----------
    noise_threshold_m:
        In live mode a sample is accepted only if it lies more than this many
        metres from the last accepted point (rejects stationary GPS jitter).
    """

    def __init__(self, noise_threshold_m: float = NOISE_THRESHOLD_M) -> None:
        self.noise_threshold_m = noise_threshold_m
        self._snapshot = TrackSnapshot()

    @property
    def snapshot(self) -> TrackSnapshot:
        return self._snapshot

    # ------------------------------------------------------------------
    # Starting a track
    # ------------------------------------------------------------------

    def start_live(self, now: float) -> TrackSnapshot:
        """Begin a live track: empty path, zeroed stats."""
        self._snapshot = TrackSnapshot(
            state=TrackState.TRACKING,
            mode=TrackMode.LIVE,
            started_at=now,
        )
        _logger.info("Live track started")
        return self._snapshot

    def start_demo(
        self,
        now: float,
        reference_route: Iterable[Coordinate | Sequence[float]] | None = None,
    ) -> TrackSnapshot:
        """Begin a demo track replaying *reference_route* (or the fallback loop).

        The path is seeded with the route's first point.  The route is copied,
        so later changes by the caller do not affect this track.
        """
        route = resolve_demo_route(reference_route)
        self._snapshot = TrackSnapshot(
            state=TrackState.TRACKING,
            mode=TrackMode.DEMO,
            path=route[:1],
            started_at=now,
            reference_route=route,
        )
        _logger.info("Demo track started (%d route points)", len(route))
        return self._snapshot

    # ------------------------------------------------------------------
    # Transitions while tracking
    # ------------------------------------------------------------------

    def handle_sample(self, sample: Coordinate) -> TrackSnapshot:
        """Offer one live sample.  No-op unless tracking in live mode."""
        snap = self._snapshot
        if not (snap.is_tracking and snap.mode is TrackMode.LIVE):
            return snap

        if snap.path and haversine_m(snap.path[-1], sample) <= self.noise_threshold_m:
            return snap

        path = snap.path + (sample,)
        self._snapshot = replace(
            snap,
            path=path,
            stats=compute_stats(path, snap.stats.elapsed_s),
            location_available=True,
        )
        return self._snapshot

    def advance_demo(self, now: float) -> TrackSnapshot:
        """Append the next demo route point; finish when the route is exhausted."""
        snap = self._snapshot
        if not (snap.is_tracking and snap.mode is TrackMode.DEMO):
            return snap

        route = snap.reference_route
        path = snap.path
        if len(path) < len(route):
            path = path + (route[len(path)],)

        state = TrackState.FINISHED if len(path) == len(route) else TrackState.TRACKING
        self._snapshot = replace(
            snap,
            state=state,
            path=path,
            stats=compute_stats(path, self._elapsed(now)),
        )
        if state is TrackState.FINISHED:
            _logger.info("Demo track reached the end of its route")
        return self._snapshot

    def tick(self, now: float) -> TrackSnapshot:
        """Advance the elapsed-time clock.  No-op unless tracking."""
        snap = self._snapshot
        if not snap.is_tracking:
            return snap
        elapsed = self._elapsed(now)
        if elapsed == snap.stats.elapsed_s:
            return snap
        self._snapshot = replace(snap, stats=compute_stats(snap.path, elapsed))
        return self._snapshot

    def location_unavailable(self) -> TrackSnapshot:
        """Record that the live source failed.  The path is left as is."""
        snap = self._snapshot
        if snap.is_tracking and snap.mode is TrackMode.LIVE and snap.location_available:
            _logger.warning("Location source unavailable; live track will receive no samples")
            self._snapshot = replace(snap, location_available=False)
        return self._snapshot

    # ------------------------------------------------------------------
    # Ending a track
    # ------------------------------------------------------------------

    def stop(self) -> TrackSnapshot:
        """Stop tracking.  Path and stats stay visible; idempotent."""
        snap = self._snapshot
        if snap.is_tracking:
            self._snapshot = replace(snap, state=TrackState.IDLE)
            _logger.info("Track stopped with %d points", len(snap.path))
        return self._snapshot

    def finish(self, now: float) -> RideRecord | None:
        """Finalize the current track into a :class:`RideRecord`.

        Returns None when there is nothing to record (empty path) or the
        track has already been finalized.
        """
        snap = self._snapshot
        if snap.finalized or not snap.path:
            return None

        stats = snap.stats
        record = RideRecord(
            path=snap.path,
            distance_m=stats.total_distance_m,
            duration_s=stats.elapsed_s,
            average_speed_mps=stats.average_speed_mps,
            finished_at=now,
        )
        self._snapshot = replace(snap, state=TrackState.IDLE, finalized=True)
        _logger.info(
            "Ride finished: %.0f m in %d s", record.distance_m, record.duration_s
        )
        return record

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _elapsed(self, now: float) -> int:
        snap = self._snapshot
        if snap.started_at is None:
            return snap.stats.elapsed_s
        elapsed = max(0, math.floor(now - snap.started_at))
        return max(elapsed, snap.stats.elapsed_s)
