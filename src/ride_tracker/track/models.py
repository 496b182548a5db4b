"""Track data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ride_tracker.geo.models import Coordinate, to_path


class TrackState(str, Enum):
    IDLE = "idle"
    TRACKING = "tracking"
    FINISHED = "finished"


class TrackMode(str, Enum):
    LIVE = "live"
    DEMO = "demo"


@dataclass(frozen=True)
class TrackStats:
    """Derived statistics for the current path."""

    total_distance_m: float = 0.0
    """Sum of pairwise haversine distances over the path, in metres."""

    elapsed_s: int = 0
    """Whole seconds since the track started. Never decreases within a track."""

    average_speed_mps: float = 0.0
    """``total_distance_m / max(elapsed_s, 1)``."""


@dataclass(frozen=True)
class TrackSnapshot:
    """Immutable view of the accumulator after a transition.

    ``reference_route`` is the demo route being replayed (empty in live mode).
    ``finalized`` is set once the track has been turned into a
    :class:`RideRecord`; stats are no longer shown after that.
    """

    state: TrackState = TrackState.IDLE
    mode: TrackMode | None = None
    path: tuple[Coordinate, ...] = ()
    stats: TrackStats = field(default_factory=TrackStats)
    started_at: float | None = None
    reference_route: tuple[Coordinate, ...] = ()
    location_available: bool = True
    finalized: bool = False

    @property
    def is_tracking(self) -> bool:
        return self.state is TrackState.TRACKING

    @property
    def show_stats(self) -> bool:
        """True while tracking, or while an unfinalized path with > 1 point is on screen."""
        if self.finalized:
            return False
        return self.is_tracking or len(self.path) > 1

    @property
    def current_position(self) -> Coordinate | None:
        return self.path[-1] if self.path else None


@dataclass(frozen=True)
class RideRecord:
    """A finalized track, ready to be persisted in ride history."""

    path: tuple[Coordinate, ...]
    distance_m: float
    duration_s: int
    average_speed_mps: float
    finished_at: float
    """Unix epoch seconds."""

    def to_dict(self) -> dict:
        return {
            "path": [p.as_pair() for p in self.path],
            "distance_m": self.distance_m,
            "duration_s": self.duration_s,
            "average_speed_mps": self.average_speed_mps,
            "finished_at": self.finished_at,
        }

    @classmethod
    def from_dict(cls, d: dict) -> RideRecord:
        return cls(
            path=to_path(d["path"]),
            distance_m=float(d["distance_m"]),
            duration_s=int(d["duration_s"]),
            average_speed_mps=float(d["average_speed_mps"]),
            finished_at=float(d["finished_at"]),
        )
