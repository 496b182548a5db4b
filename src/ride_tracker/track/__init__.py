"""Live track computation.

Public API
----------
TrackAccumulator     - state machine: samples → path + stats
RideSession          - accumulator driven by timers and a location source
TrackSnapshot        - immutable accumulator state
TrackStats           - distance / elapsed / average speed
RideRecord           - a finalized track
ReplayLocationSource - scripted live fixes
NullLocationSource   - source with no positioning
"""

from ride_tracker.track.accumulator import TrackAccumulator, compute_stats
from ride_tracker.track.fallback import FALLBACK_CENTER, FALLBACK_LOOP_ROUTE
from ride_tracker.track.location import (
    LocationOptions,
    LocationUnavailable,
    NullLocationSource,
    ReplayLocationSource,
)
from ride_tracker.track.models import (
    RideRecord,
    TrackMode,
    TrackSnapshot,
    TrackState,
    TrackStats,
)
from ride_tracker.track.session import RideSession
from ride_tracker.track.timer import RepeatingTimer

__all__ = [
    "FALLBACK_CENTER",
    "FALLBACK_LOOP_ROUTE",
    "LocationOptions",
    "LocationUnavailable",
    "NullLocationSource",
    "RepeatingTimer",
    "ReplayLocationSource",
    "RideRecord",
    "RideSession",
    "TrackAccumulator",
    "TrackMode",
    "TrackSnapshot",
    "TrackState",
    "TrackStats",
    "compute_stats",
]
