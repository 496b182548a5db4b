"""Ride history persistence."""

from ride_tracker.history.storage import RideHistoryStorage

__all__ = ["RideHistoryStorage"]
