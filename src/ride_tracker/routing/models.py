"""Routing data models."""

from __future__ import annotations

from dataclasses import dataclass

from ride_tracker.geo.models import Coordinate


@dataclass(frozen=True)
class Route:
    """A directions result: ordered path plus totals.

    Args:
        path: Ordered route points from origin to destination.
        distance_m: Total route length in metres, as reported by the provider.
        duration_s: Estimated travel time in seconds, as reported by the provider.
    """

    path: tuple[Coordinate, ...]
    distance_m: float
    duration_s: float

    def to_dict(self) -> dict:
        return {
            "path": [p.as_pair() for p in self.path],
            "distance_m": self.distance_m,
            "duration_s": self.duration_s,
        }


# Cached values are whole, immutable routes.
RouteCacheEntry = Route
