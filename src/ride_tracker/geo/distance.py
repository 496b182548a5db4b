"""Great-circle distance on a spherical Earth."""

from __future__ import annotations

import math
from collections.abc import Sequence

from ride_tracker.geo.models import Coordinate

EARTH_RADIUS_M = 6_371_000.0  # mean Earth radius in metres


def haversine_m(a: Coordinate, b: Coordinate) -> float:
    """Return the haversine distance in metres between *a* and *b*.

    Any finite input gives a finite, non-negative result; the haversine term
    is clamped to [0, 1] so out-of-range coordinates cannot produce NaN.
    """
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lng - a.lng)

    h = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    h = min(1.0, max(0.0, h))
    c = 2.0 * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))
    return EARTH_RADIUS_M * c


def path_length_m(path: Sequence[Coordinate]) -> float:
    """Sum of consecutive pairwise distances over *path* (0.0 for < 2 points)."""
    total = 0.0
    for prev, cur in zip(path, path[1:]):
        total += haversine_m(prev, cur)
    return total
