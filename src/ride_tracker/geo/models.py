"""Geographic value types."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees.

    Nominal ranges are lat ∈ [-90, 90] and lng ∈ [-180, 180]; they are not
    enforced here.
    """

    lat: float
    lng: float

    @classmethod
    def from_pair(cls, pair: Sequence[float]) -> Coordinate:
        """Build from a ``(lat, lng)`` sequence."""
        return cls(lat=float(pair[0]), lng=float(pair[1]))

    def as_pair(self) -> tuple[float, float]:
        """Return ``(lat, lng)``."""
        return (self.lat, self.lng)


def to_path(points: Iterable[Coordinate | Sequence[float]]) -> tuple[Coordinate, ...]:
    """Normalise an iterable of coordinates or ``(lat, lng)`` pairs into a path tuple."""
    return tuple(
        p if isinstance(p, Coordinate) else Coordinate.from_pair(p)
        for p in points
    )
