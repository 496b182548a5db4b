"""Geodesic primitives.

Public API
----------
Coordinate     - immutable (lat, lng) pair
haversine_m    - great-circle distance in metres
path_length_m  - total length of an ordered path
"""

from ride_tracker.geo.distance import EARTH_RADIUS_M, haversine_m, path_length_m
from ride_tracker.geo.models import Coordinate, to_path

__all__ = [
    "EARTH_RADIUS_M",
    "Coordinate",
    "haversine_m",
    "path_length_m",
    "to_path",
]
