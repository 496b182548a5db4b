"""Fetch a walking route between two points.

Uses Mapbox when ``MAPBOX_TOKEN`` is set, otherwise OSRM (``OSRM_BASE_URL``).
The lookup is repeated ``--repeat`` times to show the route cache at work.

Usage:
    uv run python scripts/get_directions.py 21.0285,105.8542 21.0333,105.8500
    uv run python scripts/get_directions.py 21.0285,105.8542 21.0333,105.8500 --repeat 3
"""

from __future__ import annotations

import argparse
import sys

from dotenv import load_dotenv

load_dotenv()

from ride_tracker.config import Settings  # noqa: E402
from ride_tracker.geo.models import Coordinate  # noqa: E402
from ride_tracker.routing.providers import DirectionsError  # noqa: E402
from ride_tracker.routing.service import DirectionsService  # noqa: E402
from ride_tracker.track.formatter import format_distance_km, format_eta  # noqa: E402


def _parse_latlng(text: str) -> Coordinate:
    lat, lng = text.split(",", 1)
    return Coordinate(float(lat), float(lng))


def main() -> int:
    ap = argparse.ArgumentParser(description="Ride Tracker — walking directions")
    ap.add_argument("origin", help="Origin as lat,lng")
    ap.add_argument("destination", help="Destination as lat,lng")
    ap.add_argument("--repeat", type=int, default=1, help="Number of lookups to perform")
    args = ap.parse_args()

    svc = DirectionsService.from_settings(Settings.from_env())
    origin = _parse_latlng(args.origin)
    destination = _parse_latlng(args.destination)

    for i in range(max(1, args.repeat)):
        try:
            route, cached = svc.lookup(origin, destination)
        except DirectionsError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1
        source = "cache" if cached else "provider"
        print(
            f"#{i + 1} [{source}] Distance: {format_distance_km(route.distance_m)}  "
            f"Estimated time: {format_eta(route.duration_s)}  ({len(route.path)} points)"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
