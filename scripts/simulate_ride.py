"""Demo ride in the terminal.

Replays the built-in Hoan Kiem Lake loop (or a walking route fetched between
two points) at the demo cadence and prints live stats.  Press Ctrl+C to stop
early; the ride is finalized either way.

Usage:
    uv run python scripts/simulate_ride.py
    uv run python scripts/simulate_ride.py --step 0.2
    uv run python scripts/simulate_ride.py --from 21.0285,105.8542 --to 21.0333,105.8500
    uv run python scripts/simulate_ride.py --save --db rides.db
"""

from __future__ import annotations

import argparse
import sys
import threading

from dotenv import load_dotenv

load_dotenv()

from ride_tracker.config import Settings  # noqa: E402
from ride_tracker.geo.models import Coordinate  # noqa: E402
from ride_tracker.history.storage import RideHistoryStorage  # noqa: E402
from ride_tracker.routing.providers import DirectionsError  # noqa: E402
from ride_tracker.routing.service import DirectionsService  # noqa: E402
from ride_tracker.track.formatter import (  # noqa: E402
    format_distance_km,
    format_duration,
    format_speed_kmh,
    format_stats,
)
from ride_tracker.track.models import RideRecord, TrackSnapshot, TrackState  # noqa: E402
from ride_tracker.track.session import DEMO_STEP_S, RideSession  # noqa: E402


def _parse_latlng(text: str) -> Coordinate:
    lat, lng = text.split(",", 1)
    return Coordinate(float(lat), float(lng))


def _fetch_route(origin: Coordinate, destination: Coordinate) -> list[Coordinate]:
    svc = DirectionsService.from_settings(Settings.from_env())
    try:
        route = svc.get_route(origin, destination)
    except DirectionsError as exc:
        print(f"WARNING: {exc}; using the built-in loop.", file=sys.stderr)
        return []
    print(f"Route: {len(route.path)} points, {route.distance_m:.0f} m")
    return list(route.path)


def main() -> None:
    ap = argparse.ArgumentParser(description="Ride Tracker — demo ride")
    ap.add_argument("--step", type=float, default=DEMO_STEP_S, help="Seconds per route point")
    ap.add_argument("--from", dest="origin", default="", help="Origin as lat,lng")
    ap.add_argument("--to", dest="destination", default="", help="Destination as lat,lng")
    ap.add_argument("--save", action="store_true", help="Save the finished ride to history")
    ap.add_argument("--db", default="rides.db", help="SQLite database path")
    args = ap.parse_args()

    route: list[Coordinate] = []
    if args.origin and args.destination:
        route = _fetch_route(_parse_latlng(args.origin), _parse_latlng(args.destination))

    done = threading.Event()

    def on_update(snap: TrackSnapshot) -> None:
        if not snap.show_stats:
            return
        s = format_stats(snap.stats)
        print(
            f"  [{len(snap.path):3d} pts]  {s['distance']}  {s['duration']}  {s['average_speed']}",
            flush=True,
        )
        if snap.state is TrackState.FINISHED:
            done.set()

    def on_finish(record: RideRecord) -> None:
        print(
            f"Ride finished: {format_distance_km(record.distance_m)} "
            f"in {format_duration(record.duration_s)} "
            f"({format_speed_kmh(record.average_speed_mps)})"
        )
        if args.save:
            storage = RideHistoryStorage(args.db)
            try:
                ride_id = storage.save_ride(record)
            finally:
                storage.close()
            print(f"Saved as ride #{ride_id} in {args.db}")

    session = RideSession(on_update=on_update, on_finish=on_finish, demo_step_s=args.step)
    session.start_demo(route)
    print("Demo ride running. Press Ctrl+C to stop.", flush=True)

    try:
        while not done.wait(0.1):
            pass
    except KeyboardInterrupt:
        session.stop()
    finally:
        session.finish()


if __name__ == "__main__":
    main()
