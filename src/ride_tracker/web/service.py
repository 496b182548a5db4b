"""Glue between the Web API schemas and the track/routing engine."""

from __future__ import annotations

import time

from ride_tracker.geo.models import Coordinate, to_path
from ride_tracker.routing.service import DirectionsService
from ride_tracker.track.accumulator import compute_stats
from ride_tracker.track.formatter import format_distance_km, format_eta, format_stats
from ride_tracker.track.models import RideRecord
from ride_tracker.web.schemas import (
    DirectionsRequest,
    DirectionsResponse,
    RideIn,
    TrackStatsRequest,
    TrackStatsResponse,
)


def directions(svc: DirectionsService, req: DirectionsRequest) -> DirectionsResponse:
    """Look up a route through *svc*.

    Raises
    ------
    DirectionsError
        Propagated from the service (``NoRouteFound`` included).
    """
    route, cached = svc.lookup(
        Coordinate(req.origin.lat, req.origin.lng),
        Coordinate(req.destination.lat, req.destination.lng),
    )
    return DirectionsResponse(
        path=[p.as_pair() for p in route.path],
        distance_m=route.distance_m,
        duration_s=route.duration_s,
        cached=cached,
        distance_text=format_distance_km(route.distance_m),
        eta_text=format_eta(route.duration_s),
    )


def track_stats(req: TrackStatsRequest) -> TrackStatsResponse:
    """Compute stats for an arbitrary path, as the live panel would show them."""
    stats = compute_stats(to_path(req.path), req.elapsed_s)
    return TrackStatsResponse(
        total_distance_m=stats.total_distance_m,
        elapsed_s=stats.elapsed_s,
        average_speed_mps=stats.average_speed_mps,
        **format_stats(stats),
    )


def ride_record(req: RideIn) -> RideRecord:
    return RideRecord(
        path=to_path(req.path),
        distance_m=req.distance_m,
        duration_s=req.duration_s,
        average_speed_mps=req.average_speed_mps,
        finished_at=req.finished_at if req.finished_at is not None else time.time(),
    )
