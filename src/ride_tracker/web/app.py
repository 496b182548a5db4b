"""FastAPI Web application — directions, track stats, and ride history."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request

from ride_tracker import __version__
from ride_tracker.config import load_settings
from ride_tracker.history.storage import RideHistoryStorage
from ride_tracker.routing.providers import DirectionsError, NoRouteFound
from ride_tracker.routing.service import DirectionsService
from ride_tracker.web import service
from ride_tracker.web.schemas import (
    DirectionsRequest,
    DirectionsResponse,
    HealthResponse,
    RideCreated,
    RideIn,
    RideOut,
    RidesResponse,
    TrackStatsRequest,
    TrackStatsResponse,
)

# loads .env from the working directory; must run before settings are read
_SETTINGS = load_settings()

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(title="Ride Tracker", version=__version__)

# One cache per application, shared by every directions request.
app.state.directions = DirectionsService.from_settings(_SETTINGS)


def _storage(db_path: str | None = None) -> RideHistoryStorage:
    return RideHistoryStorage(db_path or _SETTINGS.db_path)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


@app.post("/api/directions", response_model=DirectionsResponse)
def directions(request: Request, req: DirectionsRequest) -> DirectionsResponse:
    """Walking route between two points, served from cache when possible."""
    try:
        return service.directions(request.app.state.directions, req)
    except NoRouteFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except DirectionsError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@app.post("/api/track/stats", response_model=TrackStatsResponse)
def track_stats(req: TrackStatsRequest) -> TrackStatsResponse:
    return service.track_stats(req)


@app.get("/api/rides", response_model=RidesResponse)
def list_rides(limit: int | None = None, db: str | None = None) -> RidesResponse:
    """Ride history, most recent first."""
    storage = _storage(db)
    try:
        rows = storage.list_rides(limit)
    finally:
        storage.close()
    return RidesResponse(rides=[RideOut(**r) for r in rows])


@app.post("/api/rides", response_model=RideCreated, status_code=201)
def create_ride(req: RideIn, db: str | None = None) -> RideCreated:
    """Persist a finished ride."""
    record = service.ride_record(req)
    storage = _storage(db)
    try:
        ride_id = storage.save_ride(record)
    finally:
        storage.close()
    return RideCreated(id=ride_id)


@app.get("/api/rides/{ride_id}", response_model=RideOut)
def get_ride(ride_id: int, db: str | None = None) -> RideOut:
    storage = _storage(db)
    try:
        row = storage.get_ride(ride_id)
    finally:
        storage.close()
    if row is None:
        raise HTTPException(status_code=404, detail="Ride not found")
    return RideOut(**row)
