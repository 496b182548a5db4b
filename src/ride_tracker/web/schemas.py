"""Pydantic request/response schemas for the Web API."""

from __future__ import annotations

from pydantic import BaseModel, Field

LatLng = tuple[float, float]


class CoordinateIn(BaseModel):
    lat: float
    lng: float


class HealthResponse(BaseModel):
    status: str
    version: str


class DirectionsRequest(BaseModel):
    origin: CoordinateIn
    destination: CoordinateIn


class DirectionsResponse(BaseModel):
    path: list[LatLng]
    distance_m: float
    duration_s: float
    cached: bool
    distance_text: str
    eta_text: str


class TrackStatsRequest(BaseModel):
    path: list[LatLng]
    elapsed_s: int = Field(default=0, ge=0)


class TrackStatsResponse(BaseModel):
    total_distance_m: float
    elapsed_s: int
    average_speed_mps: float
    distance: str
    duration: str
    average_speed: str


class RideIn(BaseModel):
    path: list[LatLng] = Field(min_length=1)
    distance_m: float = Field(ge=0)
    duration_s: int = Field(ge=0)
    average_speed_mps: float = Field(ge=0)
    finished_at: float | None = None


class RideOut(BaseModel):
    id: int
    path: list[LatLng]
    distance_m: float
    duration_s: int
    average_speed_mps: float
    finished_at: float
    point_count: int


class RideCreated(BaseModel):
    id: int


class RidesResponse(BaseModel):
    rides: list[RideOut]
