"""Directions providers — OSRM and Mapbox walking-route clients.

Each provider's sole responsibility is talking to one HTTP directions API and
normalising the answer into a :class:`~ride_tracker.routing.models.Route`:

- coordinate formatting (``lng,lat`` on the wire, ``(lat, lng)`` internally)
- URL construction
- timeouts, HTTP status and error mapping
- GeoJSON geometry → ordered :class:`Coordinate` path

Providers contain no caching; see :mod:`ride_tracker.routing.service`.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests

from ride_tracker.geo.models import Coordinate
from ride_tracker.routing.models import Route

_logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch directions"
NO_ROUTE = "No route found"


class DirectionsError(Exception):
    """A directions lookup failed (network, HTTP or malformed response)."""

    def __init__(self, message: str = FETCH_FAILED) -> None:
        super().__init__(message)


class NoRouteFound(DirectionsError):
    """The provider answered but returned no route between the two points."""

    def __init__(self, message: str = NO_ROUTE) -> None:
        super().__init__(message)


class DirectionsProvider(Protocol):
    """Anything that can turn an origin/destination pair into a :class:`Route`."""

    name: str

    def route(self, origin: Coordinate, destination: Coordinate) -> Route: ...


def _format_coordinates(origin: Coordinate, destination: Coordinate) -> str:
    """Wire format shared by OSRM and Mapbox: ``lng,lat;lng,lat``."""
    return f"{origin.lng},{origin.lat};{destination.lng},{destination.lat}"


def parse_geojson_routes(data: dict[str, Any]) -> Route:
    """Normalise the first entry of a ``routes`` array into a :class:`Route`.

    Both OSRM and Mapbox return ``{"routes": [{"geometry": {"coordinates":
    [[lng, lat], ...]}, "distance": m, "duration": s}, ...]}`` when asked for
    GeoJSON geometries.

    Raises
    ------
    NoRouteFound
        If ``routes`` is missing or empty.
    DirectionsError
        If the first route is malformed.
    """
    routes = data.get("routes") if isinstance(data, dict) else None
    if not routes:
        raise NoRouteFound()

    first = routes[0]
    try:
        path = tuple(
            Coordinate(lat=float(lat), lng=float(lng))
            for lng, lat, *_ in first["geometry"]["coordinates"]
        )
        return Route(
            path=path,
            distance_m=float(first["distance"]),
            duration_s=float(first["duration"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise DirectionsError() from exc


def _is_no_route(data: Any) -> bool:
    return isinstance(data, dict) and data.get("code") == "NoRoute"


class _HTTPDirectionsProvider:
    """Shared GET-and-parse logic for GeoJSON directions APIs."""

    name = "http"

    def __init__(self, timeout: float = 10.0, session: requests.Session | None = None) -> None:
        self.timeout = timeout  # seconds to wait for the provider before giving up
        self._http = session or requests.Session()

    def route(self, origin: Coordinate, destination: Coordinate) -> Route:
        url, params = self._request(origin, destination)
        try:
            response = self._http.get(url, params=params, timeout=self.timeout)
            data = response.json()
            # OSRM answers an unroutable pair with 400 {"code": "NoRoute"}
            if not _is_no_route(data):
                response.raise_for_status()
        except (requests.RequestException, ValueError) as exc:
            _logger.warning("%s directions request failed: %s", self.name, exc)
            raise DirectionsError() from exc

        route = parse_geojson_routes(data)
        _logger.info(
            "%s route: %d points, %.0f m, %.0f s",
            self.name,
            len(route.path),
            route.distance_m,
            route.duration_s,
        )
        return route

    def _request(
        self, origin: Coordinate, destination: Coordinate
    ) -> tuple[str, dict[str, str]]:
        raise NotImplementedError


class OSRMDirectionsProvider(_HTTPDirectionsProvider):
    """OSRM ``/route`` client.

    Args:
        base_url: OSRM server root, e.g. ``https://router.project-osrm.org``.
        profile: Routing profile (``foot``, ``bike``, ``driving``...).
        timeout: Request timeout in seconds.
    """

    name = "osrm"

    def __init__(
        self,
        base_url: str = "https://router.project-osrm.org",
        profile: str = "foot",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("OSRM base URL must not be empty")
        super().__init__(timeout=timeout, session=session)
        self.base_url = base_url.rstrip("/")
        self.profile = profile

    def _request(self, origin, destination):
        coords = _format_coordinates(origin, destination)
        url = f"{self.base_url}/route/v1/{self.profile}/{coords}"
        return url, {"overview": "full", "geometries": "geojson"}


class MapboxDirectionsProvider(_HTTPDirectionsProvider):
    """Mapbox Directions v5 client.

    Args:
        access_token: Mapbox public access token.
        profile: ``walking``, ``cycling``, ``driving``...
        timeout: Request timeout in seconds.
    """

    name = "mapbox"
    BASE_URL = "https://api.mapbox.com/directions/v5/mapbox"

    def __init__(
        self,
        access_token: str,
        profile: str = "walking",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        if not access_token:
            raise ValueError("Mapbox access token must not be empty")
        super().__init__(timeout=timeout, session=session)
        self._token = access_token
        self.profile = profile

    def _request(self, origin, destination):
        coords = _format_coordinates(origin, destination)
        url = f"{self.BASE_URL}/{self.profile}/{coords}"
        return url, {"geometries": "geojson", "access_token": self._token}
