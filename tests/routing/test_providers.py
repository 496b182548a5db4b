"""Tests for OSRM / Mapbox directions providers (HTTP mocked)."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from ride_tracker.geo.models import Coordinate
from ride_tracker.routing.providers import (
    DirectionsError,
    MapboxDirectionsProvider,
    NoRouteFound,
    OSRMDirectionsProvider,
    parse_geojson_routes,
)

ORIGIN = Coordinate(21.0285, 105.8542)
DEST = Coordinate(21.0300, 105.8500)


def _payload(coords=None, distance=512.3, duration=410.0) -> dict:
    coords = coords if coords is not None else [[105.8542, 21.0285], [105.8500, 21.0300]]
    return {
        "code": "Ok",
        "routes": [
            {
                "geometry": {"type": "LineString", "coordinates": coords},
                "distance": distance,
                "duration": duration,
            }
        ],
    }


def _session(payload=None, exc: Exception | None = None) -> MagicMock:
    http = MagicMock()
    if exc is not None:
        http.get.side_effect = exc
    else:
        http.get.return_value.json.return_value = payload
    return http


# ---------------------------------------------------------------------------
# parse_geojson_routes
# ---------------------------------------------------------------------------


def test_parse_swaps_lng_lat_to_lat_lng():
    route = parse_geojson_routes(_payload())
    assert route.path == (Coordinate(21.0285, 105.8542), Coordinate(21.03, 105.85))
    assert route.distance_m == pytest.approx(512.3)
    assert route.duration_s == pytest.approx(410.0)


def test_parse_empty_routes_is_no_route():
    with pytest.raises(NoRouteFound, match="No route found"):
        parse_geojson_routes({"code": "NoRoute", "routes": []})


def test_parse_missing_routes_is_no_route():
    with pytest.raises(NoRouteFound):
        parse_geojson_routes({"code": "InvalidQuery"})


def test_parse_malformed_route_is_fetch_failure():
    with pytest.raises(DirectionsError, match="Failed to fetch directions") as info:
        parse_geojson_routes({"routes": [{"distance": 1.0}]})
    assert not isinstance(info.value, NoRouteFound)


# ---------------------------------------------------------------------------
# OSRM
# ---------------------------------------------------------------------------


def test_osrm_builds_lng_lat_url():
    http = _session(_payload())
    provider = OSRMDirectionsProvider("http://osrm.local/", session=http, timeout=3.0)
    provider.route(ORIGIN, DEST)

    url = http.get.call_args.args[0]
    kwargs = http.get.call_args.kwargs
    assert url == "http://osrm.local/route/v1/foot/105.8542,21.0285;105.85,21.03"
    assert kwargs["params"] == {"overview": "full", "geometries": "geojson"}
    assert kwargs["timeout"] == 3.0


def test_osrm_returns_route():
    provider = OSRMDirectionsProvider(session=_session(_payload()))
    route = provider.route(ORIGIN, DEST)
    assert len(route.path) == 2


def test_osrm_network_error_maps_to_directions_error():
    provider = OSRMDirectionsProvider(session=_session(exc=requests.ConnectionError("down")))
    with pytest.raises(DirectionsError, match="Failed to fetch directions"):
        provider.route(ORIGIN, DEST)


def test_osrm_bad_json_maps_to_directions_error():
    http = MagicMock()
    http.get.return_value.json.side_effect = ValueError("not json")
    provider = OSRMDirectionsProvider(session=http)
    with pytest.raises(DirectionsError):
        provider.route(ORIGIN, DEST)


def test_osrm_requires_base_url():
    with pytest.raises(ValueError):
        OSRMDirectionsProvider("")


# ---------------------------------------------------------------------------
# Mapbox
# ---------------------------------------------------------------------------


def test_mapbox_builds_url_with_token():
    http = _session(_payload())
    provider = MapboxDirectionsProvider("pk.test", session=http)
    provider.route(ORIGIN, DEST)

    url = http.get.call_args.args[0]
    params = http.get.call_args.kwargs["params"]
    assert url == (
        "https://api.mapbox.com/directions/v5/mapbox/walking/105.8542,21.0285;105.85,21.03"
    )
    assert params == {"geometries": "geojson", "access_token": "pk.test"}


def test_mapbox_no_route():
    provider = MapboxDirectionsProvider("pk.test", session=_session({"routes": []}))
    with pytest.raises(NoRouteFound):
        provider.route(ORIGIN, DEST)


def test_mapbox_requires_token():
    with pytest.raises(ValueError):
        MapboxDirectionsProvider("")


# ---------------------------------------------------------------------------
# HTTP status handling
# ---------------------------------------------------------------------------


def _error_response(status: int, body: dict) -> MagicMock:
    http = MagicMock()
    response = http.get.return_value
    response.status_code = status
    response.json.return_value = body
    response.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return http


@pytest.mark.parametrize("status", [401, 429, 503])
def test_http_error_status_is_fetch_failure(status):
    http = _error_response(status, {"message": "Too Many Requests"})
    provider = OSRMDirectionsProvider(session=http)
    with pytest.raises(DirectionsError) as exc_info:
        provider.route(ORIGIN, DEST)
    assert not isinstance(exc_info.value, NoRouteFound)
    assert str(exc_info.value) == "Failed to fetch directions"


def test_mapbox_http_error_is_fetch_failure():
    http = _error_response(401, {"message": "Not Authorized - Invalid Token"})
    provider = MapboxDirectionsProvider("pk.test", session=http)
    with pytest.raises(DirectionsError, match="Failed to fetch directions"):
        provider.route(ORIGIN, DEST)


def test_osrm_no_route_status_stays_no_route():
    http = _error_response(400, {"code": "NoRoute", "message": "Impossible route between points"})
    provider = OSRMDirectionsProvider(session=http)
    with pytest.raises(NoRouteFound, match="No route found"):
        provider.route(ORIGIN, DEST)
    http.get.return_value.raise_for_status.assert_not_called()
