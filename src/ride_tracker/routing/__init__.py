"""Route lookups: providers, cache, and the cache-first service.

Public API
----------
Route                    - path + distance + duration
RouteCache               - bounded LRU cache of routes
route_key                - canonical origin/destination cache key
DirectionsService        - cache-first lookup over providers
OSRMDirectionsProvider   - OSRM /route client
MapboxDirectionsProvider - Mapbox Directions v5 client
DirectionsError          - lookup failed ("Failed to fetch directions")
NoRouteFound             - provider returned no route ("No route found")
"""

from ride_tracker.routing.cache import RouteCache, route_key
from ride_tracker.routing.models import Route, RouteCacheEntry
from ride_tracker.routing.providers import (
    DirectionsError,
    MapboxDirectionsProvider,
    NoRouteFound,
    OSRMDirectionsProvider,
)
from ride_tracker.routing.service import DirectionsService, build_providers

__all__ = [
    "DirectionsError",
    "DirectionsService",
    "MapboxDirectionsProvider",
    "NoRouteFound",
    "OSRMDirectionsProvider",
    "Route",
    "RouteCache",
    "RouteCacheEntry",
    "build_providers",
    "route_key",
]
