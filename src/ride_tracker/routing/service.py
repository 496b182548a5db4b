"""DirectionsService — cache-first route lookups over interchangeable providers."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ride_tracker.config import Settings
from ride_tracker.geo.models import Coordinate
from ride_tracker.routing.cache import DEFAULT_KEY_PRECISION, RouteCache, route_key
from ride_tracker.routing.models import Route
from ride_tracker.routing.providers import (
    DirectionsError,
    DirectionsProvider,
    MapboxDirectionsProvider,
    OSRMDirectionsProvider,
)

_logger = logging.getLogger(__name__)


def build_providers(settings: Settings) -> list[DirectionsProvider]:
    """Return providers in preference order: Mapbox (if a token is set), then OSRM."""
    providers: list[DirectionsProvider] = []
    if settings.mapbox_token:
        providers.append(
            MapboxDirectionsProvider(settings.mapbox_token, timeout=settings.directions_timeout)
        )
    providers.append(
        OSRMDirectionsProvider(settings.osrm_base_url, timeout=settings.directions_timeout)
    )
    return providers


class DirectionsService:
    """Serves walking routes, consulting the cache before any provider.

    Parameters
    ----------
    providers:
        Providers tried in order on a cache miss; the first success wins.
    cache:
        The :class:`RouteCache` shared by all lookups made through this service.
    key_precision:
        Decimal places used when building cache keys.
    """

    def __init__(
        self,
        providers: Sequence[DirectionsProvider],
        cache: RouteCache | None = None,
        key_precision: int = DEFAULT_KEY_PRECISION,
    ) -> None:
        if not providers:
            raise ValueError("At least one directions provider is required")
        self._providers = list(providers)
        self.cache = cache if cache is not None else RouteCache()
        self._precision = key_precision

    @classmethod
    def from_settings(cls, settings: Settings) -> DirectionsService:
        return cls(build_providers(settings), RouteCache(settings.route_cache_size))

    def lookup(self, origin: Coordinate, destination: Coordinate) -> tuple[Route, bool]:
        """Return ``(route, cached)`` for *origin* → *destination*.

        Raises
        ------
        DirectionsError
            The last provider's error when every provider failed.  The cache
            is left untouched in that case.
        """
        key = route_key(origin, destination, self._precision)
        cached = self.cache.get(key)
        if cached is not None:
            return cached, True

        last_error: DirectionsError | None = None
        for provider in self._providers:
            try:
                route = provider.route(origin, destination)
            except DirectionsError as exc:
                _logger.warning("Provider %s failed for %s: %s", provider.name, key, exc)
                last_error = exc
                continue
            self.cache.put(key, route)
            return route, False

        raise last_error

    def get_route(self, origin: Coordinate, destination: Coordinate) -> Route:
        """Like :meth:`lookup` but returns only the route."""
        route, _ = self.lookup(origin, destination)
        return route
