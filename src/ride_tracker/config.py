"""Environment-driven settings.

Values come from the process environment; call :func:`load_settings` to also
pick up a ``.env`` file from the working directory.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the directions service and ride history.

    Attributes:
        osrm_base_url: OSRM server root used for walking routes.
        mapbox_token: Optional Mapbox token; when set, Mapbox is tried first.
        db_path: SQLite file for ride history.
        route_cache_size: Capacity of the in-process route cache.
        directions_timeout: HTTP timeout for directions requests, in seconds.
    """

    osrm_base_url: str = "https://router.project-osrm.org"
    mapbox_token: str = ""
    db_path: str = "rides.db"
    route_cache_size: int = 256
    directions_timeout: float = 10.0

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if env is None else env
        return cls(
            osrm_base_url=env.get("OSRM_BASE_URL") or cls.osrm_base_url,
            mapbox_token=env.get("MAPBOX_TOKEN", ""),
            db_path=env.get("RIDE_TRACKER_DB") or cls.db_path,
            route_cache_size=int(env.get("ROUTE_CACHE_SIZE") or cls.route_cache_size),
            directions_timeout=float(env.get("DIRECTIONS_TIMEOUT") or cls.directions_timeout),
        )


def load_settings() -> Settings:
    """Load ``.env`` (without overriding real env vars) and build :class:`Settings`."""
    load_dotenv()
    return Settings.from_env()
