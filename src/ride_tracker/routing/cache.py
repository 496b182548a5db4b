"""RouteCache — bounded LRU memo of origin→destination route lookups."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from ride_tracker.geo.models import Coordinate
from ride_tracker.routing.models import RouteCacheEntry

_logger = logging.getLogger(__name__)

DEFAULT_KEY_PRECISION = 6


def _fmt(value: float, precision: int) -> str:
    # ``+ 0.0`` folds -0.0 into 0.0 so both format identically
    return f"{round(value, precision) + 0.0:.{precision}f}"


def route_key(
    origin: Coordinate,
    destination: Coordinate,
    precision: int = DEFAULT_KEY_PRECISION,
) -> str:
    """Return the canonical cache key ``"oLat,oLng|dLat,dLng"``.

    Every number is rounded to *precision* decimal places so logically
    identical endpoints always map to the same key.
    """
    return (
        f"{_fmt(origin.lat, precision)},{_fmt(origin.lng, precision)}"
        f"|{_fmt(destination.lat, precision)},{_fmt(destination.lng, precision)}"
    )


class RouteCache:
    """Least-recently-used cache of :class:`RouteCacheEntry` values.

    The cache is an ordinary object: create one and inject it wherever route
    lookups happen.  Entries are immutable and stored whole under a lock, so
    readers never observe a partially written value.

    Parameters
    ----------
    capacity:
        Maximum number of entries kept.  The least recently used entry is
        evicted when a ``put`` would exceed it.
    """

    def __init__(self, capacity: int = 256) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._entries: OrderedDict[str, RouteCacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, key: str) -> RouteCacheEntry | None:
        """Return the entry stored under *key*, or None.  A hit refreshes recency."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                self._entries.move_to_end(key)
        if entry is not None:
            _logger.debug("Route cache hit: %s", key)
        return entry

    def put(self, key: str, entry: RouteCacheEntry) -> None:
        """Store *entry* under *key* (last write wins)."""
        with self._lock:
            self._entries[key] = entry
            self._entries.move_to_end(key)
            while len(self._entries) > self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                _logger.debug("Route cache evicted: %s", evicted)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
