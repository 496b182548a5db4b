"""Human-readable formatting of track stats and route estimates."""

from __future__ import annotations

import math

from ride_tracker.track.models import TrackStats


def format_distance_km(distance_m: float) -> str:
    return f"{distance_m / 1000:.2f} km"


def format_duration(seconds: int) -> str:
    """``m:ss`` (minutes are not wrapped into hours)."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"


def format_speed_kmh(speed_mps: float) -> str:
    return f"{speed_mps * 3.6:.1f} km/h"


def format_eta(duration_s: float) -> str:
    """Route estimate as ``"<min> min <sec> sec"``."""
    return f"{math.floor(duration_s / 60)} min {round(duration_s % 60)} sec"


def format_stats(stats: TrackStats) -> dict[str, str]:
    """Display strings for the live stats panel."""
    return {
        "distance": format_distance_km(stats.total_distance_m),
        "duration": format_duration(stats.elapsed_s),
        "average_speed": format_speed_kmh(stats.average_speed_mps),
    }
