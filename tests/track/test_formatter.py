"""Tests for stats formatting."""

from __future__ import annotations

import pytest

from ride_tracker.track.formatter import (
    format_distance_km,
    format_duration,
    format_eta,
    format_speed_kmh,
    format_stats,
)
from ride_tracker.track.models import TrackStats


@pytest.mark.parametrize(
    "metres,expected",
    [(0.0, "0.00 km"), (1234.0, "1.23 km"), (111.19, "0.11 km")],
)
def test_format_distance_km(metres, expected):
    assert format_distance_km(metres) == expected


@pytest.mark.parametrize(
    "seconds,expected",
    [(0, "0:00"), (9, "0:09"), (65, "1:05"), (3600, "60:00")],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_format_speed_kmh():
    assert format_speed_kmh(10.0) == "36.0 km/h"


def test_format_eta():
    assert format_eta(410.4) == "6 min 50 sec"


def test_format_stats_keys():
    out = format_stats(TrackStats(total_distance_m=2500.0, elapsed_s=600, average_speed_mps=2500 / 600))
    assert out == {"distance": "2.50 km", "duration": "10:00", "average_speed": "15.0 km/h"}
