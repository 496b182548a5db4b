"""Tests for haversine_m and path_length_m."""

from __future__ import annotations

import itertools
import math

import pytest

from ride_tracker.geo.distance import EARTH_RADIUS_M, haversine_m, path_length_m
from ride_tracker.geo.models import Coordinate, to_path

_POINTS = [
    Coordinate(0.0, 0.0),
    Coordinate(21.028511, 105.852017),
    Coordinate(-33.8688, 151.2093),
    Coordinate(51.5074, -0.1278),
    Coordinate(89.9, 179.9),
    Coordinate(-89.9, -179.9),
    Coordinate(0.0, 180.0),
]


# ---------------------------------------------------------------------------
# Symmetry and identity
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("a,b", list(itertools.combinations(_POINTS, 2)))
def test_distance_is_symmetric(a, b):
    assert haversine_m(a, b) == pytest.approx(haversine_m(b, a))


@pytest.mark.parametrize("a", _POINTS)
def test_distance_to_self_is_zero(a):
    assert haversine_m(a, a) == pytest.approx(0.0, abs=1e-9)


# ---------------------------------------------------------------------------
# Non-negativity and triangle inequality
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("a,b,c", list(itertools.permutations(_POINTS[:5], 3)))
def test_triangle_inequality(a, b, c):
    ab = haversine_m(a, b)
    bc = haversine_m(b, c)
    ac = haversine_m(a, c)
    assert ab >= 0.0
    assert ac <= ab + bc + 1e-3


# ---------------------------------------------------------------------------
# Concrete values
# ---------------------------------------------------------------------------


def test_one_millidegree_longitude_at_equator():
    d = haversine_m(Coordinate(0.0, 0.0), Coordinate(0.0, 0.001))
    assert d == pytest.approx(111.19, rel=0.01)


def test_antipodal_points_half_circumference():
    d = haversine_m(Coordinate(0.0, 0.0), Coordinate(0.0, 180.0))
    assert d == pytest.approx(math.pi * EARTH_RADIUS_M)


def test_out_of_range_inputs_stay_finite():
    d = haversine_m(Coordinate(400.0, -1000.0), Coordinate(-250.0, 720.5))
    assert math.isfinite(d)
    assert d >= 0.0


# ---------------------------------------------------------------------------
# path_length_m
# ---------------------------------------------------------------------------


def test_path_length_empty_and_single():
    assert path_length_m(()) == 0.0
    assert path_length_m((Coordinate(1.0, 1.0),)) == 0.0


def test_path_length_sums_segments():
    path = to_path([(0.0, 0.0), (0.0, 0.001), (0.0, 0.002)])
    single = haversine_m(path[0], path[1])
    assert path_length_m(path) == pytest.approx(2 * single)


def test_to_path_accepts_pairs_and_coordinates():
    path = to_path([(1.0, 2.0), Coordinate(3.0, 4.0)])
    assert path == (Coordinate(1.0, 2.0), Coordinate(3.0, 4.0))
    assert path[0].as_pair() == (1.0, 2.0)
