"""Ride history and track-stats endpoints."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from ride_tracker.history.storage import RideHistoryStorage


def make_ride_payload(finished_at: float = 1_700_000_000.0, **overrides) -> dict:
    """Build a POST /api/rides body."""
    payload = {
        "path": [[21.0285, 105.8542], [21.0290, 105.8550]],
        "distance_m": 95.5,
        "duration_s": 60,
        "average_speed_mps": 1.59,
        "finished_at": finished_at,
    }
    payload.update(overrides)
    return payload


def test_create_and_get_ride(client, db_path):
    resp = client.post("/api/rides", params={"db": db_path}, json=make_ride_payload())
    assert resp.status_code == 201
    ride_id = resp.json()["id"]

    resp = client.get(f"/api/rides/{ride_id}", params={"db": db_path})
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == ride_id
    assert data["point_count"] == 2
    assert data["duration_s"] == 60


def test_list_rides_newest_first(client, db_path):
    for ts in (100.0, 300.0, 200.0):
        client.post("/api/rides", params={"db": db_path}, json=make_ride_payload(finished_at=ts))

    rides = client.get("/api/rides", params={"db": db_path}).json()["rides"]
    assert [r["finished_at"] for r in rides] == [300.0, 200.0, 100.0]


def test_missing_ride_is_404(client, db_path):
    resp = client.get("/api/rides/42", params={"db": db_path})
    assert resp.status_code == 404


def test_create_ride_defaults_finished_at(client, db_path):
    payload = make_ride_payload()
    del payload["finished_at"]
    ride_id = client.post("/api/rides", params={"db": db_path}, json=payload).json()["id"]

    storage = RideHistoryStorage(db_path)
    try:
        assert storage.get_ride(ride_id)["finished_at"] > 0
    finally:
        storage.close()


def test_create_ride_rejects_empty_path(client, db_path):
    resp = client.post("/api/rides", params={"db": db_path}, json=make_ride_payload(path=[]))
    assert resp.status_code == 422


def test_list_rides_uses_storage_and_closes_it(client):
    mock_store = MagicMock()
    mock_store.list_rides.return_value = []
    with patch("ride_tracker.web.app.RideHistoryStorage", return_value=mock_store):
        resp = client.get("/api/rides")
    assert resp.json() == {"rides": []}
    mock_store.close.assert_called_once()


# ---------------------------------------------------------------------------
# POST /api/track/stats
# ---------------------------------------------------------------------------


def test_track_stats_equator_path(client):
    resp = client.post(
        "/api/track/stats",
        json={"path": [[0.0, 0.0], [0.0, 0.001]], "elapsed_s": 0},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["total_distance_m"] == pytest.approx(111.19, rel=0.01)
    assert data["average_speed_mps"] == pytest.approx(data["total_distance_m"])
    assert data["distance"] == "0.11 km"
    assert data["duration"] == "0:00"


def test_track_stats_empty_path(client):
    data = client.post("/api/track/stats", json={"path": [], "elapsed_s": 30}).json()
    assert data["total_distance_m"] == 0.0
    assert data["duration"] == "0:30"


def test_track_stats_rejects_negative_elapsed(client):
    resp = client.post("/api/track/stats", json={"path": [], "elapsed_s": -1})
    assert resp.status_code == 422
