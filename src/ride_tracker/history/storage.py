"""RideHistoryStorage — persists finalized rides to SQLite.

Schema design notes:
  - No AUTOINCREMENT: ``INTEGER PRIMARY KEY`` is a rowid alias.
  - ``path_json`` holds the whole path as a JSON array of ``[lat, lng]``
    pairs; rides are always read back whole, never queried point by point.
  - Rides are listed most recent first by ``finished_at`` then ``id``.
"""

from __future__ import annotations

import json
import sqlite3

from ride_tracker.track.models import RideRecord

_DDL = """
PRAGMA journal_mode = WAL;
PRAGMA synchronous  = NORMAL;

CREATE TABLE IF NOT EXISTS rides (
    id                INTEGER PRIMARY KEY,
    finished_at       REAL    NOT NULL,
    distance_m        REAL    NOT NULL,
    duration_s        INTEGER NOT NULL,
    average_speed_mps REAL    NOT NULL,
    point_count       INTEGER NOT NULL,
    path_json         TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_rides_finished_at
    ON rides (finished_at);
"""

_INSERT_RIDE = """
INSERT INTO rides (
    finished_at, distance_m, duration_s, average_speed_mps, point_count, path_json
) VALUES (?, ?, ?, ?, ?, ?)
"""

_SELECT_RIDES = """
SELECT id, finished_at, distance_m, duration_s, average_speed_mps, point_count, path_json
FROM   rides
ORDER  BY finished_at DESC, id DESC
"""


class RideHistoryStorage:
    """Stores and retrieves :class:`RideRecord` rows from a SQLite database.

    Parameters
    ----------
    db_path:
        Path to the SQLite file.  Pass ``":memory:"`` for in-process testing.
    """

    def __init__(self, db_path: str = "rides.db") -> None:
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        for stmt in _DDL.strip().split(";"):
            stmt = stmt.strip()
            if stmt:
                self._conn.execute(stmt)
        self._conn.commit()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def save_ride(self, record: RideRecord) -> int:
        """Persist *record* and return the new row id."""
        cursor = self._conn.execute(
            _INSERT_RIDE,
            (
                record.finished_at,
                record.distance_m,
                record.duration_s,
                record.average_speed_mps,
                len(record.path),
                json.dumps([p.as_pair() for p in record.path]),
            ),
        )
        self._conn.commit()
        return cursor.lastrowid  # type: ignore[return-value]

    def list_rides(self, limit: int | None = None) -> list[dict]:
        """Return stored rides, newest first.

        Each dict has ``id``, the :class:`RideRecord` fields (``path`` as a
        list of ``[lat, lng]``), and ``point_count``.
        """
        sql = _SELECT_RIDES
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT ?"
            params = (limit,)
        rows = self._conn.execute(sql, params).fetchall()
        return [self._row_to_dict(r) for r in rows]

    def get_ride(self, ride_id: int) -> dict | None:
        """Return a single ride as a dict, or None if not found."""
        row = self._conn.execute(
            "SELECT * FROM rides WHERE id = ?", (ride_id,)
        ).fetchone()
        return self._row_to_dict(row) if row else None

    def get_record(self, ride_id: int) -> RideRecord | None:
        """Return a single ride as a :class:`RideRecord`, or None."""
        row = self.get_ride(ride_id)
        return RideRecord.from_dict(row) if row else None

    def delete_ride(self, ride_id: int) -> bool:
        """Delete a ride; return True if a row was removed."""
        cursor = self._conn.execute("DELETE FROM rides WHERE id = ?", (ride_id,))
        self._conn.commit()
        return cursor.rowcount > 0

    def close(self) -> None:
        self._conn.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _row_to_dict(row: sqlite3.Row) -> dict:
        d = dict(row)
        d["path"] = [list(p) for p in json.loads(d.pop("path_json"))]
        return d
