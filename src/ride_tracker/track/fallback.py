"""Built-in demo route and default map centre (Hoan Kiem Lake, Hanoi)."""

from __future__ import annotations

from ride_tracker.geo.models import Coordinate, to_path

# Used when no position fix is available.
FALLBACK_CENTER = Coordinate(21.0285, 105.8542)

# Closed walking loop around the lake, 23 points (real road geometry from OSRM).
FALLBACK_LOOP_ROUTE: tuple[Coordinate, ...] = to_path([
    (21.028511, 105.852017),
    (21.028759, 105.853158),
    (21.028936, 105.854340),
    (21.028870, 105.855309),
    (21.028570, 105.856195),
    (21.028084, 105.857021),
    (21.027471, 105.857663),
    (21.026819, 105.858102),
    (21.026187, 105.858261),
    (21.025452, 105.858185),
    (21.024783, 105.857851),
    (21.024244, 105.857315),
    (21.023868, 105.856610),
    (21.023703, 105.855786),
    (21.023807, 105.854946),
    (21.024175, 105.854175),
    (21.024776, 105.853551),
    (21.025529, 105.853181),
    (21.026343, 105.853091),
    (21.027135, 105.853282),
    (21.027868, 105.853751),
    (21.028511, 105.854439),
    (21.028936, 105.855309),
])
