#Purpose: Great-circle distance between two coordinates.
#Used by the segment ordering heuristic and by the assembler to decide
#whether an approach (connector) leg is needed.

from __future__ import annotations

import math

from .models import Point

EARTH_RADIUS_M = 6371000.0


def haversine_m(a: Point, b: Point) -> float:
    """Haversine distance in meters. Symmetric, 0 for identical coordinates."""
    dlat = math.radians(b.latitude - a.latitude)
    dlon = math.radians(b.longitude - a.longitude)
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    h = min(1.0, h)  # float noise on antipodal points
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
