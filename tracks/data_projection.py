#Purpose: Machine-readable projection of an AssembledRoute.
#Field-for-field, nothing dropped: every leg with its geometry, waypoints
#(with their names), full geometry, ordering, totals.

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Dict

from routing.models import AssembledRoute


def route_to_dict(route: AssembledRoute) -> Dict[str, Any]:
    return asdict(route)


def to_data_projection(route: AssembledRoute) -> str:
    return json.dumps(route_to_dict(route), indent=2, ensure_ascii=False)
