"""
Purpose: Value types shared by the routing pipeline.
What it does:
- Point (lat/lon + optional display name)
- Leg (one piece of the route: connector or segment traversal)
- AssembledRoute (the ordered, continuous result of an optimization)

Rule: No provider calls, no ordering logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

LatLon = Tuple[float, float]


@dataclass(frozen=True)
class Point:
    """
    A coordinate. The name is only a display label (waypoint names in GPX)
    and is ignored when comparing points.
    """
    latitude: float
    longitude: float
    name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")

    @classmethod
    def from_latlon(cls, coordinates: LatLon, name: Optional[str] = None) -> Point:
        lat, lon = coordinates
        return cls(latitude=float(lat), longitude=float(lon), name=name)

    @property
    def latlon(self) -> LatLon:
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class Leg:
    """
    One leg of an assembled route.
    A connector ("To <segment>", "Return to start") or a segment traversal.
    """
    distance_m: float
    duration_s: float
    geometry: List[Point]
    label: Optional[str] = None


@dataclass(frozen=True)
class AssembledRoute:
    """
    Output of RouteAssembler.assemble. Built once per optimization call,
    never mutated afterwards.

    waypoints: the start, each segment start that got a connector leg,
    every segment end, and the start again when returning to start.
    full_geometry: all leg geometries chained, shared boundary points kept once.
    """
    total_distance_m: float
    total_duration_s: float
    legs: List[Leg]
    waypoints: List[Point]
    full_geometry: List[Point]
    segment_order: List[str]
    segment_name_order: List[str]
