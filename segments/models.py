"""
Purpose: Domain models for the Segments capability.
What it does:
- Segment: what the ordering heuristic and the assembler work on
  (id, name, start/end Point, stored distance, optional cached polyline)
- StarredSegment: the record the segment store keeps for a starred
  segment (flat coordinates, KOM time, grades, elevation)

Rule: No provider calls, no ordering logic. Models only.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from routing.models import Point


@dataclass(frozen=True)
class Segment:
    """
    A point of interest to visit. When cached_geometry is present it is
    authoritative for the segment's shape; the path provider is only a
    fallback when it is missing.
    """
    id: str
    name: str
    start_point: Point
    end_point: Point
    distance_m: float
    cached_geometry: Optional[str] = None

    def __post_init__(self) -> None:
        if self.distance_m < 0:
            raise ValueError(f"segment {self.id}: distance_m must be >= 0")


@dataclass
class StarredSegment:
    """
    A starred segment as synced from the activity platform and stored.
    """
    id: str
    name: str
    distance_m: float
    start_latitude: float
    start_longitude: float
    end_latitude: float
    end_longitude: float

    polyline: Optional[str] = None
    kom_time_s: Optional[int] = None

    # descriptive only, never used in any cost
    average_grade: Optional[float] = None
    maximum_grade: Optional[float] = None
    elevation_high: Optional[float] = None
    elevation_low: Optional[float] = None

    def to_segment(self) -> Segment:
        return Segment(
            id=str(self.id),
            name=self.name,
            start_point=Point(self.start_latitude, self.start_longitude, name=f"{self.name} - Start"),
            end_point=Point(self.end_latitude, self.end_longitude, name=f"{self.name} - Finish"),
            distance_m=self.distance_m,
            cached_geometry=self.polyline or None,
        )


_KOM_SECONDS_ONLY = re.compile(r"^\s*(\d+)\s*s\s*$")


def kom_time_to_seconds(kom_time: Optional[str]) -> Optional[int]:
    """
    Parse a KOM time as displayed by the platform.

    "4:05" -> 245, "1:02:03" -> 3723, "45s" -> 45, None/"" -> None
    """
    if kom_time is None or not str(kom_time).strip():
        return None

    match = _KOM_SECONDS_ONLY.match(str(kom_time))
    if match:
        return int(match.group(1))

    parts = str(kom_time).strip().split(":")
    try:
        values = [int(part) for part in parts]
    except ValueError:
        raise ValueError(f"unreadable KOM time: {kom_time!r}") from None

    if len(values) > 3 or any(value < 0 for value in values):
        raise ValueError(f"unreadable KOM time: {kom_time!r}")

    total = 0
    for value in values:
        total = total * 60 + value
    return total
