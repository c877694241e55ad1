"""
Purpose: Request/response and stored-route models for KOM hunts.
What it does:
- KomHuntRequest (+ validate): what a caller asks for
- SegmentSummary / KomHuntResponse: what generate_route hands back
- StoredRoute / RouteSegmentLink: what the route store keeps

Rule: Models and input checks only, no orchestration.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from routing.models import AssembledRoute, Point
from routing.options import TravelProfile

MAX_SEGMENTS_PER_HUNT = 10
MAX_ROUTE_NAME_LENGTH = 100


@dataclass
class KomHuntRequest:
    """
    segment_ids: ids of starred segments to visit (1..10, unique)
    routing: optional OptimizeOptions overrides (locale, kom_effort_speed_kph, ...)
    go_back: ride back to the start point at the end
    """
    segment_ids: List[str]
    start_point: Point
    profile: TravelProfile = TravelProfile.BIKE
    go_back: bool = False
    route_name: Optional[str] = None
    routing: Dict[str, Any] = field(default_factory=dict)

    def validate(self) -> None:
        if not self.segment_ids:
            raise ValueError("at least one segment id is required")

        if len(self.segment_ids) > MAX_SEGMENTS_PER_HUNT:
            raise ValueError(f"at most {MAX_SEGMENTS_PER_HUNT} segments per hunt")

        if len(set(self.segment_ids)) != len(self.segment_ids):
            raise ValueError("segment ids must be unique")

        # raises ValueError on an unknown profile
        TravelProfile(self.profile)

        if self.route_name is not None and len(self.route_name) > MAX_ROUTE_NAME_LENGTH:
            raise ValueError(f"route_name must be at most {MAX_ROUTE_NAME_LENGTH} characters")


@dataclass(frozen=True)
class SegmentSummary:
    id: str
    name: str
    distance_m: float
    kom_time_s: Optional[int]
    start_point: Point


@dataclass(frozen=True)
class KomHuntResponse:
    route_id: str
    route: AssembledRoute
    segments: List[SegmentSummary]


@dataclass(frozen=True)
class RouteSegmentLink:
    """Position (1-based) of a segment in a stored route."""
    route_id: str
    segment_id: str
    order: int


@dataclass
class StoredRoute:
    id: str
    owner_id: str
    name: str
    route: AssembledRoute
    start_point: Point
    created_at: datetime
    segment_links: List[RouteSegmentLink] = field(default_factory=list)

    @property
    def segment_ids(self) -> List[str]:
        return [link.segment_id for link in sorted(self.segment_links, key=lambda link: link.order)]
