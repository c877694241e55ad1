"""
KOM hunt package: the entry point callers use.

Public API:
- KomHuntPlanner (generate_route / user_routes / get_route / export_route)
- Request/response models: KomHuntRequest, KomHuntResponse, SegmentSummary
- Route storage boundary: RouteStore, InMemoryRouteStore, StoredRoute, RouteSegmentLink
"""
from .models import (
    MAX_SEGMENTS_PER_HUNT,
    KomHuntRequest,
    KomHuntResponse,
    RouteSegmentLink,
    SegmentSummary,
    StoredRoute,
)
from .planner import KomHuntPlanner, default_route_name
from .route_store import InMemoryRouteStore, RouteStore

__all__ = [
    "MAX_SEGMENTS_PER_HUNT",
    "InMemoryRouteStore",
    "KomHuntPlanner",
    "KomHuntRequest",
    "KomHuntResponse",
    "RouteSegmentLink",
    "RouteStore",
    "SegmentSummary",
    "StoredRoute",
    "default_route_name",
]
