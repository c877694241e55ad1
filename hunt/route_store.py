"""
Purpose: Boundary to wherever optimized routes are persisted.
What it does:
- RouteStore: save a route, attach its ordered segments, read routes back
- InMemoryRouteStore: dict-backed implementation for tests and scripts

Rule: Store owns persistence only; it never assembles or serializes routes.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from routing.models import AssembledRoute, Point

from .models import RouteSegmentLink, StoredRoute


class RouteStore(Protocol):
    def save_route(self, route: AssembledRoute, name: str, owner_id: str, start_point: Point) -> str:
        ...

    def add_route_segments(self, links: Sequence[RouteSegmentLink]) -> None:
        ...

    def list_routes(self, owner_id: str) -> List[StoredRoute]:
        ...

    def get_route(self, route_id: str, owner_id: str) -> Optional[StoredRoute]:
        ...


@dataclass
class InMemoryRouteStore:
    """
    In-memory route storage. Not thread-safe.
    """
    clock: Callable[[], datetime] = datetime.now
    _routes: Dict[str, StoredRoute] = field(default_factory=dict)

    # --- Public API ---

    def save_route(self, route: AssembledRoute, name: str, owner_id: str, start_point: Point) -> str:
        route_id = str(uuid.uuid4())
        self._routes[route_id] = StoredRoute(
            id=route_id,
            owner_id=owner_id,
            name=name,
            route=route,
            start_point=start_point,
            created_at=self.clock(),
        )
        return route_id

    def add_route_segments(self, links: Sequence[RouteSegmentLink]) -> None:
        for link in links:
            stored = self._routes.get(link.route_id)
            if stored is None:
                raise KeyError(f"unknown route {link.route_id}")
            stored.segment_links.append(link)

    def list_routes(self, owner_id: str) -> List[StoredRoute]:
        """Routes of one owner, newest first."""
        owned = [r for r in self._routes.values() if r.owner_id == owner_id]
        return sorted(owned, key=lambda r: r.created_at, reverse=True)

    def get_route(self, route_id: str, owner_id: str) -> Optional[StoredRoute]:
        stored = self._routes.get(route_id)
        if stored is None or stored.owner_id != owner_id:
            return None
        return stored

    def __len__(self) -> int:
        return len(self._routes)
