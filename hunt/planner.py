"""
Purpose: Orchestrator for KOM hunts (the "glue").
What it does:
Resolves the requested segments, orders them, assembles the route through
the path provider, persists the result and serves it back (list / get /
export). All collaborators are injected, nothing global.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from routing.assembler import RouteAssembler
from routing.errors import RouteNotFound, SegmentsNotFound
from routing.graphhopper_client import PathProvider
from routing.options import OptimizeOptions, TravelProfile
from segments.models import StarredSegment
from segments.ordering import order_segments
from segments.store import SegmentStore
from tracks.formats import ExportedFile, export_track

from .models import KomHuntRequest, KomHuntResponse, RouteSegmentLink, SegmentSummary, StoredRoute
from .route_store import RouteStore

logger = logging.getLogger(__name__)


def default_route_name(now: datetime) -> str:
    return f"KOM Hunt - {now:%d/%m/%Y}"


class KomHuntPlanner:
    """
    Coordinates one hunt from segment ids to a stored, exportable route.
    """
    def __init__(self,
                 segment_store: SegmentStore,
                 route_store: RouteStore,
                 path_provider: PathProvider,
                 clock: Callable[[], datetime] = datetime.now):
        self.segment_store = segment_store
        self.route_store = route_store
        self.assembler = RouteAssembler(path_provider)
        self.clock = clock

    def build_options(self, request: KomHuntRequest) -> OptimizeOptions:
        """
        Profile and go_back come from the request itself and win over the
        same keys in request.routing.
        """
        options = OptimizeOptions().with_overrides(request.routing)
        options = options.with_overrides({
            "profile": TravelProfile(request.profile),
            "return_to_start": request.go_back,
        })
        options.validate()
        return options

    def load_segments(self, segment_ids: List[str]) -> List[StarredSegment]:
        """
        Raises:
            SegmentsNotFound: none or only some of the ids resolve
        """
        records = self.segment_store.find_by_ids(segment_ids)

        if not records:
            raise SegmentsNotFound("No segments found", missing_ids=segment_ids)

        if len(records) != len(segment_ids):
            found = {str(r.id) for r in records}
            missing = [s for s in segment_ids if str(s) not in found]
            raise SegmentsNotFound(f"Some segments not found: {', '.join(missing)}", missing_ids=missing)

        return records

    def generate_route(self, owner_id: str, request: KomHuntRequest) -> KomHuntResponse:
        """
        Resolve -> order -> assemble -> persist.

        Persistence only happens once assembly succeeded: a NoPathFound,
        ProviderUnavailable or MalformedGeometry leaves the route store untouched.
        """
        request.validate()
        records = self.load_segments(request.segment_ids)
        options = self.build_options(request)

        logger.info("KOM hunt for %s: %d segments, profile=%s, go_back=%s",
                    owner_id, len(records), options.profile.value, options.return_to_start)

        ordered = order_segments(request.start_point, [r.to_segment() for r in records])
        route = self.assembler.assemble(request.start_point, ordered, options)

        route_name = request.route_name or default_route_name(self.clock())
        route_id = self.route_store.save_route(route, route_name, owner_id, request.start_point)
        self.route_store.add_route_segments([
            RouteSegmentLink(route_id=route_id, segment_id=segment_id, order=position)
            for position, segment_id in enumerate(route.segment_order, start=1)
        ])

        logger.info("stored route %s (%s): %.1fkm", route_id, route_name, route.total_distance_m / 1000)

        by_id = {str(r.id): r for r in records}
        summaries = [
            SegmentSummary(
                id=segment_id,
                name=by_id[segment_id].name,
                distance_m=by_id[segment_id].distance_m,
                kom_time_s=by_id[segment_id].kom_time_s,
                start_point=segment.start_point,
            )
            for segment_id, segment in zip(route.segment_order, ordered)
        ]

        return KomHuntResponse(route_id=route_id, route=route, segments=summaries)

    def user_routes(self, owner_id: str) -> List[StoredRoute]:
        return self.route_store.list_routes(owner_id)

    def get_route(self, route_id: str, owner_id: str) -> StoredRoute:
        stored: Optional[StoredRoute] = self.route_store.get_route(route_id, owner_id)
        if stored is None:
            raise RouteNotFound(f"Route {route_id} not found")
        return stored

    def export_route(self, route_id: str, owner_id: str, fmt: str) -> ExportedFile:
        """
        Serialize a stored route on demand (gpx / json).
        UnsupportedFormat is raised before anything is rendered.
        """
        stored = self.get_route(route_id, owner_id)
        return export_track(stored.route, stored.name, fmt)
