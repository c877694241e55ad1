"""
Purpose: The route assembly "orchestrator".
What it does:

Turns an ordered list of segments into one continuous route:

- connector leg current -> segment start (path provider), only when the
  straight-line gap is above options.approach_threshold_m

- traversal leg for the segment: cached polyline when present (duration
  estimated at options.kom_effort_speed_kph), path provider otherwise

- optional final leg back to the start

Accumulates totals, waypoints and the full geometry along the way.

Rule: Legs are computed strictly in sequence, each one starts where the
previous one ended. Any provider or geometry error aborts the whole
assembly; a partially built route is never returned.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, List, Optional, Sequence

from . import polyline_codec
from .geo import haversine_m
from .graphhopper_client import PathProvider
from .models import AssembledRoute, Leg, Point
from .options import OptimizeOptions, default_options

if TYPE_CHECKING:
    from segments.models import Segment

logger = logging.getLogger(__name__)

RETURN_LABEL = "Return to start"


def connector_label(segment_name: str) -> str:
    return f"To {segment_name}"


def traversal_label(segment_name: str) -> str:
    return f"Segment: {segment_name}"


class RouteAssembler:
    """
    Stateless apart from the injected path provider, so one instance can
    serve concurrent callers: every assemble() call keeps its own
    position and accumulators.
    """

    def __init__(self, path_provider: PathProvider):
        self.path_provider = path_provider

    def assemble(
        self,
        start: Point,
        ordered_segments: Sequence[Segment],
        options: Optional[OptimizeOptions] = None,
    ) -> AssembledRoute:
        """
        Build the AssembledRoute for segments already in visiting order.

        Raises whatever the path provider or the polyline codec raises
        (NoPathFound, ProviderUnavailable, MalformedGeometry) unchanged.
        """
        options = options or default_options()
        options.validate()

        legs: List[Leg] = []
        waypoints: List[Point] = [start]
        full_geometry: List[Point] = [start]
        total_distance = 0.0
        total_duration = 0.0
        current = start

        for segment in ordered_segments:
            # 1) approach the segment start if we are not already on it
            gap = haversine_m(current, segment.start_point)
            if gap > options.approach_threshold_m:
                connector = self._provider_leg(current, segment.start_point, options,
                                               connector_label(segment.name))
                legs.append(connector)
                total_distance += connector.distance_m
                total_duration += connector.duration_s
                full_geometry.extend(connector.geometry[1:])
                waypoints.append(segment.start_point)
            else:
                logger.debug("segment %s starts %.1fm away, no connector leg", segment.id, gap)

            # 2) ride the segment itself
            traversal = self._traversal_leg(segment, options)
            legs.append(traversal)
            total_distance += traversal.distance_m
            total_duration += traversal.duration_s
            full_geometry.extend(traversal.geometry[1:])
            waypoints.append(segment.end_point)
            current = segment.end_point

        # 3) optional way home
        if options.return_to_start:
            back = self._provider_leg(current, start, options, RETURN_LABEL)
            legs.append(back)
            total_distance += back.distance_m
            total_duration += back.duration_s
            full_geometry.extend(back.geometry[1:])
            waypoints.append(start)

        logger.info("assembled route: %d segments, %d legs, %.0fm, %.0fs",
                    len(ordered_segments), len(legs), total_distance, total_duration)

        return AssembledRoute(
            total_distance_m=total_distance,
            total_duration_s=total_duration,
            legs=legs,
            waypoints=waypoints,
            full_geometry=full_geometry,
            segment_order=[s.id for s in ordered_segments],
            segment_name_order=[s.name for s in ordered_segments],
        )

    # -------------------------
    # Internal helpers
    # -------------------------

    def _provider_leg(self, origin: Point, destination: Point,
                      options: OptimizeOptions, label: str) -> Leg:
        leg = self.path_provider.route(origin, destination, options)
        return replace(leg, label=label)

    def _traversal_leg(self, segment: Segment, options: OptimizeOptions) -> Leg:
        """
        Cached geometry wins over a provider query. Either way the leg
        distance is the segment's stored distance, so totals stay
        consistent with the synced segment metadata (even though the
        geometry length may differ slightly).
        """
        if segment.cached_geometry:
            geometry = polyline_codec.decode(segment.cached_geometry)
            duration = segment.distance_m / options.kom_effort_speed_mps
        else:
            logger.debug("segment %s has no cached geometry, asking the provider", segment.id)
            fallback = self.path_provider.route(segment.start_point, segment.end_point, options)
            geometry = fallback.geometry
            duration = fallback.duration_s

        return Leg(
            distance_m=segment.distance_m,
            duration_s=duration,
            geometry=geometry,
            label=traversal_label(segment.name),
        )
