"""
Purpose: Decide in which order the segments of a hunt are visited.
What it does:

Greedy nearest neighbour from the start point:

cost(s) = distance(current, s.start) + distance(s.start, s.end)

pick the strictly cheapest remaining segment (first seen wins ties),
move current to its end point, repeat until nothing is left.

O(n^2) haversine calls, fine for the <= 10 segments a hunt allows.
No lookahead and no backtracking: this is not an optimal tour.

Rule: Ordering does not call the path provider; it only ranks by straight-line cost.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from routing.geo import haversine_m
from routing.models import Point

from .models import Segment

logger = logging.getLogger(__name__)


def order_segments(start: Point, segments: Sequence[Segment]) -> List[Segment]:
    """
    Order segments with the greedy nearest-neighbour heuristic.

    Parameters
    ----------
    start:
        Where the rider starts.
    segments:
        Segments to visit, in any order.

    Returns
    -------
    A new list holding every input segment exactly once.
    Zero or one segment is returned as-is, without computing any cost.
    """
    if len(segments) <= 1:
        return list(segments)

    ordered: List[Segment] = []
    remaining = list(segments)
    current = start

    while remaining:
        best_index = 0
        best_cost = float("inf")

        for index, segment in enumerate(remaining):
            to_start = haversine_m(current, segment.start_point)
            segment_length = haversine_m(segment.start_point, segment.end_point)
            cost = to_start + segment_length
            # strict: on equal cost the earlier candidate stays
            if cost < best_cost:
                best_cost = cost
                best_index = index

        chosen = remaining.pop(best_index)
        ordered.append(chosen)
        current = chosen.end_point

        logger.debug("next segment %s (%s), cost %.0fm", chosen.id, chosen.name, best_cost)

    return ordered
