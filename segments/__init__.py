"""
Segments domain package.

Public API:
- Domain models: Segment, StarredSegment, kom_time_to_seconds
- Ordering: order_segments
- Storage boundary: SegmentStore, InMemorySegmentStore
"""
from .models import Segment, StarredSegment, kom_time_to_seconds
from .ordering import order_segments
from .store import InMemorySegmentStore, SegmentStore

__all__ = ["Segment",
           "StarredSegment",
             "kom_time_to_seconds",
               "order_segments",
               "SegmentStore",
                 "InMemorySegmentStore",
               ]
