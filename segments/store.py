"""
Purpose: Boundary to wherever starred segments are persisted.
What it does:
- SegmentStore: the one lookup the hunt planner needs (records by id)
- InMemorySegmentStore: dict-backed implementation for tests and scripts

Rule: The store only returns records. Deciding that a missing id is an
error (SegmentsNotFound) is the planner's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Protocol, Sequence

from .models import StarredSegment


class SegmentStore(Protocol):
    def find_by_ids(self, segment_ids: Sequence[str]) -> List[StarredSegment]:
        """Return the records that exist among segment_ids (missing ids are skipped)."""
        ...


@dataclass
class InMemorySegmentStore:
    """
    In-memory segment records keyed by id.
    Not thread-safe.
    """
    _segments: Dict[str, StarredSegment] = field(default_factory=dict)

    # --- Public API ---

    def upsert(self, record: StarredSegment) -> None:
        """
        Insert or replace the record with the same id (re-sync of a segment).
        """
        self._segments[str(record.id)] = record

    def upsert_many(self, records: Iterable[StarredSegment]) -> None:
        for record in records:
            self.upsert(record)

    def get(self, segment_id: str) -> StarredSegment | None:
        return self._segments.get(str(segment_id))

    def find_by_ids(self, segment_ids: Sequence[str]) -> List[StarredSegment]:
        found = []
        for segment_id in dict.fromkeys(str(s) for s in segment_ids):
            record = self._segments.get(segment_id)
            if record is not None:
                found.append(record)
        return found

    def __len__(self) -> int:
        return len(self._segments)
