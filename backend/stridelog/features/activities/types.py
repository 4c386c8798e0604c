"""
Activity domain types.

ActivityRecord is what a finished tracking session produces and what the
store hands back on reads, with `id` / `account_id` filled in.
"""

from dataclasses import dataclass, field
from datetime import datetime
from itertools import groupby
from typing import Iterable, Optional

from stridelog.shared.geo import GeoPoint, RouteBounds, route_bounds

Segment = list[GeoPoint]


@dataclass
class ActivityRecord:
    """A finished activity with its route segments."""
    type: str
    distance_km: float
    duration: str  # HH:MM:SS
    created_at: datetime
    segments: list[Segment] = field(default_factory=list)
    comment: str = ""
    id: Optional[int] = None
    account_id: Optional[int] = None

    @property
    def point_count(self) -> int:
        return sum(len(segment) for segment in self.segments)

    @property
    def bounds(self) -> Optional[RouteBounds]:
        return route_bounds(self.segments)


def group_segments(rows: Iterable[tuple[int, int, float, float]]) -> list[Segment]:
    """
    Rebuild segments from stored points.

    Args:
        rows: (segment_index, sequence, latitude, longitude) in any order

    Returns:
        Segments ordered by index, points ordered by sequence
    """
    ordered = sorted(rows, key=lambda row: (row[0], row[1]))
    return [
        [GeoPoint(lat, lon) for _, _, lat, lon in run]
        for _, run in groupby(ordered, key=lambda row: row[0])
    ]
