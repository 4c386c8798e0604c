"""
Route Segmenter

Groups recorded points into segments. A new segment starts on
resume-after-pause and is seeded with an anchor point, so pre- and
post-pause paths are kept apart.
"""

import logging
from typing import Optional

from stridelog.shared.errors import TrackingError
from stridelog.shared.geo import GeoPoint

logger = logging.getLogger(__name__)


class RouteSegmenter:
    """
    Ordered list of non-empty route segments.

    A segment is only ever added together with its first point, so the
    output never contains an empty segment.
    """

    def __init__(self):
        self._segments: list[list[GeoPoint]] = []
        self._anchor: Optional[GeoPoint] = None

    @property
    def segments(self) -> list[list[GeoPoint]]:
        """Copy of the segments."""
        return [list(segment) for segment in self._segments]

    @property
    def segment_count(self) -> int:
        return len(self._segments)

    @property
    def last_point(self) -> Optional[GeoPoint]:
        """Last point of the current segment."""
        if not self._segments:
            return None
        return self._segments[-1][-1]

    @property
    def anchor(self) -> Optional[GeoPoint]:
        return self._anchor

    def append(self, point: GeoPoint) -> None:
        """Append to the current segment, creating the first one if needed."""
        if not self._segments:
            self._segments.append([point])
            logger.debug(f"First segment started at {point.as_tuple()}")
            return
        self._segments[-1].append(point)

    def remember_anchor(self, point: Optional[GeoPoint]) -> None:
        """Keep the pre-pause coordinate for the next segment."""
        self._anchor = point

    def start_new_segment(self, start_point: Optional[GeoPoint] = None) -> bool:
        """
        Close the current segment and open a new one.

        The new segment is seeded with `start_point`, or with the remembered
        anchor when no point is given.

        Returns:
            True if a segment was opened, False if no start point was available
        """
        try:
            seed = self._resolve_seed(start_point)
        except TrackingError as e:
            logger.warning(f"New segment not started: {e}")
            return False

        self._segments.append([seed])
        self._anchor = None
        logger.debug(f"Segment {len(self._segments)} started at {seed.as_tuple()}")
        return True

    def reset(self) -> None:
        """Discard all segments and the anchor."""
        self._segments = []
        self._anchor = None

    def _resolve_seed(self, start_point: Optional[GeoPoint]) -> GeoPoint:
        seed = start_point or self._anchor
        if seed is None:
            raise TrackingError("no start point for segment")
        return seed
