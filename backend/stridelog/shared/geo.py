"""
Geographic utility functions.

This is the SINGLE SOURCE OF TRUTH for geographic calculations.
DO NOT duplicate these functions elsewhere.
"""
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

# Earth radius in meters
EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class GeoPoint:
    """A coordinate in degrees."""
    latitude: float
    longitude: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class RouteBounds:
    """Bounding box of a route (for map framing)."""
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(
            (self.min_lat + self.max_lat) / 2,
            (self.min_lon + self.max_lon) / 2,
        )


def haversine_m(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in meters
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def haversine(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """Great-circle distance in kilometers."""
    return haversine_m(lat1, lon1, lat2, lon2) / 1000


def incremental_distance_km(
    previous: Optional[GeoPoint],
    current: GeoPoint
) -> float:
    """
    Distance added by moving from `previous` to `current`.

    Args:
        previous: Last accepted point, or None for the first sample
        current: Newly accepted point

    Returns:
        Distance in kilometers (0.0 when there is no previous point)
    """
    if previous is None:
        return 0.0
    meters = haversine_m(
        previous.latitude, previous.longitude,
        current.latitude, current.longitude,
    )
    return meters / 1000


def calculate_total_distance(points: Sequence[GeoPoint]) -> float:
    """
    Calculate total distance for a sequence of points.

    Args:
        points: Ordered points of one segment

    Returns:
        Total distance in kilometers
    """
    total = 0.0

    for i in range(1, len(points)):
        total += incremental_distance_km(points[i - 1], points[i])

    return total


def route_bounds(segments: Iterable[Sequence[GeoPoint]]) -> Optional[RouteBounds]:
    """
    Bounding box over every point of every segment.

    Returns:
        RouteBounds, or None if the route has no points
    """
    lats = []
    lons = []
    for segment in segments:
        for point in segment:
            lats.append(point.latitude)
            lons.append(point.longitude)

    if not lats:
        return None

    return RouteBounds(
        min_lat=min(lats),
        max_lat=max(lats),
        min_lon=min(lons),
        max_lon=max(lons),
    )
