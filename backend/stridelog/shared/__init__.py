"""
Shared utilities (NOT business logic).

Usage:
    from stridelog.shared import haversine, GeoPoint
    from stridelog.shared.formatters import format_duration
"""
from .geo import (
    GeoPoint,
    RouteBounds,
    haversine,
    haversine_m,
    incremental_distance_km,
    calculate_total_distance,
    route_bounds,
    EARTH_RADIUS_M,
)
from .formatters import (
    format_duration,
    parse_duration,
    format_distance_km,
)
from .errors import (
    StrideLogError,
    ValidationError,
    AuthError,
    UsernameTakenError,
    StorageError,
    ActivityNotFoundError,
    TrackingError,
)

__all__ = [
    # Geo
    "GeoPoint",
    "RouteBounds",
    "haversine",
    "haversine_m",
    "incremental_distance_km",
    "calculate_total_distance",
    "route_bounds",
    "EARTH_RADIUS_M",
    # Formatters
    "format_duration",
    "parse_duration",
    "format_distance_km",
    # Errors
    "StrideLogError",
    "ValidationError",
    "AuthError",
    "UsernameTakenError",
    "StorageError",
    "ActivityNotFoundError",
    "TrackingError",
]
