"""
Location source interface.

The platform location provider lives outside this package. It is expected
to call the registered callback with a GeoPoint for every fix, or with None
when a fix could not be obtained.
"""

import logging
from typing import Callable, Optional, Protocol

from stridelog.shared.geo import GeoPoint

logger = logging.getLogger(__name__)

LocationCallback = Callable[[Optional[GeoPoint]], None]


class LocationSource(Protocol):
    """Anything that can stream coordinates to a callback."""

    def start_tracking(self, callback: LocationCallback) -> None:
        ...

    def stop_tracking(self) -> None:
        ...

    def last_known_location(self) -> Optional[GeoPoint]:
        ...


class ManualLocationSource:
    """
    In-process source fed by `emit()`.

    Used for simulations and tests. Samples emitted while not tracking only
    update the last known location.
    """

    def __init__(self):
        self._callback: Optional[LocationCallback] = None
        self._last: Optional[GeoPoint] = None

    @property
    def is_tracking(self) -> bool:
        return self._callback is not None

    def start_tracking(self, callback: LocationCallback) -> None:
        self._callback = callback
        logger.debug("Manual location source started")

    def stop_tracking(self) -> None:
        self._callback = None
        logger.debug("Manual location source stopped")

    def last_known_location(self) -> Optional[GeoPoint]:
        return self._last

    def emit(self, point: Optional[GeoPoint]) -> None:
        if point is not None:
            self._last = point
        if self._callback is not None:
            self._callback(point)
