"""
Activity tracking module.

Usage:
    from stridelog.features.tracking import ActivitySession, SaveQueue

Components:
- ActivitySession: Idle -> type selection -> running <-> paused -> finished
- RouteSegmenter: Splits the route into segments on resume
- DistanceAccumulator: Haversine running total
- SessionClock / ClockTicker: Pausable elapsed seconds
- SaveQueue: Background storage of finished activities with retry
- LocationSource: Interface of the external location provider
"""

from .clock import ClockTicker, SessionClock
from .distance import DistanceAccumulator
from .location import LocationCallback, LocationSource, ManualLocationSource
from .persistence import PendingSave, SaveQueue
from .segmenter import RouteSegmenter
from .session import ActivitySession, ActivitySink, SessionSnapshot, SessionState

__all__ = [
    "ActivitySession",
    "ActivitySink",
    "SessionSnapshot",
    "SessionState",
    "RouteSegmenter",
    "DistanceAccumulator",
    "SessionClock",
    "ClockTicker",
    "SaveQueue",
    "PendingSave",
    "LocationSource",
    "LocationCallback",
    "ManualLocationSource",
]
