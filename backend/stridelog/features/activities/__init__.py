"""
Activity history module.

Usage:
    from stridelog.features.activities import ActivityService, ActivityRecord

Components:
- Activity, RoutePoint: SQLAlchemy models
- ActivityRecord: Finished activity with route segments
- ActivityRepository: Data access with segment reconstruction
- ActivityService: Create / update comment / list by account
- group_by_day, weekly_summary: History summaries
- export_gpx: GPX serialization
"""

from .models import Activity, RoutePoint
from .types import ActivityRecord, Segment, group_segments
from .repository import ActivityRepository
from .service import ActivityService
from .stats import DayDistance, WeeklySummary, group_by_day, weekly_summary
from .gpx_export import build_gpx, export_gpx

__all__ = [
    # Models
    "Activity",
    "RoutePoint",
    # Types
    "ActivityRecord",
    "Segment",
    "group_segments",
    # Data access
    "ActivityRepository",
    "ActivityService",
    # Summaries
    "DayDistance",
    "WeeklySummary",
    "group_by_day",
    "weekly_summary",
    # Export
    "build_gpx",
    "export_gpx",
]
