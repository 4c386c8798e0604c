"""
Activity history summaries.

Day grouping for the history list and the seven-day distance chart.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from stridelog.shared.formatters import parse_duration
from .types import ActivityRecord

WEEK_DAYS = 7


@dataclass
class DayDistance:
    """Distance covered on one calendar day."""
    day: date
    distance_km: float


@dataclass
class WeeklySummary:
    """Chart data for the last seven days (oldest first) plus totals."""
    days: list[DayDistance]
    total_distance_km: float
    total_seconds: int
    activity_count: int


def group_by_day(records: Iterable[ActivityRecord]) -> list[tuple[date, list[ActivityRecord]]]:
    """
    Group activities by calendar day.

    Returns:
        (day, activities) pairs, newest day first; activities keep input order
    """
    groups: dict[date, list[ActivityRecord]] = defaultdict(list)
    for record in records:
        groups[record.created_at.date()].append(record)
    return sorted(groups.items(), key=lambda item: item[0], reverse=True)


def weekly_summary(records: Iterable[ActivityRecord], today: date) -> WeeklySummary:
    """
    Summarize the seven days ending on `today` (inclusive).

    Activities outside the window are ignored.
    """
    start = today - timedelta(days=WEEK_DAYS - 1)
    per_day = {start + timedelta(days=offset): 0.0 for offset in range(WEEK_DAYS)}
    total_seconds = 0
    count = 0

    for record in records:
        day = record.created_at.date()
        if day not in per_day:
            continue
        per_day[day] += record.distance_km
        total_seconds += parse_duration(record.duration)
        count += 1

    days = [DayDistance(day=day, distance_km=distance) for day, distance in per_day.items()]
    return WeeklySummary(
        days=days,
        total_distance_km=sum(day.distance_km for day in days),
        total_seconds=total_seconds,
        activity_count=count,
    )
