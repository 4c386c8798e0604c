"""
Activity schemas.

Pydantic models for activity API payloads.
"""

from dataclasses import asdict
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from .stats import WeeklySummary
from .types import ActivityRecord


class PointSchema(BaseModel):
    lat: float
    lon: float


class BoundsSchema(BaseModel):
    """Map framing box."""

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float


class ActivityResponse(BaseModel):
    """Stored activity with its route."""

    id: int
    account_id: Optional[int]
    type: str
    distance_km: float
    duration: str
    date: datetime
    comment: str
    segments: list[list[PointSchema]]
    bounds: Optional[BoundsSchema] = None

    @classmethod
    def from_record(cls, record: ActivityRecord) -> "ActivityResponse":
        bounds = record.bounds
        return cls(
            id=record.id,
            account_id=record.account_id,
            type=record.type,
            distance_km=record.distance_km,
            duration=record.duration,
            date=record.created_at,
            comment=record.comment,
            segments=[
                [PointSchema(lat=p.latitude, lon=p.longitude) for p in segment]
                for segment in record.segments
            ],
            bounds=BoundsSchema(**asdict(bounds)) if bounds else None,
        )


class ActivityUpdate(BaseModel):
    """Only the comment is editable."""

    comment: str


class DayDistanceSchema(BaseModel):
    day: date
    distance_km: float


class WeeklySummaryResponse(BaseModel):
    days: list[DayDistanceSchema]
    total_distance_km: float
    total_seconds: int
    activity_count: int

    @classmethod
    def from_summary(cls, summary: WeeklySummary) -> "WeeklySummaryResponse":
        return cls(
            days=[DayDistanceSchema(day=d.day, distance_km=d.distance_km) for d in summary.days],
            total_distance_km=summary.total_distance_km,
            total_seconds=summary.total_seconds,
            activity_count=summary.activity_count,
        )
