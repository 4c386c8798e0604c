"""
Activity repository.

Data access layer for Activity and RoutePoint models.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stridelog.shared.repository import BaseRepository, storage_errors
from .models import Activity, RoutePoint
from .types import ActivityRecord, group_segments


class ActivityRepository(BaseRepository[Activity]):
    """Repository for Activity operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Activity)

    async def create_with_route(self, record: ActivityRecord, account_id: int) -> Activity:
        """
        Add an activity and all of its points to the session.

        Empty segments are skipped; remaining segments are indexed 0..n-1.
        Flushes but does not commit.

        Args:
            record: Finished activity
            account_id: Owner

        Returns:
            Pending activity with generated ID
        """
        segments = [segment for segment in record.segments if segment]
        points = [
            RoutePoint(
                latitude=point.latitude,
                longitude=point.longitude,
                segment_index=segment_index,
                sequence=sequence,
            )
            for segment_index, segment in enumerate(segments)
            for sequence, point in enumerate(segment)
        ]
        activity = Activity(
            type=record.type,
            distance=record.distance_km,
            duration=record.duration,
            date=record.created_at,
            comment=record.comment,
            account_id=account_id,
            points=points,
        )
        self.db.add(activity)
        await self.db.flush()
        return activity

    @storage_errors
    async def list_by_account(self, account_id: int) -> list[Activity]:
        """
        Get activities owned by an account, newest first.

        Points are loaded ordered by (segment_index, sequence).
        """
        result = await self.db.execute(
            select(Activity)
            .where(Activity.account_id == account_id)
            .order_by(Activity.date.desc(), Activity.id.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    def to_record(activity: Activity) -> ActivityRecord:
        """Convert a loaded Activity row into an ActivityRecord."""
        segments = group_segments(
            (point.segment_index, point.sequence, point.latitude, point.longitude)
            for point in activity.points
        )
        return ActivityRecord(
            id=activity.id,
            account_id=activity.account_id,
            type=activity.type,
            distance_km=activity.distance,
            duration=activity.duration,
            created_at=activity.date,
            segments=segments,
            comment=activity.comment or "",
        )
