"""
Activity Service

Persists finished activities and reads history back.

`create`, `update`, `get_by_id` and `list_by_account` raise StorageError so
callers can tell failure apart from an empty result. `list_for_account` and
`update_comment` are the degrading variants: they log and return an empty
result instead.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stridelog.shared.errors import ActivityNotFoundError, StorageError
from stridelog.shared.formatters import format_distance_km
from .repository import ActivityRepository
from .types import ActivityRecord

logger = logging.getLogger(__name__)


class ActivityService:
    """Activity store operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = ActivityRepository(db)

    async def create(self, record: ActivityRecord, account_id: int) -> int:
        """
        Store an activity with its route in one transaction.

        On any failure nothing is kept: neither the activity row nor points.

        Returns:
            New activity id

        Raises:
            StorageError: Write failed (already rolled back)
        """
        try:
            activity = await self.repo.create_with_route(record, account_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to save {record.type} activity for account {account_id}: {e}")
            raise StorageError(f"Activity save failed: {e}") from e

        logger.info(
            f"Saved activity {activity.id} ({record.type}, {format_distance_km(record.distance_km)}, "
            f"{len(record.segments)} segments, {record.point_count} points)"
        )
        return activity.id

    async def get_by_id(self, activity_id: int) -> Optional[ActivityRecord]:
        """Single activity with reconstructed segments, or None."""
        activity = await self.repo.get_by_id(activity_id)
        if activity is None:
            return None
        return self.repo.to_record(activity)

    async def update(self, activity_id: int, comment: str) -> ActivityRecord:
        """
        Change the comment of a stored activity.

        Id, owner, distance, duration and route are never touched. An
        unchanged comment performs no write.

        Raises:
            ActivityNotFoundError: Unknown id
            StorageError: Write failed
        """
        activity = await self.repo.get_by_id(activity_id)
        if activity is None:
            raise ActivityNotFoundError(activity_id)

        if activity.comment != comment:
            try:
                activity = await self.repo.update(activity, comment=comment)
                await self.db.commit()
            except SQLAlchemyError as e:
                await self.db.rollback()
                raise StorageError(f"Activity update failed: {e}") from e
            logger.info(f"Updated comment of activity {activity_id}")

        return self.repo.to_record(activity)

    async def list_by_account(self, account_id: int) -> list[ActivityRecord]:
        """
        Activities owned by an account, newest first.

        Raises:
            StorageError: Read failed
        """
        activities = await self.repo.list_by_account(account_id)
        return [self.repo.to_record(activity) for activity in activities]

    async def list_for_account(self, account_id: int) -> list[ActivityRecord]:
        """Like list_by_account, but a read failure yields []."""
        try:
            return await self.list_by_account(account_id)
        except StorageError as e:
            logger.error(f"Failed to load activities for account {account_id}: {e}")
            return []

    async def update_comment(self, activity_id: int, comment: str) -> Optional[ActivityRecord]:
        """Like update, but failures are logged and yield None."""
        try:
            return await self.update(activity_id, comment)
        except StorageError as e:
            logger.error(f"Failed to update activity {activity_id}: {e}")
            return None
