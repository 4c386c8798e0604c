"""
Activity Routes

Activity history, comment edits, weekly stats and GPX export.
"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from stridelog.db.session import get_async_db
from stridelog.features.activities import ActivityService, export_gpx, weekly_summary
from stridelog.features.activities.schemas import (
    ActivityResponse,
    ActivityUpdate,
    WeeklySummaryResponse,
)
from stridelog.shared.errors import ActivityNotFoundError, StorageError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/accounts/{account_id}/activities", response_model=list[ActivityResponse])
async def list_activities(account_id: int, db: AsyncSession = Depends(get_async_db)):
    """Activities of an account, newest first, with route segments."""
    records = await ActivityService(db).list_for_account(account_id)
    return [ActivityResponse.from_record(record) for record in records]


@router.get("/accounts/{account_id}/activities/stats", response_model=WeeklySummaryResponse)
async def activity_stats(
    account_id: int,
    today: Optional[date] = None,
    db: AsyncSession = Depends(get_async_db)
):
    """Distance per day over the last seven days."""
    records = await ActivityService(db).list_for_account(account_id)
    summary = weekly_summary(records, today or date.today())
    return WeeklySummaryResponse.from_summary(summary)


@router.get("/activities/{activity_id}", response_model=ActivityResponse)
async def get_activity(activity_id: int, db: AsyncSession = Depends(get_async_db)):
    """Single activity with route segments."""
    try:
        record = await ActivityService(db).get_by_id(activity_id)
    except StorageError as e:
        logger.error(f"Failed to load activity {activity_id}: {e}")
        raise HTTPException(status_code=503, detail="Storage unavailable")
    if record is None:
        raise HTTPException(status_code=404, detail="Activity not found")
    return ActivityResponse.from_record(record)


@router.patch("/activities/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    activity_id: int,
    request: ActivityUpdate,
    db: AsyncSession = Depends(get_async_db)
):
    """Change the comment of an activity."""
    try:
        record = await ActivityService(db).update(activity_id, comment=request.comment)
    except ActivityNotFoundError:
        raise HTTPException(status_code=404, detail="Activity not found")
    except StorageError as e:
        logger.error(f"Failed to update activity {activity_id}: {e}")
        raise HTTPException(status_code=503, detail="Storage unavailable")
    return ActivityResponse.from_record(record)


@router.get("/activities/{activity_id}/gpx")
async def download_gpx(activity_id: int, db: AsyncSession = Depends(get_async_db)):
    """Export the activity route as GPX."""
    try:
        record = await ActivityService(db).get_by_id(activity_id)
    except StorageError as e:
        logger.error(f"Failed to load activity {activity_id}: {e}")
        raise HTTPException(status_code=503, detail="Storage unavailable")
    if record is None:
        raise HTTPException(status_code=404, detail="Activity not found")

    return Response(
        content=export_gpx(record),
        media_type="application/gpx+xml",
        headers={"Content-Disposition": f'attachment; filename="activity-{activity_id}.gpx"'},
    )
