"""
Activity Routes

The shared feed and high fives.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from challenge.db.session import get_async_db
from challenge.features.activities import ActivityRepository
from challenge.features.auth import get_current_user
from challenge.features.leaderboard import parse_external_id, project_activity, project_feed
from challenge.features.users import User
from challenge.shared.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def list_activities(db: AsyncSession = Depends(get_async_db)):
    """Every stored activity, newest first."""
    activities = await ActivityRepository(db).get_feed()
    return {"success": True, "activities": project_feed(activities)}


@router.post("/{activity_id}/highfive")
async def high_five(
    activity_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Add one high five to an activity.

    Accepts ``strava-<id>`` or a bare id. Unknown ids are 404 and write nothing.
    """
    internal_id = parse_external_id(activity_id)
    if internal_id is None:
        raise NotFoundError(f"Activity {activity_id} not found", message="Activity not found")

    activity = await ActivityRepository(db).increment_high_fives(internal_id)
    if activity is None:
        raise NotFoundError(f"Activity {activity_id} not found", message="Activity not found")

    await db.commit()
    logger.info(f"User {user.id} high-fived activity {internal_id}")
    return {"success": True, "activity": project_activity(activity)}
