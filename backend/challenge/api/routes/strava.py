"""
Strava Routes

Authenticated proxies to Strava on the caller's behalf:
- /strava/athlete - Athlete profile
- /strava/activities - Fetch activities and run an ingestion cycle
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from challenge.api.deps import get_sync_service
from challenge.features.auth import get_current_user
from challenge.features.strava.sync import StravaSyncService
from challenge.features.users import User

router = APIRouter()


@router.get("/athlete")
async def get_athlete(
    user: User = Depends(get_current_user),
    sync: StravaSyncService = Depends(get_sync_service),
):
    """Strava athlete profile, refreshing the access token first if expired."""
    return await sync.get_athlete(user)


@router.get("/activities")
async def get_activities(
    after: Optional[int] = Query(default=None, description="Epoch seconds"),
    before: Optional[int] = Query(default=None, description="Epoch seconds"),
    user: User = Depends(get_current_user),
    sync: StravaSyncService = Depends(get_sync_service),
):
    """
    Fetch the caller's Strava activities and replace their stored set.

    Returns the raw Strava payload, unsupported types included.
    """
    result = await sync.sync_user_activities(user, after=after, before=before)
    return result.raw_payload()
