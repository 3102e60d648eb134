"""
Shared route dependencies.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from challenge.db.session import get_async_db
from challenge.features.strava import StravaClient
from challenge.features.strava.sync import StravaSyncService


def get_strava_client() -> StravaClient:
    """Outbound Strava client; overridden in tests with a mock transport."""
    return StravaClient()


def get_sync_service(
    db: AsyncSession = Depends(get_async_db),
    client: StravaClient = Depends(get_strava_client),
) -> StravaSyncService:
    return StravaSyncService(db, client)
