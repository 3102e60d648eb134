"""
Strava sync orchestration.

One ingestion cycle for one user:
1. Load stored credentials, refresh them first if expired (and persist)
2. Fetch the activity list for the requested window
3. Hand the batch to ActivityIngestionService (replace + recompute)
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from challenge.features.activities.ingestion import (
    ActivityIngestionService,
    IngestionResult,
)
from challenge.features.users.models import User

from ..client import StravaClient
from ..schemas import RawActivity
from ..tokens import get_valid_access_token

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    raw_activities: list[RawActivity]
    ingestion: IngestionResult

    def raw_payload(self) -> list[dict]:
        """The Strava activity list as JSON-ready dicts, unknown fields included."""
        return [a.model_dump(mode="json") for a in self.raw_activities]


class StravaSyncService:
    """
    Ingestion cycle orchestrator.

    Usage:
        service = StravaSyncService(db, StravaClient())
        result = await service.sync_user_activities(user, after=..., before=...)
    """

    def __init__(
        self,
        db: AsyncSession,
        client: StravaClient,
        ingestion: Optional[ActivityIngestionService] = None,
    ):
        self.db = db
        self.client = client
        self.ingestion = ingestion or ActivityIngestionService(db)

    async def get_athlete(self, user: User) -> dict:
        """Strava profile of the user's linked athlete."""
        access_token = await get_valid_access_token(self.db, self.client, user.id)
        return await self.client.get_athlete(access_token)

    async def sync_user_activities(
        self,
        user: User,
        after: Optional[int] = None,
        before: Optional[int] = None,
    ) -> SyncResult:
        """
        Fetch the user's activities and replace the stored set with them.

        Raises:
            NotFoundError: If the user has no Strava credentials
            UpstreamError: If Strava refresh or fetch fails (nothing is replaced)
        """
        access_token = await get_valid_access_token(self.db, self.client, user.id)

        raw_activities = await self.client.fetch_activities(
            access_token, after=after, before=before
        )
        logger.info(
            f"Fetched {len(raw_activities)} Strava activities for user {user.id} "
            f"(after={after}, before={before})"
        )

        ingestion = await self.ingestion.ingest(user, raw_activities)
        return SyncResult(raw_activities=raw_activities, ingestion=ingestion)
