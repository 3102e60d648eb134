"""
Access token freshness.

Every path that talks to Strava on a user's behalf goes through
get_valid_access_token so the expiry rule is applied identically.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from .client import StravaClient
from .repository import StravaTokenRepository

logger = logging.getLogger(__name__)


async def get_valid_access_token(
    db: AsyncSession,
    client: StravaClient,
    user_id: int,
    now_ms: Optional[int] = None,
) -> str:
    """
    Return a usable access token for the user, refreshing it first if expired.

    A refreshed triple is persisted (and committed) before returning so a
    rotated refresh token is never lost.

    Raises:
        NotFoundError: If the user has no stored credentials
        UpstreamError: If Strava rejects the refresh
    """
    repo = StravaTokenRepository(db)
    token = await repo.get(user_id)

    if token.is_expired(now_ms):
        logger.info(f"Refreshing Strava token for user {user_id}")
        new_tokens = await client.refresh(token.refresh_token)
        await repo.put(user_id, new_tokens)
        await db.commit()

    return token.access_token
