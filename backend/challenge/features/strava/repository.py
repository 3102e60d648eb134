"""
Strava repositories.

StravaTokenRepository is the token store: a plain user_id -> credential
mapping with no refresh logic of its own.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from challenge.shared.errors import NotFoundError
from challenge.shared.repository import BaseRepository

from .models import StravaToken
from .schemas import TokenSet


class StravaTokenRepository(BaseRepository[StravaToken]):
    """Repository for Strava OAuth tokens."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, StravaToken)

    async def find(self, user_id: int) -> StravaToken | None:
        """Get the user's credential or None."""
        return await self.get_by(user_id=user_id)

    async def get(self, user_id: int) -> StravaToken:
        """
        Get the user's credential.

        Raises:
            NotFoundError: If the user never linked Strava
        """
        token = await self.find(user_id)
        if token is None:
            raise NotFoundError(f"No Strava credentials for user {user_id}",
                                message="Strava account not linked")
        return token

    async def put(self, user_id: int, tokens: TokenSet) -> StravaToken:
        """
        Store the credential triple for a user, replacing any previous one.

        Flushes only; the caller commits.
        """
        token = await self.find(user_id)
        if token is None:
            return await self.create(
                user_id=user_id,
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                expires_at=tokens.expires_at,
            )
        token.apply(tokens)
        await self.db.flush()
        return token
