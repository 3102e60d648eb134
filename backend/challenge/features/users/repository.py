"""
User repository.

Data access layer for challenge participants.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from challenge.shared.errors import NotFoundError
from challenge.shared.repository import BaseRepository

from .models import User


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_provider_id(self, provider_id: str) -> User | None:
        """
        Get user by Strava athlete ID.

        Args:
            provider_id: Strava athlete ID (stored as string)

        Returns:
            User if found, None otherwise
        """
        return await self.get_by(provider_id=str(provider_id))

    async def require(self, user_id: int) -> User:
        """
        Get user by internal id.

        Raises:
            NotFoundError: If no such user exists
        """
        user = await self.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found", message="User not found")
        return user

    async def upsert(
        self,
        provider_id: str,
        name: str,
        role: str,
        avatar: Optional[str] = None,
    ) -> tuple[User, bool]:
        """
        Create the user or update profile fields of an existing one.

        Derived stats are never touched here.

        Returns:
            Tuple of (user, created)
        """
        user = await self.get_by_provider_id(provider_id)
        if user:
            await self.update(user, name=name, role=role, avatar=avatar)
            return user, False
        user = await self.create(
            provider_id=str(provider_id),
            name=name,
            role=role,
            avatar=avatar,
        )
        return user, True

    async def get_all_in_storage_order(self) -> list[User]:
        """Every user ordered by id."""
        return await self.get_all(order_by=User.id)
