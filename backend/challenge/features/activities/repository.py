"""
Activity repository.

Data access for the mirrored activity set and the feed.
"""

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from challenge.shared.repository import BaseRepository

from .models import Activity


class ActivityRepository(BaseRepository[Activity]):
    """Repository for stored activities."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Activity)

    async def get_for_user(self, user_id: int) -> list[Activity]:
        """All activities owned by a user, newest first."""
        result = await self.db.execute(
            select(Activity)
            .where(Activity.user_id == user_id)
            .order_by(desc(Activity.date))
        )
        return list(result.scalars().all())

    async def high_fives_by_provider_id(self, user_id: int) -> dict[str, int]:
        """Map of Strava activity id -> current high-five count for a user."""
        result = await self.db.execute(
            select(Activity.provider_id, Activity.high_fives)
            .where(Activity.user_id == user_id)
        )
        return {provider_id: high_fives for provider_id, high_fives in result.all()}

    async def delete_for_user(self, user_id: int) -> int:
        """Drop the user's whole activity set. Returns rows deleted."""
        return await self.delete_where(user_id=user_id)

    async def get_feed(self) -> list[Activity]:
        """
        Every stored activity with its owner loaded, in storage order.

        Sorting for display is the projector's job.
        """
        result = await self.db.execute(
            select(Activity)
            .options(selectinload(Activity.user))
            .order_by(Activity.id)
        )
        return list(result.scalars().all())

    async def get_with_user(self, activity_id: int) -> Activity | None:
        """Single activity with its owner loaded, re-read from the database."""
        result = await self.db.execute(
            select(Activity)
            .where(Activity.id == activity_id)
            .options(selectinload(Activity.user))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def increment_high_fives(self, activity_id: int) -> Activity | None:
        """
        Atomically add one high five.

        Returns:
            The updated activity, or None if the id is unknown (nothing written)
        """
        result = await self.db.execute(
            update(Activity)
            .where(Activity.id == activity_id)
            .values(high_fives=Activity.high_fives + 1)
            .execution_options(synchronize_session=False)
        )
        if not result.rowcount:
            return None
        await self.db.flush()
        return await self.get_with_user(activity_id)
