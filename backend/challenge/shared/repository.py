"""
Base repository with common CRUD operations.

Feature repositories (users, activities, tokens) inherit from it.
All access goes through an AsyncSession; repositories only flush,
committing is left to the caller so a service can group several
writes into one transaction.

Usage:
    class UserRepository(BaseRepository[User]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, User)

        async def get_by_provider_id(self, provider_id: str) -> User | None:
            return await self.get_by(provider_id=provider_id)
"""

from typing import Any, Generic, Type, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Generic async data access for a single model."""

    def __init__(self, db: AsyncSession, model: Type[T]):
        """
        Args:
            db: Async database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def _filtered(self, query, filters: dict[str, Any]):
        for key, value in filters.items():
            query = query.where(getattr(self.model, key) == value)
        return query

    async def get_by_id(self, id: int) -> T | None:
        """Get entity by primary key, None if missing."""
        return await self.db.get(self.model, id)

    async def get_by(self, **filters) -> T | None:
        """
        Get single entity by field values.

        Returns:
            Matching entity or None
        """
        result = await self.db.execute(
            self._filtered(select(self.model), filters)
        )
        return result.scalar_one_or_none()

    async def get_all(self, order_by=None, **filters) -> list[T]:
        """
        Get all entities matching field values.

        Args:
            order_by: Optional column expression(s) to sort by
            **filters: Field name-value pairs to filter by
        """
        query = self._filtered(select(self.model), filters)
        if order_by is not None:
            query = query.order_by(order_by)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create(self, **fields) -> T:
        """Create and flush a new entity so its generated id is populated."""
        entity = self.model(**fields)
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def add_all(self, entities: list[T]) -> list[T]:
        """Stage several new entities and flush them in one round trip."""
        self.db.add_all(entities)
        await self.db.flush()
        return entities

    async def update(self, entity: T, **fields) -> T:
        """Set fields on an entity and flush."""
        for key, value in fields.items():
            setattr(entity, key, value)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def delete_where(self, **filters) -> int:
        """
        Bulk delete entities matching field values.

        Returns:
            Number of rows deleted
        """
        stmt = delete(self.model)
        for key, value in filters.items():
            stmt = stmt.where(getattr(self.model, key) == value)
        result = await self.db.execute(stmt)
        await self.db.flush()
        return result.rowcount or 0

    async def count(self, **filters) -> int:
        """Count entities matching field values."""
        query = self._filtered(select(func.count()).select_from(self.model), filters)
        result = await self.db.execute(query)
        return result.scalar() or 0
