"""
Leaderboard Routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from challenge.db.session import get_async_db
from challenge.features.leaderboard import project_participants
from challenge.features.users import UserRepository

router = APIRouter()


@router.get("/participants")
async def list_participants(db: AsyncSession = Depends(get_async_db)):
    """All participants by points, highest first."""
    users = await UserRepository(db).get_all_in_storage_order()
    return {"success": True, "participants": project_participants(users)}
