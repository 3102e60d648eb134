"""
User Routes

Registration (upsert by Strava athlete id) and lookup.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from challenge.db.session import get_async_db
from challenge.features.auth import create_session_token
from challenge.features.leaderboard import project_user
from challenge.features.strava import StravaTokenRepository, TokenSet
from challenge.features.users import RegisterRequest, UserRepository
from challenge.shared.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
async def register_user(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_async_db),
):
    """
    Create or update a participant and issue a session token.

    Derived stats (points, distances, streak) are left untouched on update.
    """
    data = body.user
    user, created = await UserRepository(db).upsert(
        provider_id=data.provider_id,
        name=data.name,
        role=data.role.value,
        avatar=data.avatar,
    )

    if data.tokens:
        await StravaTokenRepository(db).put(
            user.id,
            TokenSet(
                access_token=data.tokens.access_token,
                refresh_token=data.tokens.refresh_token,
                expires_at=data.tokens.expires_at,
            ),
        )

    await db.commit()
    logger.info(f"{'Created' if created else 'Updated'} user {user.id} (strava {user.provider_id})")

    return {
        "success": True,
        "token": create_session_token(user.id, user.provider_id),
        "user": project_user(user),
    }


@router.get("/{provider_id}")
async def get_user(provider_id: str, db: AsyncSession = Depends(get_async_db)):
    """Get a participant by Strava athlete id."""
    user = await UserRepository(db).get_by_provider_id(provider_id)
    if not user:
        raise NotFoundError(f"No user with provider id {provider_id}", message="User not found")
    return {"success": True, "user": project_user(user)}
