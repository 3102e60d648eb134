"""
Auth Routes

Strava OAuth token endpoints and session verification:
- /auth/exchange-token - Trade an authorization code for tokens
- /auth/refresh-token - Refresh an access token
- /auth/verify-token - Check a session token
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import AliasChoices, BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from challenge.api.deps import get_strava_client
from challenge.db.session import get_async_db
from challenge.features.auth import create_session_token, get_current_user
from challenge.features.leaderboard import project_user
from challenge.features.strava import StravaClient, StravaTokenRepository
from challenge.features.users import User, UserRepository

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Schemas
# =============================================================================

class ExchangeTokenRequest(BaseModel):
    code: str = Field(min_length=1)
    redirect_uri: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("redirectUri", "redirect_uri"),
    )


class RefreshTokenRequest(BaseModel):
    refresh_token: str = Field(
        min_length=1,
        validation_alias=AliasChoices("refresh_token", "refreshToken"),
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/exchange-token")
async def exchange_token(
    body: ExchangeTokenRequest,
    db: AsyncSession = Depends(get_async_db),
    client: StravaClient = Depends(get_strava_client),
):
    """
    Exchange a Strava authorization code for tokens.

    If the athlete is already registered, the new credentials replace the
    stored ones and a session token is issued as well.
    """
    tokens = await client.exchange_code(body.code)
    response = tokens.to_response()

    if tokens.athlete_id is None:
        return response

    user = await UserRepository(db).get_by_provider_id(str(tokens.athlete_id))
    if user:
        await StravaTokenRepository(db).put(user.id, tokens)
        await db.commit()
        response["token"] = create_session_token(user.id, user.provider_id)
        logger.info(f"Stored Strava credentials for user {user.id} via code exchange")

    return response


@router.post("/refresh-token")
async def refresh_token(
    body: RefreshTokenRequest,
    client: StravaClient = Depends(get_strava_client),
):
    """Refresh an access token. Stateless: nothing is stored."""
    tokens = await client.refresh(body.refresh_token)
    return tokens.to_response()


@router.post("/verify-token")
async def verify_token(user: User = Depends(get_current_user)):
    """Return the user behind a valid session token."""
    return {"success": True, "user": project_user(user)}
