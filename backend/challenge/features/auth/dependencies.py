"""
FastAPI auth dependencies.

Session token in the Authorization header ("Bearer <token>"). The token
is the second word of the header whatever the scheme: no token -> 401,
invalid or expired -> 403.
"""

from typing import Any, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from challenge.db.session import get_async_db
from challenge.features.users import User, UserRepository
from challenge.shared.errors import AuthError

from .tokens import decode_session_token, user_id_from_claims

bearer_scheme = HTTPBearer(auto_error=False)


def get_session_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict[str, Any]:
    """Decoded claims of the caller's session token."""
    if credentials:
        return decode_session_token(credentials.credentials)

    # HTTPBearer ignores other schemes; "Basic xyz" still carries a token
    parts = request.headers.get("Authorization", "").split()
    if len(parts) < 2:
        raise AuthError.missing()
    return decode_session_token(parts[1])


async def get_current_user(
    claims: dict[str, Any] = Depends(get_session_claims),
    db: AsyncSession = Depends(get_async_db),
) -> User:
    """
    The authenticated user.

    Raises:
        NotFoundError: If the token is valid but the user no longer exists
    """
    return await UserRepository(db).require(user_id_from_claims(claims))
