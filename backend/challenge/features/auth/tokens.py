"""
Session tokens.

Self-contained HS256 JWTs carrying the internal user id (``sub``) and the
Strava athlete id. Valid for ``session_token_days`` (7 by default).
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt  # PyJWT

from challenge.config import settings
from challenge.shared.errors import AuthError


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def create_session_token(
    user_id: int,
    provider_id: str,
    days: Optional[int] = None,
    now: Optional[datetime] = None,
) -> str:
    """Issue a signed session token for a user."""
    if days is None:
        days = settings.session_token_days
    now = now or _now_utc()
    payload = {
        "sub": str(user_id),
        "provider_id": str(provider_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=days)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry.

    Raises:
        AuthError: 403 for an expired, tampered or malformed token
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthError.invalid("Token expired")
    except jwt.InvalidTokenError:
        raise AuthError.invalid("Invalid token")

    if not str(claims["sub"]).isdigit():
        raise AuthError.invalid("Invalid token subject")
    return claims


def user_id_from_claims(claims: dict[str, Any]) -> int:
    return int(claims["sub"])
