"""
Shared utilities (NOT business logic).

Usage:
    from challenge.shared import BaseRepository, KeyedLock
    from challenge.shared.errors import NotFoundError
"""
from .constants import (
    ActivityType,
    StravaActivityType,
    UserRole,
    STRAVA_TO_ACTIVITY_TYPE,
    POINTS_PER_KM,
)
from .errors import (
    ChallengeError,
    AuthError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from .locks import KeyedLock
from .repository import BaseRepository

__all__ = [
    # constants
    "ActivityType",
    "StravaActivityType",
    "UserRole",
    "STRAVA_TO_ACTIVITY_TYPE",
    "POINTS_PER_KM",
    # errors
    "ChallengeError",
    "AuthError",
    "NotFoundError",
    "UpstreamError",
    "ValidationError",
    # concurrency
    "KeyedLock",
    # repository
    "BaseRepository",
]
