"""
Strava integration module.

Usage:
    from challenge.features.strava import StravaClient, StravaTokenRepository
    from challenge.features.strava.sync import StravaSyncService

Components:
- StravaOAuth: code exchange and token refresh
- StravaClient: API client (athlete, activities)
- StravaTokenRepository: per-user credential store
- get_valid_access_token: refresh-if-expired helper
- StravaSyncService: full ingestion cycle (in .sync)

Models:
- StravaToken: OAuth credentials owned by a user
"""

from .models import StravaToken
from .schemas import RawActivity, TokenSet
from .oauth import StravaOAuth
from .client import StravaClient
from .repository import StravaTokenRepository
from .tokens import get_valid_access_token

__all__ = [
    # Models
    "StravaToken",
    # Schemas
    "RawActivity",
    "TokenSet",
    # OAuth / client
    "StravaOAuth",
    "StravaClient",
    # Repositories
    "StravaTokenRepository",
    "get_valid_access_token",
]
