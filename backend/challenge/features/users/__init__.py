"""
User management module.

Usage:
    from challenge.features.users import User, UserRepository

Models:
- User: Challenge participant linked to a Strava athlete

Repositories:
- UserRepository: Data access for users
"""

from .models import User
from .schemas import CredentialsIn, RegisterRequest, UserIn
from .repository import UserRepository

__all__ = [
    # Models
    "User",
    # Schemas
    "CredentialsIn",
    "RegisterRequest",
    "UserIn",
    # Repositories
    "UserRepository",
]
