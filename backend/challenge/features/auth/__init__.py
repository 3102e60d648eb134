"""
Session authentication.

Usage:
    from challenge.features.auth import create_session_token, get_current_user
"""

from .tokens import create_session_token, decode_session_token
from .dependencies import get_current_user, get_session_claims

__all__ = [
    "create_session_token",
    "decode_session_token",
    "get_current_user",
    "get_session_claims",
]
