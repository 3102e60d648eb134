"""
Strava-related database models.

Models:
- StravaToken: OAuth credentials owned by a User
"""

import time
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from challenge.models.base import Base

from .schemas import TokenSet


class StravaToken(Base):
    """
    Strava OAuth credential triple for one user.

    Tokens should be encrypted in production.
    """

    __tablename__ = "strava_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    # OAuth tokens
    access_token = Column(Text, nullable=False)
    refresh_token = Column(Text, nullable=False)
    expires_at = Column(Integer, nullable=False)  # Unix timestamp, seconds

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationship
    user = relationship("User", back_populates="strava_token")

    def is_expired(self, now_ms: Optional[int] = None) -> bool:
        """True when expires_at (seconds) lies before now (milliseconds)."""
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        return self.expires_at * 1000 < now_ms

    def apply(self, tokens: TokenSet) -> None:
        """Replace the whole triple, including a rotated refresh token."""
        self.access_token = tokens.access_token
        self.refresh_token = tokens.refresh_token
        self.expires_at = tokens.expires_at
        self.updated_at = datetime.utcnow()

    def __repr__(self):
        return f"<StravaToken user_id={self.user_id} expires_at={self.expires_at}>"
