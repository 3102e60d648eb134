"""
User model.

A challenge participant linked to a Strava athlete.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, String
from sqlalchemy.orm import relationship

from challenge.models.base import Base


class User(Base):
    """
    Challenge participant.

    points, run_distance, ride_distance and streak are derived from the
    user's current activities and are only ever written by a full
    recompute during ingestion.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    provider_id = Column(String(32), unique=True, index=True, nullable=False)

    # Profile
    name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False)  # runner | cyclist | combined
    avatar = Column(String(512), nullable=True)

    # Derived stats
    points = Column(Float, nullable=False, default=0.0)
    run_distance = Column(Float, nullable=False, default=0.0)  # km
    ride_distance = Column(Float, nullable=False, default=0.0)  # km
    streak = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    activities = relationship(
        "Activity",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    strava_token = relationship(
        "StravaToken",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<User {self.id} provider_id={self.provider_id} ({self.name})>"
