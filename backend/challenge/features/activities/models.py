"""
Activity model.

Mirror of a Strava run or ride. The whole set for a user is rebuilt on
every ingestion cycle.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from challenge.models.base import Base


class Activity(Base):
    """Stored run or ride with derived pace/speed."""

    __tablename__ = "activities"
    __table_args__ = (
        Index("ix_activities_user_date", "user_id", "date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Strava identifiers
    provider_id = Column(String(32), nullable=False)

    # Activity info
    type = Column(String(10), nullable=False)  # run | ride
    name = Column(String(255), nullable=True)
    date = Column(DateTime, nullable=False, index=True)  # naive UTC

    # Metrics
    distance = Column(Float, nullable=False, default=0.0)  # km
    pace = Column(Float, nullable=False, default=0.0)  # min/km, runs only
    speed = Column(Float, nullable=False, default=0.0)  # km/h, rides only

    high_fives = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="activities")

    def __repr__(self):
        return f"<Activity {self.id} {self.type} {self.distance}km user={self.user_id}>"
