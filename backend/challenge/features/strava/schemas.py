"""
Strava data transfer objects.

TokenSet is what every OAuth call yields; RawActivity is one entry of the
/athlete/activities list, kept close to Strava's own field names.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class TokenSet:
    """Normalized OAuth token response."""

    access_token: str
    refresh_token: str
    expires_at: int
    athlete_id: Optional[str] = None

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "TokenSet":
        athlete = data.get("athlete") or {}
        athlete_id = athlete.get("id")
        return cls(
            access_token=data["access_token"],
            refresh_token=data["refresh_token"],
            expires_at=int(data["expires_at"]),
            athlete_id=str(athlete_id) if athlete_id is not None else None,
        )

    def to_response(self) -> dict[str, Any]:
        """Shape returned to API clients (Strava's snake_case names)."""
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": self.expires_at,
        }


class RawActivity(BaseModel):
    """
    Summary activity as returned by Strava.

    Unknown fields are retained so the original payload can be echoed
    back to the client untouched.
    """

    model_config = ConfigDict(extra="allow")

    id: int | str
    name: Optional[str] = None
    type: str
    distance: float = Field(default=0.0, ge=0)  # meters
    moving_time: int = Field(default=0, ge=0)  # seconds
    start_date: datetime

    @field_validator("distance", "moving_time", mode="before")
    @classmethod
    def _none_as_zero(cls, v: Any) -> Any:
        return 0 if v is None else v
