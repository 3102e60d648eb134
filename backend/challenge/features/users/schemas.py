"""
User schemas.

Pydantic models for registration requests. Field names follow the
frontend's camelCase JSON.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from challenge.shared.constants import UserRole


class CredentialsIn(BaseModel):
    """Strava tokens the client obtained from /auth/exchange-token."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(
        min_length=1,
        validation_alias=AliasChoices("accessToken", "access_token"),
    )
    refresh_token: str = Field(
        min_length=1,
        validation_alias=AliasChoices("refreshToken", "refresh_token"),
    )
    expires_at: int = Field(validation_alias=AliasChoices("expiresAt", "expires_at"))


class UserIn(BaseModel):
    """Participant profile submitted on registration."""

    provider_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("providerId", "stravaId", "provider_id"),
    )
    name: str = Field(min_length=1, max_length=100)
    role: UserRole
    avatar: Optional[str] = None
    tokens: Optional[CredentialsIn] = None

    @field_validator("provider_id", mode="before")
    @classmethod
    def _stringify_id(cls, v):
        # Strava athlete ids arrive as JSON numbers
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class RegisterRequest(BaseModel):
    """POST /users body."""

    user: UserIn
