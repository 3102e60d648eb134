"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from typing import Annotated, List, Optional
from pydantic_settings import BaseSettings, NoDecode
from pydantic import AliasChoices, Field, field_validator, ConfigDict

# Project root: repository checkout containing backend/
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Database ===
    database_url: str = Field(
        default="sqlite:///./challenge.db",
        description="Database connection URL"
    )

    # === CORS ===
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins"
    )

    # === Strava ===
    strava_client_id: Optional[str] = Field(default=None)
    strava_client_secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "strava_client_secret",
            "strava_secret",  # Also accept STRAVA_SECRET
        )
    )
    strava_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for every outbound Strava call"
    )

    # === Session tokens ===
    jwt_secret: str = Field(default="challenge-dev-secret-change-me")
    jwt_algorithm: str = Field(default="HS256")
    session_token_days: int = Field(default=7, ge=1)

    # === Gamification ===
    streak_timezone: str = Field(
        default="UTC",
        description="IANA zone used to cut activity dates into calendar days"
    )
    streak_lookback_days: int = Field(default=30, ge=0)
    id_namespace: str = Field(
        default="strava",
        description="Prefix for externally visible user and activity ids"
    )
    preserve_high_fives: bool = Field(
        default=False,
        description="Carry high-five counters across ingestion cycles"
    )

    # === Frontend ===
    static_dir: Path = Field(default=PROJECT_ROOT / "public")

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('streak_timezone')
    @classmethod
    def check_streak_timezone(cls, v: str) -> str:
        """Reject unknown IANA zone names at startup."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {v!r}")
        return v

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


# Global settings instance
settings = Settings()
