"""
Unified constants for activity types, roles and scoring.

Single source of truth for mapping Strava activity naming onto ours.
"""

from enum import Enum


class ActivityType(str, Enum):
    """Activity types we store and score."""
    RUN = "run"
    RIDE = "ride"


class StravaActivityType(str, Enum):
    """
    Activity types from Strava API that we ingest.

    These are Strava's naming conventions, not ours.
    Anything else Strava returns is dropped during ingestion.
    """
    RUN = "Run"
    RIDE = "Ride"


class UserRole(str, Enum):
    """Challenge category a participant signed up for."""
    RUNNER = "runner"
    CYCLIST = "cyclist"
    COMBINED = "combined"


# Mapping: Strava type -> our ActivityType
STRAVA_TO_ACTIVITY_TYPE: dict[str, ActivityType] = {
    StravaActivityType.RUN.value: ActivityType.RUN,
    StravaActivityType.RIDE.value: ActivityType.RIDE,
}

# Points awarded per kilometre
POINTS_PER_KM: dict[ActivityType, float] = {
    ActivityType.RUN: 2.0,
    ActivityType.RIDE: 1.0,
}

METERS_PER_KM = 1000
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
