"""
Database Models

Base lives here; feature models are imported lazily to avoid circular
imports (feature models import Base from this package).
Use direct imports from features/ modules when possible.
"""

from challenge.models.base import Base


def load_all_models():
    """Import every feature model so Base.metadata and relationships are complete."""
    from challenge.features.users.models import User
    from challenge.features.strava.models import StravaToken
    from challenge.features.activities.models import Activity
    return User, StravaToken, Activity


def __getattr__(name):
    models = dict(zip(("User", "StravaToken", "Activity"), load_all_models()))
    if name in models:
        return models[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Base",
    "User",
    "StravaToken",
    "Activity",
    "load_all_models",
]
