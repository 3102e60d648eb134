"""
Leaderboard and feed projections.

Pure transforms from stored rows to the JSON shapes the frontend reads.
Stored ids never leave the backend bare: users are exposed as
``<namespace>-<strava athlete id>`` and activities as
``<namespace>-<activity id>``.
"""

from typing import Any, Iterable, Optional

from challenge.config import settings
from challenge.features.activities.models import Activity
from challenge.features.users.models import User

# Largest value an INTEGER primary key holds (32-bit on Postgres)
MAX_DB_ID = 2**31 - 1


def external_id(value: Any, namespace: Optional[str] = None) -> str:
    """Prefix a stored id with the public namespace tag."""
    return f"{namespace or settings.id_namespace}-{value}"


def parse_external_id(value: str, namespace: Optional[str] = None) -> Optional[int]:
    """
    Recover an integer id from ``<namespace>-<id>`` or a bare ``<id>``.

    Returns None when the value is neither, or does not fit the
    INTEGER id column.
    """
    prefix = f"{namespace or settings.id_namespace}-"
    if value.startswith(prefix):
        value = value[len(prefix):]
    # isdigit alone also accepts superscripts and other non-ASCII digits
    if not (value.isascii() and value.isdigit()):
        return None
    parsed = int(value)
    return parsed if parsed <= MAX_DB_ID else None


def project_user(user: User, namespace: Optional[str] = None) -> dict[str, Any]:
    """Public participant shape."""
    return {
        "id": external_id(user.provider_id, namespace),
        "providerId": user.provider_id,
        "name": user.name,
        "role": user.role,
        "avatar": user.avatar,
        "points": user.points,
        "runDistance": user.run_distance,
        "rideDistance": user.ride_distance,
        "streak": user.streak,
    }


def project_activity(activity: Activity, namespace: Optional[str] = None) -> dict[str, Any]:
    """Public feed item shape; requires ``activity.user`` to be loaded."""
    return {
        "id": external_id(activity.id, namespace),
        "userId": external_id(activity.user.provider_id, namespace),
        "providerId": activity.provider_id,
        "type": activity.type,
        "name": activity.name,
        "distance": activity.distance,
        "date": activity.date.isoformat() if activity.date else None,
        "pace": activity.pace,
        "speed": activity.speed,
        "highFives": activity.high_fives,
    }


def project_participants(users: Iterable[User], namespace: Optional[str] = None) -> list[dict[str, Any]]:
    """Users by points, highest first; ties keep their input order."""
    ranked = sorted(users, key=lambda u: u.points or 0.0, reverse=True)
    return [project_user(u, namespace) for u in ranked]


def project_feed(activities: Iterable[Activity], namespace: Optional[str] = None) -> list[dict[str, Any]]:
    """Activities by date, newest first."""
    ordered = sorted(activities, key=lambda a: a.date, reverse=True)
    return [project_activity(a, namespace) for a in ordered]
