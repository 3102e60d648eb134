"""
Leaderboard and activity feed projections.
"""

from .projector import (
    external_id,
    parse_external_id,
    project_activity,
    project_feed,
    project_participants,
    project_user,
)

__all__ = [
    "external_id",
    "parse_external_id",
    "project_activity",
    "project_feed",
    "project_participants",
    "project_user",
]
