"""
Activities module.

Usage:
    from challenge.features.activities import ActivityIngestionService, calculate_streak

Components:
- ActivityIngestionService: replace-then-recompute cycle per user
- calculate_streak: consecutive-day streak over activity dates
"""

from .models import Activity
from .repository import ActivityRepository
from .streak import calculate_streak, to_calendar_day
from .ingestion import (
    ActivityIngestionService,
    IngestionResult,
    NormalizedActivity,
    Totals,
    activity_points,
    compute_totals,
    ingestion_locks,
    normalize_activity,
    normalize_batch,
)

__all__ = [
    "Activity",
    "ActivityRepository",
    "calculate_streak",
    "to_calendar_day",
    "ActivityIngestionService",
    "IngestionResult",
    "NormalizedActivity",
    "Totals",
    "activity_points",
    "compute_totals",
    "ingestion_locks",
    "normalize_activity",
    "normalize_batch",
]
