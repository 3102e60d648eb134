"""
Activity ingestion.

Turns a raw Strava batch into the user's stored activity set and derived
stats:

1. Keep only Run and Ride; everything else is dropped silently.
2. Convert meters to km and derive pace (runs) or speed (rides).
3. Delete every stored activity of the user and insert the new set.
4. Fold points, run and ride distance over the new set and compute the
   streak over the same dates.
5. Save the user.

Steps 3-5 run under a per-user lock and are committed together, so two
concurrent cycles for one user cannot interleave.

An empty batch wipes the user's activities and zeroes their stats.
High-five counters start at zero on every cycle unless
``preserve_high_fives`` is enabled, in which case they are carried over by
Strava activity id.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from challenge.config import settings
from challenge.features.strava.schemas import RawActivity
from challenge.features.users.models import User
from challenge.shared.constants import (
    METERS_PER_KM,
    POINTS_PER_KM,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    STRAVA_TO_ACTIVITY_TYPE,
    ActivityType,
)
from challenge.shared.locks import KeyedLock

from .models import Activity
from .repository import ActivityRepository
from .streak import calculate_streak, to_calendar_day

logger = logging.getLogger(__name__)

# Process-wide: one ingestion at a time per user id
ingestion_locks = KeyedLock()


# =============================================================================
# Pure calculations
# =============================================================================

@dataclass(frozen=True)
class NormalizedActivity:
    """A supported Strava activity converted to our units."""

    provider_id: str
    type: ActivityType
    name: Optional[str]
    date: datetime  # naive UTC
    distance: float  # km
    pace: float  # min/km
    speed: float  # km/h

    @property
    def points(self) -> float:
        return activity_points(self.type, self.distance)


class _Scorable(Protocol):
    type: str
    distance: float


@dataclass(frozen=True)
class Totals:
    """Aggregates derived from one activity set."""

    points: float = 0.0
    run_distance: float = 0.0
    ride_distance: float = 0.0


def activity_points(activity_type: str, distance_km: float) -> float:
    """Points for one activity: 2 per km running, 1 per km riding."""
    return distance_km * POINTS_PER_KM[ActivityType(activity_type)]


def run_pace(distance_km: float, moving_time_s: int) -> float:
    """Minutes per km; 0 when there is no distance."""
    if distance_km <= 0:
        return 0.0
    return (moving_time_s / SECONDS_PER_MINUTE) / distance_km


def ride_speed(distance_km: float, moving_time_s: int) -> float:
    """Km per hour; 0 when there is no distance or no moving time."""
    if distance_km <= 0 or moving_time_s <= 0:
        return 0.0
    return distance_km / (moving_time_s / SECONDS_PER_HOUR)


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def normalize_activity(raw: RawActivity) -> Optional[NormalizedActivity]:
    """
    Convert one Strava activity, or return None if its type is not scored.
    """
    activity_type = STRAVA_TO_ACTIVITY_TYPE.get(raw.type)
    if activity_type is None:
        return None

    distance_km = raw.distance / METERS_PER_KM
    if activity_type is ActivityType.RUN:
        pace, speed = run_pace(distance_km, raw.moving_time), 0.0
    else:
        pace, speed = 0.0, ride_speed(distance_km, raw.moving_time)

    return NormalizedActivity(
        provider_id=str(raw.id),
        type=activity_type,
        name=raw.name,
        date=_naive_utc(raw.start_date),
        distance=distance_km,
        pace=pace,
        speed=speed,
    )


def normalize_batch(raw_activities: Iterable[RawActivity]) -> list[NormalizedActivity]:
    """Normalize a batch, dropping unsupported activity types."""
    normalized = []
    for raw in raw_activities:
        item = normalize_activity(raw)
        if item is None:
            logger.debug(f"Skipping Strava activity {raw.id} of type {raw.type!r}")
            continue
        normalized.append(item)
    return normalized


def compute_totals(activities: Iterable[_Scorable]) -> Totals:
    """Full fold of points and per-type distance over an activity set."""
    points = run_distance = ride_distance = 0.0
    for activity in activities:
        points += activity_points(activity.type, activity.distance)
        if activity.type == ActivityType.RUN.value:
            run_distance += activity.distance
        else:
            ride_distance += activity.distance
    return Totals(points=points, run_distance=run_distance, ride_distance=ride_distance)


# =============================================================================
# Service
# =============================================================================

@dataclass
class IngestionResult:
    user: User
    activities: list[Activity]
    dropped: int = 0


class ActivityIngestionService:
    """
    Replaces a user's activities with a fresh Strava batch and recomputes stats.

    Usage:
        service = ActivityIngestionService(db)
        result = await service.ingest(user, raw_activities)
    """

    def __init__(
        self,
        db: AsyncSession,
        locks: KeyedLock = ingestion_locks,
        tz: Optional[str] = None,
        lookback_days: Optional[int] = None,
        preserve_high_fives: Optional[bool] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.db = db
        self.repo = ActivityRepository(db)
        self.locks = locks
        self.tz = tz or settings.streak_timezone
        self.lookback_days = (
            settings.streak_lookback_days if lookback_days is None else lookback_days
        )
        self.preserve_high_fives = (
            settings.preserve_high_fives if preserve_high_fives is None
            else preserve_high_fives
        )
        self.clock = clock

    def _today(self):
        return to_calendar_day(self.clock(), self.tz)

    async def ingest(
        self,
        user: User,
        raw_activities: Iterable[RawActivity],
    ) -> IngestionResult:
        """
        Run one replace-then-recompute cycle for the user and commit it.

        Returns:
            IngestionResult with the updated user and the stored activities
        """
        raw_activities = list(raw_activities)
        normalized = normalize_batch(raw_activities)

        async with self.locks.hold(user.id):
            try:
                result = await self._replace(user, normalized)
                await self.db.commit()
            except Exception:
                await self.db.rollback()
                # Rollback expires the user; reload its pre-cycle state
                await self.db.refresh(user)
                raise

        result.dropped = len(raw_activities) - len(normalized)
        logger.info(
            f"Ingested {len(result.activities)} activities for user {user.id} "
            f"(dropped {result.dropped}): points={user.points:.1f} streak={user.streak}"
        )
        return result

    async def _replace(
        self,
        user: User,
        normalized: list[NormalizedActivity],
    ) -> IngestionResult:
        carried: dict[str, int] = {}
        if self.preserve_high_fives:
            carried = await self.repo.high_fives_by_provider_id(user.id)

        deleted = await self.repo.delete_for_user(user.id)
        logger.debug(f"Deleted {deleted} stored activities for user {user.id}")

        activities = [
            Activity(
                user_id=user.id,
                provider_id=item.provider_id,
                type=item.type.value,
                name=item.name,
                date=item.date,
                distance=item.distance,
                pace=item.pace,
                speed=item.speed,
                high_fives=carried.get(item.provider_id, 0),
            )
            for item in normalized
        ]
        await self.repo.add_all(activities)

        totals = compute_totals(activities)
        user.points = totals.points
        user.run_distance = totals.run_distance
        user.ride_distance = totals.ride_distance
        user.streak = calculate_streak(
            [a.date for a in activities],
            today=self._today(),
            tz=self.tz,
            lookback_days=self.lookback_days,
        )
        await self.db.flush()

        return IngestionResult(user=user, activities=activities)
