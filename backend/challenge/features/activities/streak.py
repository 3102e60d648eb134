"""
Streak calculation.

A streak is the number of consecutive calendar days, ending today, with at
least one activity. Days are cut in a single configured time zone; naive
datetimes are read as UTC, which is how activities are stored.

The backward walk is capped at ``lookback_days`` steps (30 by default), so
the result never exceeds lookback_days + 1.
"""

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable, Optional, Union
from zoneinfo import ZoneInfo

DEFAULT_LOOKBACK_DAYS = 30


def _zone(tz: Union[str, tzinfo]) -> tzinfo:
    return ZoneInfo(tz) if isinstance(tz, str) else tz


def to_calendar_day(value: Union[date, datetime], tz: Union[str, tzinfo] = "UTC") -> date:
    """Strip time-of-day from a timestamp in the given zone."""
    if not isinstance(value, datetime):
        return value
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(_zone(tz)).date()


def calculate_streak(
    dates: Iterable[Union[date, datetime]],
    today: Optional[date] = None,
    tz: Union[str, tzinfo] = "UTC",
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> int:
    """
    Count consecutive activity days ending today.

    Args:
        dates: Activity timestamps (or plain dates)
        today: Calendar day to count from; defaults to now in ``tz``
        tz: Zone used to decide which day a timestamp falls on
        lookback_days: Maximum number of days walked back from today

    Returns:
        0 when there is no activity today, otherwise 1 + the number of
        directly preceding active days (at most lookback_days of them)
    """
    zone = _zone(tz)
    active_days = {to_calendar_day(d, zone) for d in dates}
    if today is None:
        today = datetime.now(zone).date()

    if today not in active_days:
        return 0

    streak = 1
    cursor = today
    for _ in range(lookback_days):
        cursor -= timedelta(days=1)
        if cursor not in active_days:
            break
        streak += 1

    return streak
