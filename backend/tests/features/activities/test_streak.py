"""
Tests for streak calculation.
"""

from datetime import date, datetime, timedelta, timezone

from challenge.features.activities.streak import calculate_streak, to_calendar_day


TODAY = date(2024, 5, 10)


def days_back(*offsets):
    """Noon UTC timestamps ``offset`` days before TODAY."""
    return [
        datetime(TODAY.year, TODAY.month, TODAY.day, 12, tzinfo=timezone.utc) - timedelta(days=o)
        for o in offsets
    ]


# =============================================================================
# Test calculate_streak
# =============================================================================

class TestCalculateStreak:
    """Tests for calculate_streak function."""

    def test_empty(self):
        assert calculate_streak([], today=TODAY) == 0

    def test_only_today(self):
        assert calculate_streak(days_back(0), today=TODAY) == 1

    def test_no_activity_today(self):
        """Yesterday alone does not count, the streak must end today."""
        assert calculate_streak(days_back(1, 2, 3), today=TODAY) == 0

    def test_consecutive_days(self):
        assert calculate_streak(days_back(0, 1, 2), today=TODAY) == 3

    def test_gap_stops_walk(self):
        assert calculate_streak(days_back(0, 1, 3, 4), today=TODAY) == 2

    def test_several_activities_same_day(self):
        dates = days_back(0, 0, 1) + [datetime(2024, 5, 9, 6, tzinfo=timezone.utc)]
        assert calculate_streak(dates, today=TODAY) == 2

    def test_lookback_cap(self):
        """Forty active days in a row give 31: today plus 30 steps back."""
        assert calculate_streak(days_back(*range(40)), today=TODAY) == 31

    def test_custom_lookback(self):
        assert calculate_streak(days_back(*range(10)), today=TODAY, lookback_days=3) == 4

    def test_naive_dates_are_utc(self):
        dates = [datetime(2024, 5, 10, 23, 30), datetime(2024, 5, 9, 0, 15)]
        assert calculate_streak(dates, today=TODAY) == 2

    def test_plain_dates(self):
        assert calculate_streak([date(2024, 5, 10), date(2024, 5, 9)], today=TODAY) == 2

    def test_timezone_shifts_day(self):
        """23:30 UTC on the 9th is already the 10th in Almaty (UTC+5)."""
        dates = [datetime(2024, 5, 9, 23, 30, tzinfo=timezone.utc)]
        assert calculate_streak(dates, today=TODAY, tz="UTC") == 0
        assert calculate_streak(dates, today=TODAY, tz="Asia/Almaty") == 1


class TestToCalendarDay:
    """Tests for to_calendar_day function."""

    def test_aware_datetime(self):
        value = datetime(2024, 5, 9, 22, 0, tzinfo=timezone.utc)
        assert to_calendar_day(value) == date(2024, 5, 9)
        assert to_calendar_day(value, "Asia/Tokyo") == date(2024, 5, 10)

    def test_date_passthrough(self):
        assert to_calendar_day(date(2024, 1, 1), "Asia/Tokyo") == date(2024, 1, 1)
