"""
Tests for activity ingestion.

Covers the pure normalization helpers and the replace-then-recompute
cycle against a real (SQLite) session.
"""

import asyncio
from datetime import date, datetime, timezone

import pytest

from challenge.features.activities import (
    ActivityIngestionService,
    ActivityRepository,
    compute_totals,
    normalize_activity,
    normalize_batch,
)
from challenge.features.activities.ingestion import ride_speed, run_pace
from challenge.features.users import UserRepository
from challenge.shared.constants import ActivityType
from challenge.shared.locks import KeyedLock


NOW = datetime(2024, 5, 10, 18, 0, tzinfo=timezone.utc)


def service(db, **kwargs):
    kwargs.setdefault("locks", KeyedLock())
    kwargs.setdefault("clock", lambda: NOW)
    return ActivityIngestionService(db, **kwargs)


# =============================================================================
# Normalization
# =============================================================================

class TestNormalizeActivity:
    """Tests for normalize_activity function."""

    def test_run(self, make_raw):
        """10 km in 50 minutes: pace 5 min/km, 20 points."""
        item = normalize_activity(make_raw(1, "Run", distance=10000, moving_time=3000))

        assert item.type is ActivityType.RUN
        assert item.distance == pytest.approx(10.0)
        assert item.pace == pytest.approx(5.0)
        assert item.speed == 0.0
        assert item.points == pytest.approx(20.0)

    def test_ride(self, make_raw):
        """20 km in one hour: 20 km/h, 20 points."""
        item = normalize_activity(make_raw(2, "Ride", distance=20000, moving_time=3600))

        assert item.type is ActivityType.RIDE
        assert item.distance == pytest.approx(20.0)
        assert item.speed == pytest.approx(20.0)
        assert item.pace == 0.0
        assert item.points == pytest.approx(20.0)

    def test_unsupported_type(self, make_raw):
        assert normalize_activity(make_raw(3, "Swim")) is None
        assert normalize_activity(make_raw(4, "VirtualRide")) is None

    def test_provider_id_is_string(self, make_raw):
        assert normalize_activity(make_raw(123456789)).provider_id == "123456789"

    def test_date_stored_naive_utc(self, make_raw):
        start = datetime.fromisoformat("2024-05-10T09:00:00+05:00")
        item = normalize_activity(make_raw(5, start_date=start))
        assert item.date == datetime(2024, 5, 10, 4, 0)
        assert item.date.tzinfo is None

    def test_zero_distance_run(self, make_raw):
        item = normalize_activity(make_raw(6, "Run", distance=0, moving_time=600))
        assert item.pace == 0.0
        assert item.points == 0.0

    def test_zero_time_ride(self, make_raw):
        item = normalize_activity(make_raw(7, "Ride", distance=5000, moving_time=0))
        assert item.speed == 0.0
        assert item.distance == pytest.approx(5.0)


class TestDerivedMetrics:
    """Tests for run_pace / ride_speed guards."""

    def test_run_pace(self):
        assert run_pace(5.0, 1500) == pytest.approx(5.0)

    def test_run_pace_zero_distance(self):
        assert run_pace(0.0, 1500) == 0.0

    def test_ride_speed(self):
        assert ride_speed(30.0, 5400) == pytest.approx(20.0)

    def test_ride_speed_guards(self):
        assert ride_speed(0.0, 3600) == 0.0
        assert ride_speed(10.0, 0) == 0.0


class TestNormalizeBatch:
    """Tests for normalize_batch and compute_totals."""

    def test_drops_unsupported(self, make_raw):
        batch = [make_raw(1, "Run"), make_raw(2, "Swim"), make_raw(3, "Ride"), make_raw(4, "Walk")]
        result = normalize_batch(batch)
        assert [a.provider_id for a in result] == ["1", "3"]

    def test_totals_fold(self, make_raw):
        batch = normalize_batch([
            make_raw(1, "Run", distance=5000),
            make_raw(2, "Run", distance=3000),
            make_raw(3, "Ride", distance=40000, moving_time=5400),
        ])
        stored = [type("Row", (), {"type": a.type.value, "distance": a.distance})() for a in batch]

        totals = compute_totals(stored)

        assert totals.run_distance == pytest.approx(8.0)
        assert totals.ride_distance == pytest.approx(40.0)
        assert totals.points == pytest.approx(2 * 8.0 + 40.0)

    def test_totals_empty(self):
        totals = compute_totals([])
        assert (totals.points, totals.run_distance, totals.ride_distance) == (0.0, 0.0, 0.0)


# =============================================================================
# Ingestion cycle
# =============================================================================

async def _user(db, provider_id="1001"):
    user, _ = await UserRepository(db).upsert(provider_id, "Aida", "combined")
    await db.commit()
    return user


class TestActivityIngestionService:
    """Tests for ActivityIngestionService.ingest."""

    @pytest.mark.asyncio
    async def test_replaces_and_recomputes(self, db, make_raw):
        user = await _user(db)
        batch = [
            make_raw(1, "Run", distance=10000, moving_time=3000,
                     start_date=datetime(2024, 5, 10, 7, tzinfo=timezone.utc)),
            make_raw(2, "Ride", distance=20000, moving_time=3600,
                     start_date=datetime(2024, 5, 9, 7, tzinfo=timezone.utc)),
            make_raw(3, "Swim", distance=1500, moving_time=1800),
        ]

        result = await service(db).ingest(user, batch)

        assert result.dropped == 1
        assert len(result.activities) == 2
        assert user.points == pytest.approx(40.0)
        assert user.run_distance == pytest.approx(10.0)
        assert user.ride_distance == pytest.approx(20.0)
        assert user.streak == 2

        stored = await ActivityRepository(db).get_for_user(user.id)
        assert sorted(a.provider_id for a in stored) == ["1", "2"]
        assert all(a.high_fives == 0 for a in stored)

    @pytest.mark.asyncio
    async def test_idempotent(self, db, make_raw):
        user = await _user(db)
        batch = [make_raw(1, "Run"), make_raw(2, "Ride", distance=15000, moving_time=2700)]
        svc = service(db)

        await svc.ingest(user, batch)
        first = (user.points, user.run_distance, user.ride_distance, user.streak)
        await svc.ingest(user, batch)
        second = (user.points, user.run_distance, user.ride_distance, user.streak)

        assert first == second
        assert await ActivityRepository(db).count(user_id=user.id) == 2

    @pytest.mark.asyncio
    async def test_empty_batch_wipes(self, db, make_raw):
        user = await _user(db)
        svc = service(db)
        await svc.ingest(user, [make_raw(1, "Run")])

        await svc.ingest(user, [])

        assert await ActivityRepository(db).count(user_id=user.id) == 0
        assert (user.points, user.run_distance, user.ride_distance, user.streak) == (0.0, 0.0, 0.0, 0)

    @pytest.mark.asyncio
    async def test_other_users_untouched(self, db, make_raw):
        alice = await _user(db, "1")
        bob = await _user(db, "2")
        svc = service(db)
        await svc.ingest(bob, [make_raw(10, "Ride")])

        await svc.ingest(alice, [make_raw(11, "Run")])
        await svc.ingest(alice, [])

        assert await ActivityRepository(db).count(user_id=bob.id) == 1

    @pytest.mark.asyncio
    async def test_high_fives_reset_by_default(self, db, make_raw):
        user = await _user(db)
        svc = service(db, preserve_high_fives=False)
        result = await svc.ingest(user, [make_raw(1, "Run")])
        await ActivityRepository(db).increment_high_fives(result.activities[0].id)
        await db.commit()

        await svc.ingest(user, [make_raw(1, "Run")])

        stored = await ActivityRepository(db).get_for_user(user.id)
        assert stored[0].high_fives == 0

    @pytest.mark.asyncio
    async def test_high_fives_carried_when_enabled(self, db, make_raw):
        user = await _user(db)
        svc = service(db, preserve_high_fives=True)
        result = await svc.ingest(user, [make_raw(1, "Run"), make_raw(2, "Run")])
        repo = ActivityRepository(db)
        by_provider = {a.provider_id: a.id for a in result.activities}
        await repo.increment_high_fives(by_provider["1"])
        await repo.increment_high_fives(by_provider["1"])
        await db.commit()

        await svc.ingest(user, [make_raw(1, "Run"), make_raw(2, "Run")])

        stored = {a.provider_id: a.high_fives for a in await repo.get_for_user(user.id)}
        assert stored == {"1": 2, "2": 0}

    @pytest.mark.asyncio
    async def test_streak_uses_clock_and_zone(self, db, make_raw):
        user = await _user(db)
        late = datetime(2024, 5, 9, 20, 0, tzinfo=timezone.utc)
        svc = service(db, tz="Asia/Tokyo", clock=lambda: datetime(2024, 5, 10, 1, tzinfo=timezone.utc))

        await svc.ingest(user, [make_raw(1, "Run", start_date=late)])

        # 20:00 UTC on the 9th is the morning of the 10th in Tokyo
        assert user.streak == 1

    @pytest.mark.asyncio
    async def test_concurrent_cycles_serialize(self, db, make_raw):
        user = await _user(db)
        locks = KeyedLock()
        svc = service(db, locks=locks)

        async with locks.hold(user.id):
            task = asyncio.create_task(svc.ingest(user, [make_raw(1, "Run")]))
            await asyncio.sleep(0.05)
            assert not task.done()

        await task
        assert await ActivityRepository(db).count(user_id=user.id) == 1
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_failure_rolls_back(self, db, make_raw, monkeypatch):
        user = await _user(db)
        user_id = user.id
        svc = service(db)
        await svc.ingest(user, [make_raw(1, "Run")])

        async def boom(activities):
            raise RuntimeError("insert failed")

        monkeypatch.setattr(svc.repo, "add_all", boom)
        with pytest.raises(RuntimeError):
            await svc.ingest(user, [make_raw(2, "Ride")])

        stored = await ActivityRepository(db).get_for_user(user_id)
        assert [a.provider_id for a in stored] == ["1"]

    @pytest.mark.asyncio
    async def test_user_usable_after_failed_cycle(self, db, make_raw, monkeypatch):
        """A failed cycle leaves the caller's user loaded with its previous stats."""
        user = await _user(db)
        svc = service(db)
        await svc.ingest(user, [make_raw(1, "Run", distance=10000)])

        async def boom(activities):
            raise RuntimeError("insert failed")

        monkeypatch.setattr(svc.repo, "add_all", boom)
        with pytest.raises(RuntimeError):
            await svc.ingest(user, [make_raw(2, "Ride", distance=50000)])

        assert user.points == pytest.approx(20.0)
        assert user.run_distance == pytest.approx(10.0)
        assert user.ride_distance == 0.0
        assert user.streak == 1
