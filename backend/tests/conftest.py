"""
Shared test fixtures.

Every test gets its own SQLite file database; Strava is replaced by an
httpx.MockTransport so nothing leaves the process.
"""

import asyncio
import os
import tempfile
from datetime import datetime, timezone
from urllib.parse import parse_qs

# Settings are read at import time
os.environ.setdefault(
    "DATABASE_URL", f"sqlite:///{os.path.join(tempfile.gettempdir(), 'challenge-test.db')}"
)
os.environ.setdefault("STRAVA_CLIENT_ID", "test-client")
os.environ.setdefault("STRAVA_CLIENT_SECRET", "test-secret")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from challenge.db.session import init_db
from challenge.features.strava import RawActivity, StravaClient
from challenge.models import load_all_models

load_all_models()


# =============================================================================
# Helpers
# =============================================================================

def raw_activity(
    id,
    type="Run",
    distance=10000.0,
    moving_time=3000,
    start_date=datetime(2024, 5, 10, 7, 30, tzinfo=timezone.utc),
    name=None,
    **extra,
) -> RawActivity:
    """Build a Strava summary activity (distance in meters)."""
    return RawActivity.model_validate({
        "id": id,
        "type": type,
        "distance": distance,
        "moving_time": moving_time,
        "start_date": start_date,
        "name": name or f"{type} {id}",
        **extra,
    })


class FakeStrava:
    """
    Minimal in-process Strava.

    Token endpoint answers both grants, the API answers /athlete and
    /athlete/activities. Every request is recorded in ``requests``.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.athlete_id = 4242
        self.activities: list[dict] = []
        self.token_status = 200
        self.api_status = 200
        self.issued = 0

    def _tokens(self) -> dict:
        self.issued += 1
        return {
            "token_type": "Bearer",
            "access_token": f"access-{self.issued}",
            "refresh_token": f"refresh-{self.issued}",
            "expires_at": 4102444800,  # 2100-01-01
            "athlete": {"id": self.athlete_id, "firstname": "Test"},
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/oauth/token":
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"message": "Bad Request"})
            form = parse_qs(request.content.decode())
            if form.get("grant_type") == ["refresh_token"]:
                return httpx.Response(200, json={k: v for k, v in self._tokens().items() if k != "athlete"})
            return httpx.Response(200, json=self._tokens())

        if self.api_status != 200:
            return httpx.Response(self.api_status, json={"message": "Authorization Error"})
        if path == "/api/v3/athlete":
            return httpx.Response(200, json={"id": self.athlete_id, "firstname": "Test"})
        if path == "/api/v3/athlete/activities":
            return httpx.Response(200, json=self.activities)

        return httpx.Response(404, json={"message": "Record Not Found"})

    def client(self) -> StravaClient:
        return StravaClient(transport=httpx.MockTransport(self.handler))


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_strava():
    return FakeStrava()


@pytest_asyncio.fixture
async def db(tmp_path):
    """Async session on a fresh database, for service-level tests."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool
    )
    await init_db(engine)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def session_factory(tmp_path):
    """Session factory on a fresh database, for sync (TestClient) tests."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'api.db'}", poolclass=NullPool
    )
    asyncio.run(init_db(engine))
    yield async_sessionmaker(engine, expire_on_commit=False)
    asyncio.run(engine.dispose())


@pytest.fixture
def make_raw():
    return raw_activity
