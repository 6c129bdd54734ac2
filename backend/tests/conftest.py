"""
Pytest configuration.

Provides a fresh SQLite database per test, the store / activity log built on
it, fake facet sources and a stub transport for the upstream HTTP services.
"""

import asyncio
import os
from typing import Any, Callable

# Must be set before app.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.models.base import Base
from app.models.activity import Activity  # noqa: F401
from app.models.user_snapshot import UserSnapshot  # noqa: F401
from app.services.activity_log import SqlActivityLog
from app.services.facets import Facet
from app.services.snapshot_store import SnapshotStore


# ==================== Database Fixtures ====================

@pytest.fixture
async def db_engine(tmp_path):
    """
    File-backed SQLite engine, one database per test.
    A file (not :memory:) so that concurrent sessions see the same data.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'dashboard.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def store(session_factory) -> SnapshotStore:
    return SnapshotStore(session_factory)


@pytest.fixture
def activity_log(session_factory) -> SqlActivityLog:
    return SqlActivityLog(session_factory)


# ==================== Fake Facet Sources ====================

HANG = object()


def fake_source(outcome: Any):
    """
    Build a ``fetch(user_id)`` coroutine function.

    outcome: an int to return, an exception to raise, or HANG to never finish.
    """
    async def fetch(user_id):
        if outcome is HANG:
            await asyncio.sleep(3600)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome
    return fetch


@pytest.fixture
def hang():
    """Outcome for make_sources: the source never answers."""
    return HANG


@pytest.fixture
def make_sources() -> Callable[..., dict[Facet, Callable]]:
    """Factory: make_sources(matches=5, milestones=RuntimeError(...), ...)."""
    def _make(**outcomes: Any) -> dict[Facet, Callable]:
        return {Facet(name): fake_source(outcome) for name, outcome in outcomes.items()}
    return _make


STARTUP_VALUES = {
    "profile_completion": 80,
    "generated_content": 3,
    "matches": 5,
    "active_relationships": 2,
    "milestones": 1,
}


@pytest.fixture
def startup_values() -> dict[str, int]:
    return dict(STARTUP_VALUES)


# ==================== Upstream HTTP Stubs ====================

@pytest.fixture
def make_transport() -> Callable[[dict[str, Any]], httpx.MockTransport]:
    """
    Factory for an httpx.MockTransport serving canned upstream responses.

    routes maps a URL path to one of:
        - an int: respond with that status and no body
        - an Exception instance: raise it (transport-level failure)
        - None: respond 200 with a literal JSON null body
        - anything else: respond 200 with it as the JSON body
    Unknown paths answer 404. Requests are recorded on transport.requests.
    """
    def _make(routes: dict[str, Any]) -> httpx.MockTransport:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.path not in routes:
                return httpx.Response(404)
            outcome = routes[request.url.path]
            if isinstance(outcome, Exception):
                raise outcome
            if isinstance(outcome, int) and not isinstance(outcome, bool):
                return httpx.Response(outcome)
            if outcome is None:
                # json=None would send an empty body, not a JSON null
                return httpx.Response(200, content=b"null", headers={"content-type": "application/json"})
            return httpx.Response(200, json=outcome)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport
    return _make


STARTUP_USER_ID = "6f1c2a4e-8a51-4b7e-9a0e-3c2f5d9b7a10"


@pytest.fixture
def upstream_routes() -> dict[str, Any]:
    """Canned upstream answers for a STARTUP user with snapshot {80, 3, 5, 2, 1}."""
    return {
        "/api/users/me": {"id": STARTUP_USER_ID, "role": "STARTUP", "email": "founder@acme.io"},
        "/api/startups/me": {"id": "c0ffee00-0000-4000-8000-000000000001", "profileCompletion": 80, "milestonesCount": 1},
        "/api/pitchs/me": [{"id": 1}, {"id": 2}, {"id": 3}],
        "/api/matching/for-me": [{"investorId": n, "score": 0.9} for n in range(5)],
        "/api/connections/active": [{"id": "a"}, {"id": "b"}],
    }


# ==================== Pytest Configuration ====================

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
