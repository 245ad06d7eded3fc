"""
Global pytest fixtures.

No test touches a live Postgres: `database_session` is overridden with a
stand-in session object, and feature services are swapped for versions backed
by in-memory repositories.
"""

import pytest  # type: ignore[import-not-found]
from fastapi import FastAPI
from fastapi.testclient import TestClient

from roopsnap.api.main import build_app
from roopsnap.commons.depends import database_session
from roopsnap.core.settings import settings


class FakeDbSession:
    """Enough of AsyncSession for services that only commit/rollback."""

    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1

    async def close(self) -> None:
        return None


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch: pytest.MonkeyPatch) -> None:
    """Cheap bcrypt cost for tests; production default stays at 10."""
    monkeypatch.setattr(settings, "AUTH_BCRYPT_ROUNDS", 4)


@pytest.fixture()
def db_session() -> FakeDbSession:
    return FakeDbSession()


@pytest.fixture()
def app(db_session: FakeDbSession) -> FastAPI:
    app = build_app()

    async def _fake_database_session():  # type: ignore[no-untyped-def]
        yield db_session

    app.dependency_overrides[database_session] = _fake_database_session
    return app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    """Sync test client; lifespan (bootstrap, DB) is not started."""
    return TestClient(app)


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Default AnyIO backend for async tests."""
    return "asyncio"
