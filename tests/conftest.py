"""Shared fixtures: an app over a temp-file SQLite database and temp blob storage."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from agent_portal.core.config import Settings
from agent_portal.db.base import Database
from agent_portal.main import create_app
from agent_portal.services.storage import LocalBlobStorage
from tests.helpers import ADMIN_PASSWORD, AGENT_PASSCODE, login_admin


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        app_env="test",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        STORAGE_DIR=str(tmp_path / "storage"),
        SESSION_SECRET="test-session-secret",
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        AGENT_PASSCODE=AGENT_PASSCODE,
    )


@pytest.fixture
async def database(settings: Settings):
    db = Database(settings.database_url)
    await db.init_schema()
    yield db
    await db.dispose()


@pytest.fixture
def storage(settings: Settings) -> LocalBlobStorage:
    return LocalBlobStorage.from_settings(settings)


@pytest.fixture
def app(settings: Settings, database: Database, storage: LocalBlobStorage):
    return create_app(settings, database=database, storage=storage)


@pytest.fixture
async def client_factory(app):
    """Build independent clients (one cookie jar each) against the same app."""
    clients: list[httpx.AsyncClient] = []

    def _make() -> httpx.AsyncClient:
        c = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://testserver"
        )
        clients.append(c)
        return c

    yield _make
    for c in clients:
        await c.aclose()


@pytest.fixture
def client(client_factory) -> httpx.AsyncClient:
    return client_factory()


@pytest.fixture
async def admin_client(client_factory) -> httpx.AsyncClient:
    c = client_factory()
    await login_admin(c)
    return c
