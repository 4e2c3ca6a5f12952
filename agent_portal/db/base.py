"""Async SQLAlchemy database handle, declarative Base, and FastAPI dependency."""


import logging
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Declarative Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """All ORM models inherit from this base."""

# ---------------------------------------------------------------------------
# Database handle
# ---------------------------------------------------------------------------
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE clauses unless foreign keys are switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

class Database:
    """Engine + session factory, constructed once at startup and injected.

    ``init_schema`` is idempotent (CREATE TABLE IF NOT EXISTS semantics) and is
    called exactly once from the application lifespan.
    """

    def __init__(self, url: str, *, echo: bool = False):
        engine_kwargs: dict = {"pool_pre_ping": True, "echo": echo}

        # SQLite (local dev) doesn't support connection pooling parameters
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}

        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
            autocommit=False,
        )

    async def init_schema(self) -> None:
        # Load all ORM models so their tables are registered on Base.metadata
        import agent_portal.domain  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready (%s)", self.engine.url.render_as_string(hide_password=True))

    async def dispose(self) -> None:
        await self.engine.dispose()

# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------
def get_database(request: Request) -> Database:
    return request.app.state.database

async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session; roll back on error."""
    async with get_database(request).session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
