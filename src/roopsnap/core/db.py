"""
Async SQLAlchemy engine and sessions.

One process-wide `DatabaseManager` is created lazily on first use; request
handlers get sessions through `roopsnap.commons.depends.database_session`.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import (  # type: ignore[import-not-found]
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from roopsnap.commons.exceptions import BaseCoreException
from roopsnap.commons.logging import logger
from roopsnap.core.settings import settings


class DatabaseException(BaseCoreException):
    pass


class DatabaseManager:
    def __init__(self, url: str | None = None) -> None:
        self.url = url
        self.engine: AsyncEngine | None = None
        self.sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_initialized(self) -> bool:
        return self.engine is not None

    def _engine_kwargs(self) -> dict:
        return {
            "echo": bool(settings.DATABASE_ECHO),
            "pool_pre_ping": True,
            "pool_size": int(settings.DATABASE_POOL_SIZE),
        }

    async def initialize(self) -> None:
        if self.is_initialized:
            return
        url = self.url or settings.DATABASE_URL
        try:
            self.engine = create_async_engine(url, **self._engine_kwargs())
        except (sa.exc.ArgumentError, ImportError) as exc:
            raise DatabaseException("Failed to initialize database", str(exc)) from exc
        self.sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)
        logger.info("Database engine created for %s", self.engine.url.render_as_string())

    async def shutdown(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.sessionmaker = None
        logger.info("Database engine disposed")

    async def ping(self) -> None:
        """Round-trip `SELECT 1`; raises whatever the driver raises."""
        await self.initialize()
        async with self.session() as session:
            await session.execute(sa.text("SELECT 1"))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self.sessionmaker is None:
            raise DatabaseException("Database is not initialized")
        async with self.sessionmaker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise


database_manager = DatabaseManager()
