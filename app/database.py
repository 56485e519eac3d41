"""Async database engine and session management.

Uses SQLAlchemy 2.0 async with asyncpg driver (aiosqlite in tests).
The Database object is created once per process, initialized on startup,
disposed on shutdown and handed to every cache controller.
Graceful degradation: if PostgreSQL is unavailable at startup, the app keeps
serving and pool pre-ping reconnects on the next request.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config import settings
from app.exceptions import StoreError

logger = logging.getLogger(__name__)


class Database:
    """Owns the engine and session factory for one database URL."""

    def __init__(self, url: str):
        self.url = url
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self.available = False

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(self.url, echo=False, **self._engine_options())
            self._session_factory = async_sessionmaker(
                self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._engine

    def _engine_options(self) -> dict:
        if self.url.startswith("sqlite"):
            return {}
        return {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_pre_ping": True,
        }

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a fresh session bound to this database."""
        if self._session_factory is None:
            _ = self.engine
        async with self._session_factory() as session:
            yield session

    async def init(self) -> bool:
        """Create tables if they don't exist. Returns True on success."""
        from app.models import Base

        attempts = max(settings.db_connect_attempts, 1)
        for attempt in range(1, attempts + 1):
            try:
                async with self.engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
                logger.info("Database initialized successfully")
                self.available = True
                return True
            except (SQLAlchemyError, OSError) as e:
                logger.warning(
                    "Database unavailable | attempt=%d/%d | %s",
                    attempt, attempts, str(e)[:200],
                )
                if attempt < attempts:
                    await asyncio.sleep(settings.db_connect_retry_seconds)
        self.available = False
        return False

    async def dispose(self):
        """Dispose engine connections on shutdown."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
        self.available = False
        logger.info("Database connections closed")


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Log store failures (SQLAlchemy errors, refused connections) and re-raise them as StoreError."""
    try:
        yield
    except (SQLAlchemyError, OSError) as e:
        logger.error("Store error | op=%s | %s", operation, str(e)[:200])
        raise StoreError(f"{operation} failed") from e


database = Database(settings.database_url)
