"""Async database access.

One ``DatabaseSessionManager`` is created when the application starts and
reused for the life of the process. Routes receive a session per request via
the ``get_db`` dependency; nothing else reaches into the engine.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class DatabaseSessionManager:
    """Owns the async engine and hands out sessions that roll back on error."""

    def __init__(self, database_url: str, echo: bool = False):
        self.engine = create_async_engine(
            database_url,
            echo=echo,
            pool_pre_ping=True,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def connect(self) -> None:
        """Check connectivity and create any missing tables."""
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self.engine.dispose()


db_manager: Optional[DatabaseSessionManager] = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def connect_db(manager: Optional[DatabaseSessionManager] = None) -> bool:
    """Connect to the database at startup.

    Failures are logged and swallowed so the API process stays up without a
    working store; no retry is attempted.
    """
    manager = manager or db_manager
    if manager is None:
        logger.error("There was an error on DB: database not initialized")
        return False
    try:
        await manager.connect()
    except (SQLAlchemyError, OSError) as e:
        logger.error("There was an error on DB: %s", e)
        return False
    logger.info("Connected to the database")
    return True


async def close_db() -> None:
    if db_manager is not None:
        await db_manager.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
