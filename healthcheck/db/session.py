"""
Database Session Management
===========================

Async SQLAlchemy engine and session factory.

The engine is created on first use so that importing this module never
requires a reachable database; the in-memory store runs without it.

Author: Health Check Team
Version: 1.0.0
"""

import logging
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from healthcheck.config import settings

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def get_engine() -> AsyncEngine:
    """Return the process-wide async engine, creating it if needed."""
    global _engine
    if _engine is None:
        _engine = create_async_engine(
            settings.postgres_async_dsn,
            echo=settings.debug,
            pool_pre_ping=True,
        )
    return _engine


def get_session_factory() -> async_sessionmaker:
    """Return the session factory bound to the engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Yields:
        AsyncSession: Database session that auto-closes
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Initialize database connection.

    Called during application startup when persistence is enabled.
    """
    logger.info("Initializing PostgreSQL connection...")

    async with get_engine().begin() as conn:
        await conn.run_sync(lambda _: None)

    logger.info("PostgreSQL connection established")


async def close_db() -> None:
    """Close database connections."""
    global _engine, _session_factory
    if _engine is None:
        return
    logger.info("Closing PostgreSQL connections...")
    await _engine.dispose()
    _engine = None
    _session_factory = None
    logger.info("PostgreSQL connections closed")


__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "close_db",
    "AsyncSession",
]
