"""
Health Check Database Layer
===========================

PostgreSQL persistence using SQLAlchemy 2.0 async.

Usage:
    from healthcheck.db import get_session_factory

    async with get_session_factory()() as session:
        result = await session.execute(select(HealthCheckDB))

Author: Health Check Team
Version: 1.0.0
"""

from healthcheck.db.base import Base
from healthcheck.db.models import HealthCheckDB
from healthcheck.db.session import (
    AsyncSession,
    close_db,
    get_db,
    get_engine,
    get_session_factory,
    init_db,
)

__all__ = [
    "AsyncSession",
    "Base",
    "HealthCheckDB",
    "close_db",
    "get_db",
    "get_engine",
    "get_session_factory",
    "init_db",
]
