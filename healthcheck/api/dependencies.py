"""
Health Check API Dependencies
=============================

FastAPI dependency injection for shared resources.

Provides lazy-initialized singletons for:
    - ScoringEngine and ReportGenerator
    - HealthCheckStore (PostgreSQL or in-memory)
    - ShareableReportStore
    - RegistryClient

The container starts in **degraded mode** when PostgreSQL is disabled or
unreachable: results are kept in memory and every endpoint stays up.

Author: Health Check Team
Version: 1.0.0
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from healthcheck.config import settings
from healthcheck.db.session import close_db, get_session_factory, init_db
from healthcheck.integrations.registry_client import RegistryClient
from healthcheck.reporting.report_generator import ReportGenerator
from healthcheck.scoring.engine import ScoringEngine
from healthcheck.storage.results_store import HealthCheckStore
from healthcheck.storage.share_store import ShareableReportStore


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Singleton container for shared services.

    Manages lifecycle of the stores and the registry client.
    Supports degraded mode when PostgreSQL is unavailable.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self):
        self.scoring_engine = ScoringEngine()
        self.report_generator = ReportGenerator()
        self.results_store = HealthCheckStore()
        self.share_store = ShareableReportStore(frontend_url=settings.frontend_url)
        self.registry_client: Optional[RegistryClient] = None
        self.postgres_available = False
        self._initialized = False

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get or create the singleton instance."""
        if cls._instance is None:
            cls._instance = ServiceContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next access builds a fresh container."""
        cls._instance = None

    async def initialize(self) -> None:
        """Initialize all services (graceful degradation on failure)."""
        if self._initialized:
            return

        logger.info("Initializing service container...")

        # ── PostgreSQL (optional) ─────────────────────────────
        if settings.database_enabled:
            try:
                await init_db()
                self.results_store = HealthCheckStore(
                    session_factory=get_session_factory()
                )
                self.postgres_available = True
            except (SQLAlchemyError, OSError) as e:
                logger.warning(
                    f"PostgreSQL unavailable, running in DEGRADED mode: {e}"
                )
                self.postgres_available = False
        else:
            logger.info("Database disabled, using in-memory results store")

        # ── Company registry (optional) ───────────────────────
        if settings.registry_enabled:
            self.registry_client = RegistryClient()
            logger.info(f"Registry client configured for {settings.registry_api_url}")

        self._initialized = True

        if settings.database_enabled and not self.postgres_available:
            logger.warning(
                "Service container initialized in DEGRADED mode: "
                "results will not survive a restart"
            )
        else:
            logger.info("Service container fully initialized")

    async def shutdown(self) -> None:
        """Shutdown all services."""
        logger.info("Shutting down service container...")

        if self.registry_client:
            await self.registry_client.close()
            self.registry_client = None

        if self.postgres_available:
            await close_db()
            self.postgres_available = False

        self._initialized = False
        logger.info("Service container shutdown complete")

    @property
    def storage_mode(self) -> str:
        return self.results_store.mode


# Dependency functions for FastAPI
def get_container() -> ServiceContainer:
    return ServiceContainer.get_instance()


def get_scoring_engine() -> ScoringEngine:
    return ServiceContainer.get_instance().scoring_engine


def get_report_generator() -> ReportGenerator:
    return ServiceContainer.get_instance().report_generator


def get_results_store() -> HealthCheckStore:
    return ServiceContainer.get_instance().results_store


def get_share_store() -> ShareableReportStore:
    return ServiceContainer.get_instance().share_store


def get_registry_client() -> Optional[RegistryClient]:
    """Returns None when registry lookups are disabled."""
    return ServiceContainer.get_instance().registry_client
