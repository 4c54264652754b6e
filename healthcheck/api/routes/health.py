"""
Health Routes
=============

Liveness endpoints for monitoring and orchestration.

Endpoints:
    GET /health        - Basic health with storage mode
    GET /health/live   - Liveness probe

Author: Health Check Team
Version: 1.0.0
"""

from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter

from healthcheck.api.dependencies import ServiceContainer
from healthcheck.config import settings
from shared.contracts.healthcheck import ServiceHealth


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=ServiceHealth,
    summary="Health Check",
    description="Returns service health and which results store is active.",
)
async def health_check() -> ServiceHealth:
    """
    Health check endpoint.

    Status is "degraded" when PostgreSQL was requested but the service
    fell back to the in-memory store.
    """
    container = ServiceContainer.get_instance()

    degraded = settings.database_enabled and not container.postgres_available

    return ServiceHealth(
        status="degraded" if degraded else "healthy",
        service="healthcheck",
        version=settings.app_version,
        storage=container.storage_mode,
        registry_enabled=container.registry_client is not None,
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/health/live",
    summary="Liveness Check",
)
async def liveness_check() -> Dict[str, str]:
    """Returns 200 if the process is alive."""
    return {"status": "alive"}
