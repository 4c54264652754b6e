"""
Health Check API Main Application
=================================

FastAPI application entry point for the compliance health check API.

Features:
    - OpenAPI documentation at /docs
    - Questionnaire, scoring, reporting, history and sharing endpoints
    - CORS middleware for the questionnaire frontend
    - Async lifespan management

Usage:
    # Development:
    uvicorn healthcheck.api.main:app --reload

    # Production:
    uvicorn healthcheck.api.main:app --host 0.0.0.0 --port 8000

Author: Health Check Team
Version: 1.0.0
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from healthcheck.api.dependencies import ServiceContainer
from healthcheck.api.routes import (
    company_router,
    health_check_router,
    health_router,
    questions_router,
    shareable_reports_router,
)
from healthcheck.config import settings
from healthcheck.logging import RequestLoggingMiddleware, get_logger, setup_logging


# Configure structured logging
setup_logging(level=settings.log_level, json_output=settings.log_json)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown of services.
    """
    logger.info("Starting health check API...")

    container = ServiceContainer.get_instance()
    await container.initialize()

    logger.info("Health check API started", storage=container.storage_mode)

    yield

    logger.info("Shutting down health check API...")
    await container.shutdown()
    logger.info("Health check API shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title="Compliance Health Check API",
        description=(
            "Startup compliance health check API\n\n"
            "The service provides:\n"
            "- The compliance questionnaire\n"
            "- Deterministic compliance scoring and risk forecast\n"
            "- Remediation service recommendations\n"
            "- Saved results, history and shareable reports\n\n"
            "## Authentication\n"
            "Saving results, history and sharing require a valid JWT. "
            "Include `Authorization: Bearer <token>` in request headers."
        ),
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add structured request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register routers
    app.include_router(health_router)
    app.include_router(questions_router)
    app.include_router(health_check_router)
    app.include_router(shareable_reports_router)
    app.include_router(company_router)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint returning API info."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "description": "Startup compliance health check API",
            "docs": "/docs",
        }

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "healthcheck.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
