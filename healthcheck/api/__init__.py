"""
Health Check API Package
========================

FastAPI REST API layer for the compliance health check.

This package provides:
    - main: FastAPI application and route configuration
    - routes/: Endpoint implementations
    - dependencies: Shared dependency injection
    - auth: JWT bearer authentication

Author: Health Check Team
Version: 1.0.0
"""

from healthcheck.api.main import app, create_app

__all__ = [
    "app",
    "create_app",
]
