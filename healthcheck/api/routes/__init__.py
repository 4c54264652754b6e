"""
Health Check API Routes Package
===============================

FastAPI route modules.

Author: Health Check Team
Version: 1.0.0
"""

from healthcheck.api.routes.company import router as company_router
from healthcheck.api.routes.health import router as health_router
from healthcheck.api.routes.health_check import router as health_check_router
from healthcheck.api.routes.questions import router as questions_router
from healthcheck.api.routes.shareable_reports import router as shareable_reports_router

__all__ = [
    "company_router",
    "health_router",
    "health_check_router",
    "questions_router",
    "shareable_reports_router",
]
