"""
Storage Package
===============

Author: Health Check Team
Version: 1.0.0
"""

from .results_store import (
    HealthCheckRecord,
    HealthCheckStore,
    StorageError,
    risk_level,
)
from .share_store import (
    ReportExpiredError,
    ReportForbiddenError,
    ReportNotFoundError,
    ShareableReport,
    ShareableReportStore,
    slugify,
)

__all__ = [
    "HealthCheckRecord",
    "HealthCheckStore",
    "ReportExpiredError",
    "ReportForbiddenError",
    "ReportNotFoundError",
    "ShareableReport",
    "ShareableReportStore",
    "StorageError",
    "risk_level",
    "slugify",
]
