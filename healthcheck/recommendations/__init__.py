"""
Recommendations Package
=======================

Author: Health Check Team
Version: 1.0.0
"""

from .services import (
    MAX_RECOMMENDED_SERVICES,
    SERVICES,
    PlanRecommendation,
    RemediationService,
    ServicePriority,
    recommend_plan,
    recommend_services,
)

__all__ = [
    "MAX_RECOMMENDED_SERVICES",
    "SERVICES",
    "PlanRecommendation",
    "RemediationService",
    "ServicePriority",
    "recommend_plan",
    "recommend_services",
]
