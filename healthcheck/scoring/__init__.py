"""
Compliance Scoring Package
==========================

Rule tables and the scoring engine.

Author: Health Check Team
Version: 1.0.0
"""

from .engine import (
    CategoryScore,
    ComplianceResult,
    RiskForecast,
    RiskItem,
    ScoringEngine,
    compute,
)
from .rules import CategoryStatus, Probability

__all__ = [
    "CategoryScore",
    "CategoryStatus",
    "ComplianceResult",
    "Probability",
    "RiskForecast",
    "RiskItem",
    "ScoringEngine",
    "compute",
]
