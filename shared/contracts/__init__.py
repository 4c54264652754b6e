"""
Health Check Shared Contracts
=============================

Canonical request/response models that the frontend consumes.

These contracts are the stable API surface for the health check service.
Any breaking change here breaks the questionnaire frontend.

Version: 1.0.0
"""

from shared.contracts.healthcheck import (
    # Catalog
    QuestionContract,
    QuestionsResponse,
    # Scoring
    ComplianceResultContract,
    ReportRequest,
    ReportResponse,
    ScoreRequest,
    ScoreResponse,
    # Persistence
    HealthCheckContract,
    HistoryResponse,
    LatestResponse,
    SaveResultsResponse,
    StatsResponse,
    # Sharing
    ShareCreateRequest,
    ShareCreateResponse,
    SharedReportResponse,
    # Registry
    CompanyLookupResponse,
    # Health
    ServiceHealth,
)

__all__ = [
    "QuestionContract",
    "QuestionsResponse",
    "ComplianceResultContract",
    "ReportRequest",
    "ReportResponse",
    "ScoreRequest",
    "ScoreResponse",
    "HealthCheckContract",
    "HistoryResponse",
    "LatestResponse",
    "SaveResultsResponse",
    "StatsResponse",
    "ShareCreateRequest",
    "ShareCreateResponse",
    "SharedReportResponse",
    "CompanyLookupResponse",
    "ServiceHealth",
]

# Contract version - bump on breaking changes
CONTRACT_VERSION = "1.0.0"
