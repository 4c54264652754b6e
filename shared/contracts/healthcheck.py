"""
Health Check Contract Models
============================

Request/Response models for the health check HTTP API.

These are the STABLE contracts the questionnaire frontend depends on.
Wire names are camelCase; Python attributes stay snake_case.
Do NOT change field names or types without versioning.

Author: Health Check Team
Version: 1.0.0
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContractModel(BaseModel):
    """Base for all contracts: camelCase on the wire, snake_case in code."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Catalog
# =============================================================================


class FollowUpContract(ContractModel):
    condition: str
    prompt: str
    type: str
    kind: str


class QuestionContract(ContractModel):
    id: int
    category: str
    question: str
    type: str
    options: List[str] = Field(default_factory=list)
    warning: Optional[str] = None
    follow_up: Optional[FollowUpContract] = None


class QuestionsResponse(ContractModel):
    """Response: the full questionnaire."""
    questions: List[QuestionContract]
    categories: List[str]


# =============================================================================
# Scoring
# =============================================================================


class ScoreRequest(ContractModel):
    """
    Request: score a completed questionnaire.

    Frontend calls: POST /api/health-check/score
    """
    answers: Dict[str, Any] = Field(
        default_factory=dict,
        description="Question id -> answer",
    )
    follow_up_answers: Dict[str, Any] = Field(
        default_factory=dict,
        description="Question id -> follow-up answer",
    )


class CategoryScoreContract(ContractModel):
    category: str
    score: int = Field(..., ge=0, le=100)
    insights: str
    status: str


class RiskContract(ContractModel):
    type: str
    penalty: str
    probability: str


class RiskForecastContract(ContractModel):
    period: str
    risks: List[RiskContract] = Field(default_factory=list)


class ComplianceResultContract(ContractModel):
    overall_score: int = Field(..., ge=0, le=100)
    category_scores: List[CategoryScoreContract]
    strengths: List[str]
    red_flags: List[str]
    risk_forecast: RiskForecastContract


class ServiceContract(ContractModel):
    id: str
    title: str
    description: str
    original_price: int
    discounted_price: int
    features: List[str]
    priority: str


class PlanContract(ContractModel):
    plan: str
    title: str
    subtitle: str
    reason: str
    urgency: str


class ScoreResponse(ContractModel):
    """Response: scored result plus remediation recommendations."""
    result: ComplianceResultContract
    recommended_services: List[ServiceContract]
    recommended_plan: PlanContract


class ReportRequest(ScoreRequest):
    """Request: render a report for an answer set."""
    company_name: Optional[str] = Field(None, max_length=200)


class ReportResponse(ContractModel):
    report: Dict[str, Any]
    markdown: str


# =============================================================================
# Persistence
# =============================================================================


class HealthCheckContract(ContractModel):
    id: str
    assessment_date: datetime
    score: int
    risk_level: str
    answers: Dict[str, Any] = Field(default_factory=dict)
    follow_up_answers: Dict[str, Any] = Field(default_factory=dict)
    category_scores: List[CategoryScoreContract] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)
    risks: List[RiskContract] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    status: str = "completed"


class ImprovementContract(ContractModel):
    score_change: int
    previous_score: int
    current_score: int
    days_between: int


class SaveResultsResponse(ContractModel):
    health_check: HealthCheckContract
    improvement: Optional[ImprovementContract] = None


class LatestResponse(ContractModel):
    result: HealthCheckContract
    improvement: Optional[ImprovementContract] = None


class Pagination(ContractModel):
    page: int
    limit: int
    total: int
    pages: int


class HistoryResponse(ContractModel):
    results: List[HealthCheckContract]
    pagination: Pagination


class StatsResponse(ContractModel):
    total_assessments: int
    average_score: float
    highest_score: int
    lowest_score: int
    last_assessment: Optional[datetime] = None
    trend: str
    risk_distribution: Dict[str, int]


# =============================================================================
# Shareable Reports
# =============================================================================


class ShareCreateRequest(ContractModel):
    health_check_id: str = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1, max_length=200)
    expires_in_days: Optional[int] = Field(default=None, ge=1, le=365)


class ShareCreateResponse(ContractModel):
    shareable_url: str
    report_hash: str
    expires_at: datetime
    company_slug: str


class ReportInfo(ContractModel):
    created_at: datetime
    expires_at: datetime
    view_count: int


class SharedReportResponse(ContractModel):
    company_name: str
    health_check: Dict[str, Any]
    report_info: ReportInfo


# =============================================================================
# Company Registry
# =============================================================================


class CompanyLookupResponse(ContractModel):
    cin: str
    company_name: Optional[str] = None
    company_info: Dict[str, str]


# =============================================================================
# Health
# =============================================================================


class ServiceHealth(ContractModel):
    """Response: service liveness."""
    status: str = Field(..., description="healthy, degraded")
    service: str
    version: str
    storage: str = Field(..., description="postgres or memory")
    registry_enabled: bool
    timestamp: datetime
