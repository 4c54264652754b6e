"""
Health Check Routes
===================

Scoring, reporting and persisted results.

Endpoints:
    POST /api/health-check/score         - Score an answer set (public)
    POST /api/health-check/report        - Render a report (public)
    POST /api/health-check/save-results  - Score and persist (auth)
    GET  /api/health-check/latest        - Latest saved result (auth)
    GET  /api/health-check/history       - Paginated history (auth)
    GET  /api/health-check/stats         - Aggregate statistics (auth)

Scores are always computed server-side; clients never submit a score.

Author: Health Check Team
Version: 1.0.0
"""

import math
from typing import List, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, status

from healthcheck.api.auth import CurrentUser, get_current_user
from healthcheck.api.dependencies import (
    get_report_generator,
    get_results_store,
    get_scoring_engine,
)
from healthcheck.catalog.questions import InvalidAnswerSetError, validate_answer_keys
from healthcheck.config import settings
from healthcheck.logging import get_logger
from healthcheck.recommendations.services import (
    PlanRecommendation,
    RemediationService,
    recommend_plan,
    recommend_services,
)
from healthcheck.reporting.report_generator import ReportGenerator
from healthcheck.scoring.engine import ComplianceResult, ScoringEngine
from healthcheck.storage.results_store import HealthCheckStore, StorageError
from shared.contracts.healthcheck import (
    HealthCheckContract,
    HistoryResponse,
    ImprovementContract,
    LatestResponse,
    ReportRequest,
    ReportResponse,
    SaveResultsResponse,
    ScoreRequest,
    ScoreResponse,
    StatsResponse,
)


router = APIRouter(prefix="/api/health-check", tags=["Health Check"])
logger = get_logger(__name__)


def _score(
    request: ScoreRequest,
    engine: ScoringEngine,
) -> Tuple[ComplianceResult, List[RemediationService], PlanRecommendation]:
    """Validate answer keys, then score and derive recommendations."""
    try:
        validate_answer_keys(request.answers)
        validate_answer_keys(request.follow_up_answers)
    except InvalidAnswerSetError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        )

    result = engine.compute(request.answers, request.follow_up_answers)
    services = recommend_services(request.answers)
    plan = recommend_plan(result.overall_score, services)
    return result, services, plan


@router.post(
    "/score",
    response_model=ScoreResponse,
    summary="Score Answers",
    description="Compute the compliance result and recommended services.",
)
async def score_answers(
    request: ScoreRequest,
    engine: ScoringEngine = Depends(get_scoring_engine),
) -> ScoreResponse:
    result, services, plan = _score(request, engine)
    return ScoreResponse.model_validate({
        "result": result.to_dict(),
        "recommendedServices": [s.to_dict() for s in services],
        "recommendedPlan": plan.to_dict(),
    })


@router.post(
    "/report",
    response_model=ReportResponse,
    summary="Generate Report",
)
async def generate_report(
    request: ReportRequest,
    engine: ScoringEngine = Depends(get_scoring_engine),
    generator: ReportGenerator = Depends(get_report_generator),
) -> ReportResponse:
    result, services, plan = _score(request, engine)
    report = generator.generate(
        result,
        company_name=request.company_name,
        services=services,
        plan=plan,
    )
    return ReportResponse(report=report.to_dict(), markdown=report.to_markdown())


@router.post(
    "/save-results",
    response_model=SaveResultsResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save Results",
)
async def save_results(
    request: ScoreRequest,
    user: CurrentUser = Depends(get_current_user),
    engine: ScoringEngine = Depends(get_scoring_engine),
    store: HealthCheckStore = Depends(get_results_store),
) -> SaveResultsResponse:
    result, services, _ = _score(request, engine)

    try:
        record = await store.save(
            user.user_id,
            request.answers,
            request.follow_up_answers,
            result,
            recommendations=[s.id for s in services],
        )
        improvement = await store.improvement(record)
    except StorageError as e:
        logger.error("save_results_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Results could not be saved; please retry",
        )

    logger.info("health_check_saved", health_check_id=record.id, score=record.score)

    return SaveResultsResponse(
        health_check=HealthCheckContract.model_validate(record.to_dict()),
        improvement=ImprovementContract.model_validate(improvement) if improvement else None,
    )


@router.get(
    "/latest",
    response_model=LatestResponse,
    summary="Latest Result",
)
async def latest_result(
    user: CurrentUser = Depends(get_current_user),
    store: HealthCheckStore = Depends(get_results_store),
) -> LatestResponse:
    try:
        record = await store.latest(user.user_id)
        improvement = await store.improvement(record) if record else None
    except StorageError:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No health check results found",
        )

    return LatestResponse(
        result=HealthCheckContract.model_validate(record.to_dict()),
        improvement=ImprovementContract.model_validate(improvement) if improvement else None,
    )


@router.get(
    "/history",
    response_model=HistoryResponse,
    summary="Result History",
)
async def result_history(
    limit: int = Query(settings.history_default_limit, ge=1, le=100),
    page: int = Query(1, ge=1),
    user: CurrentUser = Depends(get_current_user),
    store: HealthCheckStore = Depends(get_results_store),
) -> HistoryResponse:
    try:
        records, total = await store.history(user.user_id, limit=limit, page=page)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return HistoryResponse.model_validate({
        "results": [r.to_dict() for r in records],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit) if total else 0,
        },
    })


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="Result Statistics",
)
async def result_stats(
    user: CurrentUser = Depends(get_current_user),
    store: HealthCheckStore = Depends(get_results_store),
) -> StatsResponse:
    try:
        stats = await store.stats(user.user_id)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return StatsResponse.model_validate(stats)
