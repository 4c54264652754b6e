"""
Shareable Report Routes
=======================

Endpoints:
    POST   /api/shareable-reports/create          - Share a saved result (auth)
    GET    /api/shareable-reports/user/list       - Caller's shared reports (auth)
    GET    /api/shareable-reports/{slug}/{token}  - Public shared report
    DELETE /api/shareable-reports/{token}         - Revoke a shared report (auth)

Author: Health Check Team
Version: 1.0.0
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from healthcheck.api.auth import CurrentUser, get_current_user
from healthcheck.api.dependencies import get_results_store, get_share_store
from healthcheck.config import settings
from healthcheck.storage.results_store import HealthCheckStore, StorageError
from healthcheck.storage.share_store import (
    ReportExpiredError,
    ReportForbiddenError,
    ReportNotFoundError,
    ShareableReportStore,
)
from shared.contracts.healthcheck import (
    ShareCreateRequest,
    ShareCreateResponse,
    SharedReportResponse,
)


router = APIRouter(prefix="/api/shareable-reports", tags=["Shareable Reports"])


@router.post(
    "/create",
    response_model=ShareCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Shareable Report",
)
async def create_shareable_report(
    request: ShareCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    results: HealthCheckStore = Depends(get_results_store),
    shares: ShareableReportStore = Depends(get_share_store),
) -> ShareCreateResponse:
    try:
        record = await results.get(request.health_check_id, user.user_id)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Health check not found",
        )

    expires_in_days = request.expires_in_days or settings.share_default_expiry_days
    report = shares.create(record, request.company_name, expires_in_days)
    return ShareCreateResponse(
        shareable_url=shares.url_for(report),
        report_hash=report.token,
        expires_at=report.expires_at,
        company_slug=report.company_slug,
    )


@router.get("/user/list", summary="List Shareable Reports")
async def list_shareable_reports(
    user: CurrentUser = Depends(get_current_user),
    shares: ShareableReportStore = Depends(get_share_store),
) -> Dict[str, Any]:
    return {
        "reports": [
            {
                "id": r.token,
                "companySlug": r.company_slug,
                "createdAt": r.created_at.isoformat(),
                "expiresAt": r.expires_at.isoformat(),
                "isActive": r.is_active and not r.is_expired(),
                "viewCount": r.view_count,
                "score": r.snapshot.get("score"),
                "assessmentDate": r.snapshot.get("assessmentDate"),
                "shareableUrl": shares.url_for(r),
            }
            for r in shares.list_for_user(user.user_id)
        ]
    }


@router.get(
    "/{company_slug}/{token}",
    response_model=SharedReportResponse,
    summary="View Shared Report",
)
async def view_shared_report(
    company_slug: str,
    token: str,
    shares: ShareableReportStore = Depends(get_share_store),
) -> SharedReportResponse:
    try:
        report = shares.get(company_slug, token)
    except ReportNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shareable report not found",
        )
    except ReportExpiredError:
        raise HTTPException(
            status_code=status.HTTP_410_GONE,
            detail="This report has expired or is no longer available",
        )

    return SharedReportResponse.model_validate({
        "companyName": report.company_name,
        "healthCheck": report.snapshot,
        "reportInfo": report.report_info(),
    })


@router.delete(
    "/{token}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate Shared Report",
)
async def deactivate_shared_report(
    token: str,
    user: CurrentUser = Depends(get_current_user),
    shares: ShareableReportStore = Depends(get_share_store),
) -> None:
    try:
        shares.deactivate(token, user.user_id)
    except ReportNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shareable report not found",
        )
    except ReportForbiddenError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to deactivate this report",
        )
