"""
Questionnaire Routes
====================

Serves the static question catalog. No presentation data: icons and
colours are looked up by category name in the frontend.

Author: Health Check Team
Version: 1.0.0
"""

from fastapi import APIRouter

from healthcheck.catalog.questions import CATEGORY_ORDER, catalog_as_dicts
from shared.contracts.healthcheck import QuestionsResponse


router = APIRouter(prefix="/api", tags=["Questionnaire"])


@router.get(
    "/questions",
    response_model=QuestionsResponse,
    response_model_exclude_none=True,
    summary="Question Catalog",
)
async def list_questions() -> QuestionsResponse:
    return QuestionsResponse.model_validate({
        "questions": catalog_as_dicts(),
        "categories": [c.value for c in CATEGORY_ORDER],
    })
