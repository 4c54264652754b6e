"""
Company Registry Routes
=======================

Company lookup by CIN. Display-only data; never used in scoring.

Author: Health Check Team
Version: 1.0.0
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from healthcheck.api.dependencies import get_registry_client
from healthcheck.integrations.registry_client import (
    InvalidCompanyIdentifierError,
    RegistryClient,
    RegistryLookupError,
    validate_cin,
)
from shared.contracts.healthcheck import CompanyLookupResponse


router = APIRouter(prefix="/api/company", tags=["Company Registry"])


@router.get(
    "/{cin}",
    response_model=CompanyLookupResponse,
    summary="Look Up Company",
)
async def lookup_company(
    cin: str,
    client: Optional[RegistryClient] = Depends(get_registry_client),
) -> CompanyLookupResponse:
    try:
        cin = validate_cin(cin)
    except InvalidCompanyIdentifierError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Company registry lookups are disabled",
        )

    try:
        info = await client.lookup(cin)
    except RegistryLookupError as e:
        if e.status_code == status.HTTP_404_NOT_FOUND:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Company not found",
            )
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return CompanyLookupResponse(
        cin=cin,
        company_name=info.get("Company Name"),
        company_info=info,
    )
