from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError as PydanticValidationError

from jeton.application.dtos.shares_dto import SharesConfigDTO, SharesOverviewDTO, UpdateSharesRequest
from jeton.application.services.shares_service import SharesService
from jeton.domain.equity.entities import SharesConfigPatch
from jeton.interfaces.api.dependencies import get_shares_service

router = APIRouter()


@router.get("/shares", response_model=SharesOverviewDTO)
def get_shares(
    service: SharesService = Depends(get_shares_service),  # noqa: B008
) -> SharesOverviewDTO:
    return service.overview()


@router.put("/shares", response_model=SharesConfigDTO)
def update_shares(
    payload: dict[str, Any] = Body(...),  # noqa: B008
    service: SharesService = Depends(get_shares_service),  # noqa: B008
) -> SharesConfigDTO:
    # Checked on the raw body: even an explicit null is a rejected attempt.
    if "company_valuation" in payload:
        raise HTTPException(
            status_code=400,
            detail=(
                "Company valuation cannot be manually set. "
                "It is derived from the strategic company value."
            ),
        )

    try:
        body = UpdateSharesRequest.model_validate(payload)
    except PydanticValidationError as err:
        raise HTTPException(
            status_code=422,
            detail=err.errors(include_url=False, include_context=False),
        ) from err

    service.update(
        SharesConfigPatch(
            authorized_shares=body.authorized_shares,
            class_type=body.class_type,
            par_value=body.par_value,
        )
    )
    return service.describe()
