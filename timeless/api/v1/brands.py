"""
Brand API endpoints
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Body, status

from timeless.api.deps import BrandServiceDep, CurrentUserDep
from timeless.core.exceptions import ErrorResponse
from timeless.core.logging import log
from timeless.schemas.brand import BrandRead


router = APIRouter()


@router.get("", response_model=List[BrandRead], summary="List brands")
async def list_brands(brand_service: BrandServiceDep) -> List[BrandRead]:
    return await brand_service.list_brands()


@router.get(
    "/{brand_id}",
    response_model=BrandRead,
    summary="Get brand",
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_brand(brand_id: str, brand_service: BrandServiceDep) -> BrandRead:
    """Get brand details by ID"""
    return await brand_service.get_brand(brand_id)


@router.post(
    "",
    response_model=BrandRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create brand",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
async def create_brand(
    brand_service: BrandServiceDep,
    current_user: CurrentUserDep,
    payload: Dict[str, Any] = Body(...),
) -> BrandRead:
    """
    Create a new brand. Admin only.

    Brand names are unique regardless of case.
    """
    log.info("Creating brand", user_id=current_user.sub)
    return await brand_service.create_brand(payload, current_user.role)
