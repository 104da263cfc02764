"""
Watch API endpoints
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Body, status

from timeless.api.deps import CurrentUserDep, WatchServiceDep
from timeless.core.exceptions import ErrorResponse
from timeless.core.logging import log
from timeless.schemas.common import MessageResponse
from timeless.schemas.watch import WatchRead


router = APIRouter()

ADMIN_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[WatchRead],
    summary="List watches",
    description="Get every watch with its brand populated",
)
async def list_watches(watch_service: WatchServiceDep) -> List[WatchRead]:
    return await watch_service.list_watches()


@router.get(
    "/{watch_id}",
    response_model=WatchRead,
    summary="Get watch",
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_watch(watch_id: str, watch_service: WatchServiceDep) -> WatchRead:
    """Get watch details by ID"""
    return await watch_service.get_watch(watch_id)


@router.post(
    "",
    response_model=WatchRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create watch",
    responses=ADMIN_ERRORS,
)
async def create_watch(
    watch_service: WatchServiceDep,
    current_user: CurrentUserDep,
    payload: Dict[str, Any] = Body(...),
) -> WatchRead:
    """
    Create a new watch. Admin only.

    - **condition** is accepted in any casing and stored title-cased
    - **brand_id** must reference an existing brand
    """
    log.info("Creating watch", user_id=current_user.sub)
    return await watch_service.create_watch(payload, current_user.role)


@router.put(
    "/{watch_id}",
    response_model=WatchRead,
    summary="Update watch",
    responses=ADMIN_ERRORS,
)
async def update_watch(
    watch_id: str,
    watch_service: WatchServiceDep,
    current_user: CurrentUserDep,
    payload: Dict[str, Any] = Body(...),
) -> WatchRead:
    """
    Update watch details. Admin only.

    Only provided fields will be updated. A year outside the allowed range
    is ignored; the other fields still apply.
    """
    log.info("Updating watch", watch_id=watch_id, user_id=current_user.sub)
    return await watch_service.update_watch(watch_id, payload, current_user.role)


@router.delete(
    "/{watch_id}",
    response_model=MessageResponse,
    summary="Delete watch",
    responses=ADMIN_ERRORS,
)
async def delete_watch(
    watch_id: str,
    watch_service: WatchServiceDep,
    current_user: CurrentUserDep,
) -> MessageResponse:
    """Delete a watch. Admin only."""
    log.info("Deleting watch", watch_id=watch_id, user_id=current_user.sub)
    return await watch_service.delete_watch(watch_id, current_user.role)
