"""
API Dependencies for dependency injection
"""
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel.ext.asyncio.session import AsyncSession

from timeless.core.database import get_async_session
from timeless.core.exceptions import UnauthorizedError
from timeless.core.security import TokenData, decode_access_token
from timeless.repositories import BrandRepository, WatchRepository
from timeless.services import BrandService, WatchService


# Security
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenData:
    """Resolve the bearer token to the caller's claims"""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authorized, no token")
    return decode_access_token(credentials.credentials)


CurrentUserDep = Annotated[TokenData, Depends(get_current_user)]


# Database session
AsyncSessionDep = Annotated[AsyncSession, Depends(get_async_session)]


# Repositories
async def get_brand_repository(session: AsyncSessionDep) -> BrandRepository:
    """Get brand repository instance"""
    return BrandRepository(session)


async def get_watch_repository(session: AsyncSessionDep) -> WatchRepository:
    """Get watch repository instance"""
    return WatchRepository(session)


BrandRepoDep = Annotated[BrandRepository, Depends(get_brand_repository)]
WatchRepoDep = Annotated[WatchRepository, Depends(get_watch_repository)]


# Services
async def get_brand_service(brand_repo: BrandRepoDep) -> BrandService:
    """Get brand service instance"""
    return BrandService(brand_repo)


async def get_watch_service(watch_repo: WatchRepoDep, brand_repo: BrandRepoDep) -> WatchService:
    """Get watch service instance"""
    return WatchService(watch_repo, brand_repo)


BrandServiceDep = Annotated[BrandService, Depends(get_brand_service)]
WatchServiceDep = Annotated[WatchService, Depends(get_watch_service)]
