"""
Brand repository
"""
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from timeless.core.exceptions import InternalError
from timeless.core.logging import log
from timeless.models.brand import Brand
from timeless.repositories.base import BaseRepository
from timeless.utils.normalization import normalize_brand_name


class BrandRepository(BaseRepository[Brand]):
    """Repository for brand operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(Brand, session)

    async def find_by_name(self, brand_name: str) -> Optional[Brand]:
        """Case-insensitive lookup by brand name"""
        statement = select(Brand).where(func.lower(Brand.brand_name) == normalize_brand_name(brand_name))
        try:
            result = await self.session.exec(statement)
            return result.first()
        except SQLAlchemyError as e:
            log.error("Database error looking up brand by name", error=str(e))
            raise InternalError()
