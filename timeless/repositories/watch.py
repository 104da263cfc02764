"""
Watch repository
"""
from sqlmodel.ext.asyncio.session import AsyncSession

from timeless.models.watch import Watch
from timeless.repositories.base import BaseRepository


class WatchRepository(BaseRepository[Watch]):
    """Repository for watch operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(Watch, session)
