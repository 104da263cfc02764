"""
Async database engine and session lifecycle
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.exc import DisconnectionError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from timeless.core.config import settings
from timeless.core.logging import log


def engine_kwargs(database_url: str) -> dict:
    """Engine options for the configured backend"""
    kwargs = {"echo": settings.db_echo, "pool_pre_ping": settings.db_pool_pre_ping}
    if not database_url.startswith("sqlite"):
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
            pool_timeout=30,
        )
    return kwargs


# Retry decorator for connection-level failures
db_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((OperationalError, DisconnectionError)),
    reraise=True,
)


@db_retry
async def _open_connection(session: AsyncSession):
    await session.connection()


class DatabaseSessionManager:
    """Owns the async engine and hands out request-scoped sessions"""

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.database_url
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self.init()
        return self._engine

    def init(self):
        """Create the engine and session factory"""
        if self._engine is not None:
            return

        self._engine = create_async_engine(self.database_url, **engine_kwargs(self.database_url))
        self._sessionmaker = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )
        log.info("Database engine created", backend=self._engine.dialect.name)

    @db_retry
    async def ping(self) -> bool:
        """Round-trip a trivial statement"""
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1

    async def close(self):
        """Close database connection"""
        if self._engine is None:
            return

        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        log.info("Database connection closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional scope"""
        if self._sessionmaker is None:
            self.init()

        async with self._sessionmaker() as session:
            await _open_connection(session)
            try:
                yield session
                await session.commit()
            except Exception as e:
                await session.rollback()
                log.error("Database session error", error=str(e))
                raise


# Global session manager instance
db_manager = DatabaseSessionManager()


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Async session dependency"""
    async with db_manager.session() as session:
        yield session


async def init_db(manager: DatabaseSessionManager = db_manager):
    """Create all tables that do not exist yet"""
    # Register table metadata
    import timeless.models  # noqa: F401

    async with manager.engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    log.info("Database tables created")
