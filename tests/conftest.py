"""
Test configuration and fixtures
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from timeless.api.deps import get_brand_service, get_watch_service
from timeless.core.security import Role, create_access_token
from timeless.main import app
from timeless.models import Brand, Watch
from timeless.repositories.base import parse_id
from timeless.services import BrandService, WatchService
from timeless.utils.normalization import normalize_brand_name


class InMemoryStore:
    """Dict-backed stand-in for a repository"""

    def __init__(self, model):
        self.model = model
        self.records: Dict[Any, Any] = {}

    async def find(self) -> List[Any]:
        return sorted(self.records.values(), key=lambda record: record.created_at)

    async def find_by_id(self, id) -> Optional[Any]:
        uuid = parse_id(id)
        return self.records.get(uuid) if uuid else None

    async def create(self, data: Dict[str, Any]):
        record = self.model(**data)
        self.records[record.id] = record
        return record

    async def update(self, id, changes: Dict[str, Any]):
        record = await self.find_by_id(id)
        if record is None:
            return None
        for field, value in changes.items():
            setattr(record, field, value)
        record.updated_at = datetime.now(timezone.utc)
        return record

    async def delete(self, id) -> bool:
        uuid = parse_id(id)
        return self.records.pop(uuid, None) is not None


class InMemoryBrandStore(InMemoryStore):
    def __init__(self):
        super().__init__(Brand)

    async def find_by_name(self, brand_name: str) -> Optional[Brand]:
        wanted = normalize_brand_name(brand_name)
        for brand in self.records.values():
            if brand.brand_name.lower() == wanted:
                return brand
        return None


@pytest.fixture
def brand_store() -> InMemoryBrandStore:
    return InMemoryBrandStore()


@pytest.fixture
def watch_store() -> InMemoryStore:
    return InMemoryStore(Watch)


@pytest.fixture
def watch_service(watch_store, brand_store) -> WatchService:
    return WatchService(watch_store, brand_store)


@pytest.fixture
def brand_service(brand_store) -> BrandService:
    return BrandService(brand_store)


@pytest_asyncio.fixture
async def rolex(brand_store) -> Brand:
    return await brand_store.create({"brand_name": "Rolex"})


@pytest_asyncio.fixture
async def speedmaster(brand_store, watch_store) -> Watch:
    """An Omega watch stored directly, bypassing the service"""
    omega = await brand_store.create({"brand_name": "Omega"})
    return await watch_store.create(
        {
            "model": "Speedmaster",
            "year": 2019,
            "rental_day_price": 80,
            "condition": "Good",
            "quantity": 3,
            "brand_id": omega.id,
        }
    )


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    token = create_access_token("admin-1", Role.ADMIN.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers() -> Dict[str, str]:
    token = create_access_token("user-1", Role.USER.value)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(watch_service, brand_service):
    """Test client with services backed by the in-memory stores"""
    app.dependency_overrides[get_watch_service] = lambda: watch_service
    app.dependency_overrides[get_brand_service] = lambda: brand_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def db_session():
    """Session on a fresh in-memory SQLite database"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def submariner_payload(rolex) -> Dict[str, Any]:
    return {
        "model": "Submariner",
        "year": 2020,
        "rental_day_price": 100,
        "condition": "Excellent",
        "quantity": 5,
        "brand_id": str(rolex.id),
    }
