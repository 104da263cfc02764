"""
Brand model
"""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlmodel import DateTime, Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BrandBase(SQLModel):
    """Base brand attributes"""

    brand_name: str = Field(index=True, max_length=255)


class Brand(BrandBase, table=True):
    """Brand database model"""

    __tablename__ = "brand"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
