"""
Watch model
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import DateTime, Field, SQLModel

from .brand import utcnow


class WatchBase(SQLModel):
    """Base watch attributes"""

    model: str = Field(max_length=255)
    year: int
    rental_day_price: float = Field(ge=0)
    condition: str = Field(max_length=20)
    quantity: int = Field(ge=0)


class Watch(WatchBase, table=True):
    """Watch database model; brand is resolved by the service on reads"""

    __tablename__ = "watch"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    brand_id: UUID = Field(foreign_key="brand.id", index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
