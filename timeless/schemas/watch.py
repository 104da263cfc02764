"""
Watch API schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .brand import BrandRead


class WatchCreate(BaseModel):
    """Validated, normalized creation payload"""
    model: str = Field(..., min_length=1, max_length=255)
    year: int
    rental_day_price: float = Field(..., ge=0)
    condition: str
    quantity: int = Field(..., ge=0)
    brand_id: str = Field(..., min_length=1)


class WatchUpdate(BaseModel):
    """Validated partial update - only set fields are applied"""
    model: Optional[str] = Field(None, min_length=1, max_length=255)
    year: Optional[int] = None
    rental_day_price: Optional[float] = Field(None, ge=0)
    condition: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    brand_id: Optional[str] = Field(None, min_length=1)


class WatchRead(BaseModel):
    """Watch with its brand populated"""
    id: UUID
    model: str
    year: int
    rental_day_price: float
    condition: str
    quantity: int
    brand: BrandRead
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
