"""
Brand API schemas
"""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class BrandCreate(BaseModel):
    """Schema for creating a brand"""
    brand_name: str = Field(..., min_length=1, max_length=255)


class BrandRead(BaseModel):
    """Schema for reading a brand"""
    id: UUID
    brand_name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
