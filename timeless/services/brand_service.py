"""
Brand service with business logic
"""
from typing import Any, Dict, List, Optional

from timeless.core.exceptions import ConflictError, NotFoundError, ValidationError
from timeless.core.logging import log
from timeless.core.security import Operation, ensure_authorized
from timeless.repositories.brand import BrandRepository
from timeless.schemas.brand import BrandCreate, BrandRead
from timeless.services.validation import check_name_length


class BrandService:
    """Service layer for brand operations"""

    def __init__(self, brand_repo: BrandRepository):
        self.brand_repo = brand_repo

    async def list_brands(self) -> List[BrandRead]:
        brands = await self.brand_repo.find()
        return [BrandRead.model_validate(brand) for brand in brands]

    async def get_brand(self, brand_id: str) -> BrandRead:
        """Get brand by ID"""
        brand = await self.brand_repo.find_by_id(brand_id)
        if brand is None:
            raise NotFoundError("Brand not found")
        return BrandRead.model_validate(brand)

    async def create_brand(self, payload: Dict[str, Any], role: Optional[str]) -> BrandRead:
        """Create a brand; admins only, names unique regardless of case"""
        ensure_authorized(role, Operation.CREATE)

        name = payload.get("brand_name") if isinstance(payload, dict) else None
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Missing required fields: brand_name", missing=["brand_name"])

        brand_in = BrandCreate(brand_name=check_name_length(" ".join(name.split()), "Brand name"))

        existing = await self.brand_repo.find_by_name(brand_in.brand_name)
        if existing:
            raise ConflictError("Brand already exists", existing_id=str(existing.id))

        brand = await self.brand_repo.create(brand_in.model_dump())

        log.info("Created brand", brand_id=str(brand.id), brand_name=brand.brand_name)
        return BrandRead.model_validate(brand)
