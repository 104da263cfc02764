"""
Watch service: authorization, validation and brand population around the stores
"""
from typing import Any, Dict, List, Optional

from timeless.core.exceptions import NotFoundError
from timeless.core.logging import log
from timeless.core.security import Operation, ensure_authorized
from timeless.models.brand import Brand
from timeless.models.watch import Watch
from timeless.repositories.base import Store, parse_id
from timeless.schemas.brand import BrandRead
from timeless.schemas.common import MessageResponse
from timeless.schemas.watch import WatchRead
from timeless.services.validation import validate_watch_create, validate_watch_update
from timeless.utils.normalization import normalize_condition


class WatchService:
    """Service layer for watch operations"""

    def __init__(self, watch_store: Store[Watch], brand_store: Store[Brand]):
        self.watch_store = watch_store
        self.brand_store = brand_store

    async def list_watches(self) -> List[WatchRead]:
        """All watches with their brands"""
        watches = await self.watch_store.find()
        if not watches:
            return []

        brands = {brand.id: brand for brand in await self.brand_store.find()}
        results = []
        for watch in watches:
            brand = brands.get(watch.brand_id)
            if brand is None:
                log.error("Watch references a missing brand", watch_id=str(watch.id), brand_id=str(watch.brand_id))
                continue
            results.append(self._to_read(watch, brand))
        return results

    async def get_watch(self, watch_id: str) -> WatchRead:
        """Get a watch by ID with its brand"""
        watch = await self._get_or_404(watch_id)
        return await self._populate(watch)

    async def create_watch(self, payload: Dict[str, Any], role: Optional[str]) -> WatchRead:
        """Create a watch; admins only"""
        ensure_authorized(role, Operation.CREATE)

        watch_in = validate_watch_create(payload)
        watch_in.condition = normalize_condition(watch_in.condition)

        brand = await self._get_brand_or_404(watch_in.brand_id)

        data = watch_in.model_dump(exclude={"brand_id"})
        data["brand_id"] = brand.id
        watch = await self.watch_store.create(data)

        log.info("Created watch", watch_id=str(watch.id), model=watch.model, brand=brand.brand_name)
        return self._to_read(watch, brand)

    async def update_watch(self, watch_id: str, payload: Dict[str, Any], role: Optional[str]) -> WatchRead:
        """
        Apply a partial update; admins only.

        Only the fields present in the payload are written. An out-of-range
        year is dropped while the remaining fields still apply; an unknown
        condition or a negative price/quantity rejects the whole update.
        """
        ensure_authorized(role, Operation.UPDATE)

        watch = await self._get_or_404(watch_id)

        watch_update = validate_watch_update(payload)
        changes = watch_update.model_dump(exclude_unset=True)

        if "condition" in changes:
            changes["condition"] = normalize_condition(changes["condition"])

        brand = None
        if "brand_id" in changes:
            brand = await self._get_brand_or_404(changes["brand_id"])
            changes["brand_id"] = brand.id

        if not changes:
            return await self._populate(watch)

        updated = await self.watch_store.update(watch.id, changes)
        if updated is None:
            raise NotFoundError("Watch not found")

        log.info("Updated watch", watch_id=str(updated.id), fields=sorted(changes))
        if brand is not None:
            return self._to_read(updated, brand)
        return await self._populate(updated)

    async def delete_watch(self, watch_id: str, role: Optional[str]) -> MessageResponse:
        """Delete a watch; admins only"""
        ensure_authorized(role, Operation.DELETE)

        watch = await self._get_or_404(watch_id)
        if not await self.watch_store.delete(watch.id):
            raise NotFoundError("Watch not found")

        log.info("Deleted watch", watch_id=str(watch.id))
        return MessageResponse(message="Watch removed")

    async def _get_or_404(self, watch_id: str) -> Watch:
        watch = await self.watch_store.find_by_id(watch_id)
        if watch is None:
            raise NotFoundError("Watch not found")
        return watch

    async def _get_brand_or_404(self, brand_id: Any) -> Brand:
        brand = None
        if parse_id(brand_id) is not None:
            brand = await self.brand_store.find_by_id(brand_id)
        if brand is None:
            raise NotFoundError("Brand not found", brand_id=str(brand_id))
        return brand

    async def _populate(self, watch: Watch) -> WatchRead:
        brand = await self.brand_store.find_by_id(watch.brand_id)
        if brand is None:
            log.error("Watch references a missing brand", watch_id=str(watch.id), brand_id=str(watch.brand_id))
            raise NotFoundError("Brand not found", brand_id=str(watch.brand_id))
        return self._to_read(watch, brand)

    @staticmethod
    def _to_read(watch: Watch, brand: Brand) -> WatchRead:
        return WatchRead(
            id=watch.id,
            model=watch.model,
            year=watch.year,
            rental_day_price=watch.rental_day_price,
            condition=watch.condition,
            quantity=watch.quantity,
            brand=BrandRead.model_validate(brand),
            created_at=watch.created_at,
            updated_at=watch.updated_at,
        )
