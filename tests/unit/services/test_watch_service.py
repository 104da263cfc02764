"""
Tests for the watch service against in-memory stores
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from timeless.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from timeless.core.security import Role

ADMIN = Role.ADMIN.value
USER = Role.USER.value


class TestReads:
    @pytest.mark.asyncio
    async def test_list_empty(self, watch_service):
        assert await watch_service.list_watches() == []

    @pytest.mark.asyncio
    async def test_list_populates_brands(self, watch_service, speedmaster, submariner_payload):
        await watch_service.create_watch(submariner_payload, ADMIN)

        watches = await watch_service.list_watches()

        assert [w.model for w in watches] == ["Speedmaster", "Submariner"]
        assert [w.brand.brand_name for w in watches] == ["Omega", "Rolex"]

    @pytest.mark.asyncio
    async def test_get_populates_brand(self, watch_service, speedmaster):
        watch = await watch_service.get_watch(str(speedmaster.id))

        assert watch.model == "Speedmaster"
        assert watch.brand.brand_name == "Omega"
        assert watch.brand.id == speedmaster.brand_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("watch_id", [lambda: str(uuid4()), lambda: "not-an-id", lambda: ""])
    async def test_get_unknown_or_malformed_id(self, watch_service, watch_id):
        with pytest.raises(NotFoundError, match="Watch not found"):
            await watch_service.get_watch(watch_id())


class TestCreate:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("condition", ["excellent", "EXCELLENT", "Excellent"])
    async def test_condition_stored_title_cased(self, watch_service, watch_store, submariner_payload, condition):
        submariner_payload["condition"] = condition

        watch = await watch_service.create_watch(submariner_payload, ADMIN)

        assert watch.condition == "Excellent"
        assert watch_store.records[watch.id].condition == "Excellent"

    @pytest.mark.asyncio
    async def test_returns_populated_record(self, watch_service, rolex, submariner_payload):
        watch = await watch_service.create_watch(submariner_payload, ADMIN)

        assert watch.model == "Submariner"
        assert watch.year == 2020
        assert watch.rental_day_price == 100
        assert watch.quantity == 5
        assert watch.brand.id == rolex.id
        assert watch.brand.brand_name == "Rolex"

    @pytest.mark.asyncio
    async def test_non_admin_is_rejected_before_validation(self, watch_service, watch_store):
        # An empty payload would fail validation; the gate must fire first
        with pytest.raises(AuthorizationError, match="Not authorized as admin"):
            await watch_service.create_watch({}, USER)
        assert watch_store.records == {}

    @pytest.mark.asyncio
    async def test_anonymous_is_rejected(self, watch_service, watch_store, submariner_payload):
        with pytest.raises(AuthorizationError):
            await watch_service.create_watch(submariner_payload, None)
        assert watch_store.records == {}

    @pytest.mark.asyncio
    async def test_missing_fields_persist_nothing(self, watch_service, watch_store, rolex):
        with pytest.raises(ValidationError, match="Missing required fields"):
            await watch_service.create_watch({"model": "Submariner", "brand_id": str(rolex.id)}, ADMIN)
        assert watch_store.records == {}

    @pytest.mark.asyncio
    async def test_invalid_condition_persists_nothing(self, watch_service, watch_store, submariner_payload):
        submariner_payload["condition"] = "Invalid"

        with pytest.raises(ValidationError, match="Invalid condition"):
            await watch_service.create_watch(submariner_payload, ADMIN)
        assert watch_store.records == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("brand_id", [lambda: str(uuid4()), lambda: "definitely-not-a-uuid"])
    async def test_unknown_brand(self, watch_service, watch_store, submariner_payload, brand_id):
        submariner_payload["brand_id"] = brand_id()

        with pytest.raises(NotFoundError, match="Brand not found") as exc_info:
            await watch_service.create_watch(submariner_payload, ADMIN)

        assert exc_info.value.status_code == 404
        assert watch_store.records == {}


class TestUpdate:
    @pytest.mark.asyncio
    async def test_partial_update_leaves_other_fields(self, watch_service, speedmaster):
        watch = await watch_service.update_watch(str(speedmaster.id), {"model": "Speedmaster Pro"}, ADMIN)

        assert watch.model == "Speedmaster Pro"
        assert watch.year == 2019
        assert watch.condition == "Good"
        assert watch.quantity == 3
        assert watch.brand.brand_name == "Omega"

    @pytest.mark.asyncio
    async def test_condition_is_normalized(self, watch_service, speedmaster):
        watch = await watch_service.update_watch(
            str(speedmaster.id), {"rental_day_price": 250, "condition": "excellent", "quantity": 2}, ADMIN
        )

        assert watch.rental_day_price == 250
        assert watch.condition == "Excellent"
        assert watch.quantity == 2

    @pytest.mark.asyncio
    async def test_out_of_range_year_dropped_other_fields_applied(self, watch_service, watch_store, speedmaster):
        future = datetime.now(timezone.utc).year + 5

        watch = await watch_service.update_watch(
            str(speedmaster.id), {"year": future, "rental_day_price": 95}, ADMIN
        )

        assert watch.year == 2019
        assert watch.rental_day_price == 95
        assert watch_store.records[speedmaster.id].year == 2019

    @pytest.mark.asyncio
    async def test_invalid_condition_rejects_everything(self, watch_service, watch_store, speedmaster):
        with pytest.raises(ValidationError, match="Invalid condition"):
            await watch_service.update_watch(
                str(speedmaster.id), {"condition": "Broken", "rental_day_price": 10}, ADMIN
            )

        stored = watch_store.records[speedmaster.id]
        assert stored.condition == "Good"
        assert stored.rental_day_price == 80

    @pytest.mark.asyncio
    async def test_negative_quantity_rejects_everything(self, watch_service, watch_store, speedmaster):
        with pytest.raises(ValidationError):
            await watch_service.update_watch(str(speedmaster.id), {"quantity": -1, "model": "X"}, ADMIN)

        assert watch_store.records[speedmaster.id].model == "Speedmaster"

    @pytest.mark.asyncio
    async def test_non_admin_cannot_update(self, watch_service, watch_store, speedmaster):
        with pytest.raises(AuthorizationError, match="Not authorized as admin"):
            await watch_service.update_watch(str(speedmaster.id), {"rental_day_price": 95}, USER)

        assert watch_store.records[speedmaster.id].rental_day_price == 80

    @pytest.mark.asyncio
    async def test_unknown_watch(self, watch_service):
        with pytest.raises(NotFoundError, match="Watch not found"):
            await watch_service.update_watch(str(uuid4()), {"rental_day_price": 300}, ADMIN)

    @pytest.mark.asyncio
    async def test_rebrand(self, watch_service, speedmaster, rolex):
        watch = await watch_service.update_watch(str(speedmaster.id), {"brand_id": str(rolex.id)}, ADMIN)

        assert watch.brand.brand_name == "Rolex"

    @pytest.mark.asyncio
    async def test_rebrand_to_unknown_brand(self, watch_service, watch_store, speedmaster):
        original_brand = speedmaster.brand_id

        with pytest.raises(NotFoundError, match="Brand not found"):
            await watch_service.update_watch(str(speedmaster.id), {"brand_id": str(uuid4())}, ADMIN)

        assert watch_store.records[speedmaster.id].brand_id == original_brand

    @pytest.mark.asyncio
    async def test_nothing_to_apply_returns_current_record(self, watch_service, speedmaster):
        updated_at = speedmaster.updated_at

        watch = await watch_service.update_watch(str(speedmaster.id), {"unknown": 1}, ADMIN)

        assert watch.model == "Speedmaster"
        assert watch.updated_at == updated_at


class TestDelete:
    @pytest.mark.asyncio
    async def test_admin_deletes(self, watch_service, watch_store, speedmaster, brand_store):
        result = await watch_service.delete_watch(str(speedmaster.id), ADMIN)

        assert result.message == "Watch removed"
        assert speedmaster.id not in watch_store.records
        # Brands are never cascaded
        assert await brand_store.find_by_id(speedmaster.brand_id) is not None

        with pytest.raises(NotFoundError):
            await watch_service.get_watch(str(speedmaster.id))

    @pytest.mark.asyncio
    async def test_non_admin_cannot_delete(self, watch_service, watch_store, speedmaster):
        with pytest.raises(AuthorizationError):
            await watch_service.delete_watch(str(speedmaster.id), USER)

        assert speedmaster.id in watch_store.records

    @pytest.mark.asyncio
    async def test_unknown_watch(self, watch_service):
        with pytest.raises(NotFoundError, match="Watch not found"):
            await watch_service.delete_watch(str(uuid4()), ADMIN)
