"""Tests for ProductService, the catalog operation handlers."""

import pytest

from vegan_catalog_api.app.schemas.product import ProductPayload
from vegan_catalog_api.app.services.product_service import ProductNotFoundError, ProductService
from vegan_catalog_api.app.services.product_store import RecordTooLargeError


class TestCreateAndRead:

    @pytest.mark.asyncio
    async def test_create_assigns_system_fields(self, product_service, tofu, clock):
        product = await product_service.create_product(tofu)

        assert product.id == 0
        assert product.name == "Tofu"
        assert product.description == "Firm"
        assert product.price == 500
        assert product.seller == "Acme"
        assert product.availability is True
        assert product.created_at == clock.now
        assert product.updated_at is None

    @pytest.mark.asyncio
    async def test_create_then_get_round_trips(self, product_service, tofu):
        created = await product_service.create_product(tofu)

        fetched = await product_service.get_product(created.id)

        assert fetched == created

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, product_service):
        with pytest.raises(ProductNotFoundError) as exc_info:
            await product_service.get_product(17)

        assert exc_info.value.product_id == 17
        assert str(exc_info.value) == "Product with ID 17 not found"

    @pytest.mark.asyncio
    async def test_identifiers_never_reused_after_delete(self, product_service, tofu):
        first = await product_service.create_product(tofu)
        second = await product_service.create_product(tofu)
        await product_service.delete_product(second.id)
        await product_service.delete_product(first.id)

        third = await product_service.create_product(tofu)

        assert [first.id, second.id, third.id] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_state_survives_reopen(self, temp_db_path, product_service, tofu):
        created = await product_service.create_product(tofu)
        await product_service.toggle_availability(created.id)

        reopened = ProductService(temp_db_path)
        fetched = await reopened.get_product(created.id)
        next_product = await reopened.create_product(tofu)

        assert fetched.availability is False
        assert next_product.id == created.id + 1

    @pytest.mark.asyncio
    async def test_oversized_create_is_rejected(self, product_service):
        payload = ProductPayload(name="Tofu", description="z" * 5000, price=1, seller="Acme")

        with pytest.raises(RecordTooLargeError):
            await product_service.create_product(payload)

        assert len(product_service.store) == 0


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_overwrites_fields_and_stamps_time(self, product_service, tofu):
        created = await product_service.create_product(tofu)
        payload = ProductPayload(name="Silken Tofu", description="Soft", price=450, seller="Acme Foods")

        updated = await product_service.update_product(created.id, payload)

        assert updated.name == "Silken Tofu"
        assert updated.description == "Soft"
        assert updated.price == 450
        assert updated.seller == "Acme Foods"
        assert updated.updated_at is not None
        assert updated.updated_at >= updated.created_at
        assert updated.created_at == created.created_at
        assert updated.id == created.id

    @pytest.mark.asyncio
    async def test_update_missing_raises_and_leaves_store_unchanged(self, product_service, tofu):
        created = await product_service.create_product(tofu)

        with pytest.raises(ProductNotFoundError):
            await product_service.update_product(created.id + 1, tofu)

        assert len(product_service.store) == 1
        assert await product_service.get_product(created.id) == created


class TestDeleteAndToggle:

    @pytest.mark.asyncio
    async def test_delete_returns_last_state_then_not_found(self, product_service, tofu):
        created = await product_service.create_product(tofu)

        deleted = await product_service.delete_product(created.id)

        assert deleted == created
        with pytest.raises(ProductNotFoundError):
            await product_service.get_product(created.id)
        with pytest.raises(ProductNotFoundError):
            await product_service.delete_product(created.id)

    @pytest.mark.asyncio
    async def test_toggle_twice_restores_availability(self, product_service, tofu):
        created = await product_service.create_product(tofu)

        first = await product_service.toggle_availability(created.id)
        second = await product_service.toggle_availability(created.id)

        assert first.availability is False
        assert second.availability is True
        assert first.updated_at > created.created_at
        assert second.updated_at > first.updated_at

    @pytest.mark.asyncio
    async def test_toggle_missing_raises_not_found(self, product_service):
        with pytest.raises(ProductNotFoundError):
            await product_service.toggle_availability(0)

    @pytest.mark.asyncio
    async def test_tofu_scenario(self, product_service, tofu):
        created = await product_service.create_product(tofu)
        assert created.id == 0
        assert created.availability is True

        toggled = await product_service.toggle_availability(created.id)
        assert toggled.availability is False
        assert (await product_service.get_product(created.id)).availability is False

        deleted = await product_service.delete_product(created.id)
        assert deleted == toggled

        with pytest.raises(ProductNotFoundError):
            await product_service.get_product(created.id)


class TestAudit:

    @pytest.mark.asyncio
    async def test_every_mutation_is_audited(self, product_service, tofu):
        created = await product_service.create_product(tofu)
        await product_service.update_product(created.id, tofu)
        await product_service.toggle_availability(created.id)
        await product_service.delete_product(created.id)

        logs = await product_service.audit.list_logs(object_id=created.id)

        assert [log["action"] for log in logs] == ["delete", "toggle", "update", "create"]
        assert all(log["object_type"] == "product" for log in logs)
        assert logs[-1]["details"] == {"name": "Tofu", "seller": "Acme"}
        assert logs[1]["details"] == {"availability": False}

    @pytest.mark.asyncio
    async def test_failed_operations_are_not_audited(self, product_service):
        with pytest.raises(ProductNotFoundError):
            await product_service.delete_product(3)

        assert await product_service.audit.list_logs() == []

    @pytest.mark.asyncio
    async def test_audit_failure_does_not_break_mutation(self, product_service, tofu, monkeypatch):
        async def broken_log(**kwargs):
            raise RuntimeError("audit table unavailable")

        monkeypatch.setattr(product_service.audit, "log", broken_log)

        created = await product_service.create_product(tofu)

        assert (await product_service.get_product(created.id)).name == "Tofu"


class TestEdgeCases:

    @pytest.mark.asyncio
    async def test_toggle_twice_advances_with_a_stalled_clock(self, temp_db_path, tofu):
        service = ProductService(temp_db_path, clock=lambda: 1_700_000_000_000_000_000)
        created = await service.create_product(tofu)

        first = await service.toggle_availability(created.id)
        second = await service.toggle_availability(created.id)

        assert first.updated_at >= created.created_at
        assert second.updated_at > first.updated_at
        assert second.availability is created.availability

    @pytest.mark.asyncio
    @pytest.mark.parametrize("product_id", [2**63, 2**64 - 1])
    async def test_unsigned_ids_beyond_storage_are_not_found(self, product_service, tofu, product_id):
        await product_service.create_product(tofu)

        with pytest.raises(ProductNotFoundError) as exc_info:
            await product_service.get_product(product_id)
        assert exc_info.value.product_id == product_id

        with pytest.raises(ProductNotFoundError):
            await product_service.update_product(product_id, tofu)
        with pytest.raises(ProductNotFoundError):
            await product_service.toggle_availability(product_id)
        with pytest.raises(ProductNotFoundError):
            await product_service.delete_product(product_id)

        assert len(product_service.store) == 1
