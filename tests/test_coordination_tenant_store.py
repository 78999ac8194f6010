# tests/test_coordination_tenant_store.py
import asyncio
from uuid import UUID, uuid4

import pytest

from tenant_directory.tenants import (
    DuplicateTenantError,
    StoreUnavailableError,
    TenantCreateRequest,
    TenantDecodeError,
    TenantNotFoundError,
    TenantSearchCriteria,
    encode_tenant,
)


class TestCreateAndGet:
    @pytest.mark.asyncio
    async def test_create_then_get_round_trips(self, tenant_store, make_request):
        created = await tenant_store.create_tenant(make_request())

        fetched = await tenant_store.get_tenant(created.id)

        assert fetched == created
        assert created.created_by == "pytest"

    @pytest.mark.asyncio
    async def test_record_is_stored_under_id_node(self, tenant_store, coordination_store, path_scheme, make_request):
        created = await tenant_store.create_tenant(make_request())

        assert await coordination_store.get_children(path_scheme.tenants_root) == [str(created.id)]
        payload = await coordination_store.get_data(path_scheme.tenant_record_path(created.id))
        assert payload == encode_tenant(created)

    @pytest.mark.asyncio
    async def test_get_missing_tenant_returns_none(self, tenant_store):
        assert await tenant_store.get_tenant(uuid4()) is None

    @pytest.mark.asyncio
    async def test_create_on_existing_path_is_duplicate(self, tenant_store, coordination_store, monkeypatch, make_request):
        fixed_id = UUID("11111111-2222-4333-8444-555555555555")
        monkeypatch.setattr("tenant_directory.tenants.persistence_logic.uuid4", lambda: fixed_id)

        first = await tenant_store.create_tenant(make_request(token="one", name="One"))
        mutations_after_first = coordination_store.mutations

        with pytest.raises(DuplicateTenantError):
            await tenant_store.create_tenant(make_request(token="two", name="Two"))

        assert coordination_store.mutations == mutations_after_first
        assert await tenant_store.get_tenant(fixed_id) == first

    @pytest.mark.asyncio
    async def test_concurrent_colliding_creates_have_one_winner(self, tenant_store, monkeypatch, make_request):
        fixed_id = UUID("aaaaaaaa-bbbb-4ccc-8ddd-eeeeeeeeeeee")
        monkeypatch.setattr("tenant_directory.tenants.persistence_logic.uuid4", lambda: fixed_id)

        results = await asyncio.gather(
            tenant_store.create_tenant(make_request(token="left", name="Left")),
            tenant_store.create_tenant(make_request(token="right", name="Right")),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, Exception)]
        failures = [r for r in results if isinstance(r, DuplicateTenantError)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert await tenant_store.get_tenant(fixed_id) == successes[0]


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_overwrites_whole_record(self, tenant_store, make_request):
        created = await tenant_store.create_tenant(make_request())

        updated = await tenant_store.update_tenant(created.id, TenantCreateRequest(name="Acme Renamed"))

        assert updated.id == created.id
        assert updated.name == "Acme Renamed"
        assert updated.token == "acme"
        assert updated.updated_by == "pytest"
        assert await tenant_store.get_tenant(created.id) == updated

    @pytest.mark.asyncio
    async def test_update_missing_tenant_fails_without_mutation(self, tenant_store, coordination_store):
        with pytest.raises(TenantNotFoundError):
            await tenant_store.update_tenant(uuid4(), TenantCreateRequest(name="Ghost"))
        assert coordination_store.mutations == 0

    @pytest.mark.asyncio
    async def test_token_change_keeps_path(self, tenant_store, coordination_store, path_scheme, make_request):
        created = await tenant_store.create_tenant(make_request())

        await tenant_store.update_tenant(created.id, TenantCreateRequest(token="acme-new"))

        assert await coordination_store.get_children(path_scheme.tenants_root) == [str(created.id)]
        assert (await tenant_store.get_tenant_by_token("acme-new")).id == created.id
        assert await tenant_store.get_tenant_by_token("acme") is None


class TestListing:
    @pytest.mark.asyncio
    async def test_sorted_by_name_and_paginated(self, tenant_store, make_request):
        a = await tenant_store.create_tenant(make_request(token="a", name="Zeta"))
        b = await tenant_store.create_tenant(make_request(token="b", name="Alpha"))
        c = await tenant_store.create_tenant(make_request(token="c", name="Mu"))

        first = await tenant_store.list_tenants(TenantSearchCriteria(page_number=1, page_size=2))
        second = await tenant_store.list_tenants(TenantSearchCriteria(page_number=2, page_size=2))

        assert [t.id for t in first.results] == [b.id, c.id]
        assert first.num_results == 3
        assert [t.id for t in second.results] == [a.id]
        assert second.num_results == 3

    @pytest.mark.asyncio
    async def test_empty_directory(self, tenant_store):
        results = await tenant_store.list_tenants(TenantSearchCriteria())
        assert results.results == []
        assert results.num_results == 0

    @pytest.mark.asyncio
    async def test_total_ignores_page_bounds(self, tenant_store, make_request):
        for i in range(5):
            await tenant_store.create_tenant(make_request(token=f"t{i}", name=f"Tenant {i}"))

        beyond = await tenant_store.list_tenants(TenantSearchCriteria(page_number=10, page_size=2))
        everything = await tenant_store.list_tenants(TenantSearchCriteria(page_number=1, page_size=0))

        assert beyond.results == []
        assert beyond.num_results == 5
        assert [t.name for t in everything.results] == [f"Tenant {i}" for i in range(5)]

    @pytest.mark.asyncio
    async def test_corrupt_record_aborts_listing(self, tenant_store, coordination_store, path_scheme, make_request):
        await tenant_store.create_tenant(make_request())
        broken_id = uuid4()
        await coordination_store.create(path_scheme.tenant_record_path(broken_id), b"{oops", make_parents=True)

        with pytest.raises(TenantDecodeError):
            await tenant_store.list_tenants(TenantSearchCriteria())

    @pytest.mark.asyncio
    async def test_foreign_child_segment_aborts_listing(self, tenant_store, coordination_store, path_scheme):
        await coordination_store.create(f"{path_scheme.tenants_root}/not-a-tenant", b"", make_parents=True)

        with pytest.raises(TenantDecodeError):
            await tenant_store.list_tenants(TenantSearchCriteria())


class TestTokenLookup:
    @pytest.mark.asyncio
    async def test_lookup_by_token(self, tenant_store, make_request):
        await tenant_store.create_tenant(make_request(token="globex", name="Globex"))
        acme = await tenant_store.create_tenant(make_request(token="acme", name="Acme"))

        assert await tenant_store.get_tenant_by_token("acme") == acme

    @pytest.mark.asyncio
    async def test_unknown_token_is_absent_not_error(self, tenant_store, make_request):
        await tenant_store.create_tenant(make_request(token="globex", name="Globex"))

        assert await tenant_store.get_tenant_by_token("acme") is None


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_returns_record_and_removes_subtree(
        self, tenant_store, coordination_store, path_scheme, make_request
    ):
        created = await tenant_store.create_tenant(make_request())
        nested = f"{path_scheme.tenant_node_path(created.id)}/engines/device-management"
        await coordination_store.create(nested, b"{}", make_parents=True)

        deleted = await tenant_store.delete_tenant(created.id)

        assert deleted == created
        assert await tenant_store.get_tenant(created.id) is None
        assert await coordination_store.exists(path_scheme.tenant_node_path(created.id)) is False
        assert await coordination_store.exists(nested) is False

    @pytest.mark.asyncio
    async def test_repeated_delete_is_not_found(self, tenant_store, make_request):
        created = await tenant_store.create_tenant(make_request())
        await tenant_store.delete_tenant(created.id)

        with pytest.raises(TenantNotFoundError):
            await tenant_store.delete_tenant(created.id)

    @pytest.mark.asyncio
    async def test_delete_leaves_other_tenants(self, tenant_store, make_request):
        keep = await tenant_store.create_tenant(make_request(token="keep", name="Keep"))
        drop = await tenant_store.create_tenant(make_request(token="drop", name="Drop"))

        await tenant_store.delete_tenant(drop.id)

        listing = await tenant_store.list_tenants(TenantSearchCriteria())
        assert [t.id for t in listing.results] == [keep.id]


class TestStoreFailures:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["exists", "create"])
    async def test_create_wraps_store_failure(self, tenant_store, coordination_store, make_request, operation):
        coordination_store.failing_operations.add(operation)

        with pytest.raises(StoreUnavailableError) as exc_info:
            await tenant_store.create_tenant(make_request())

        assert exc_info.value.operation == "create_tenant"
        assert exc_info.value.path.endswith("/tenant.json")

    @pytest.mark.asyncio
    async def test_get_wraps_store_failure(self, tenant_store, coordination_store):
        coordination_store.failing_operations.add("exists")

        with pytest.raises(StoreUnavailableError):
            await tenant_store.get_tenant(uuid4())

    @pytest.mark.asyncio
    async def test_list_wraps_store_failure(self, tenant_store, coordination_store, make_request):
        await tenant_store.create_tenant(make_request())
        coordination_store.failing_operations.add("get_children")

        with pytest.raises(StoreUnavailableError) as exc_info:
            await tenant_store.list_tenants(TenantSearchCriteria())
        assert exc_info.value.operation == "list_tenants"

    @pytest.mark.asyncio
    async def test_update_wraps_write_failure(self, tenant_store, coordination_store, make_request):
        created = await tenant_store.create_tenant(make_request())
        coordination_store.failing_operations.add("set_data")

        with pytest.raises(StoreUnavailableError):
            await tenant_store.update_tenant(created.id, TenantCreateRequest(name="Nope"))
        assert (await tenant_store.get_tenant(created.id)).name == "Acme"

    @pytest.mark.asyncio
    async def test_delete_wraps_store_failure(self, tenant_store, coordination_store, make_request):
        created = await tenant_store.create_tenant(make_request())
        coordination_store.failing_operations.add("delete")

        with pytest.raises(StoreUnavailableError):
            await tenant_store.delete_tenant(created.id)
        assert await tenant_store.get_tenant(created.id) == created

    @pytest.mark.asyncio
    async def test_initialize_surfaces_unreachable_store(self, tenant_store, coordination_store):
        coordination_store.failing_operations.add("exists")

        with pytest.raises(StoreUnavailableError):
            await tenant_store.initialize()


@pytest.mark.asyncio
async def test_update_after_concurrent_delete_is_not_found(tenant_store, coordination_store, path_scheme, make_request):
    created = await tenant_store.create_tenant(make_request())
    original_get = tenant_store.get_tenant

    async def get_then_vanish(tenant_id):
        tenant = await original_get(tenant_id)
        # Another process removes the tenant between the read and the write
        await coordination_store.delete(path_scheme.tenant_node_path(tenant_id), recursive=True)
        return tenant

    tenant_store.get_tenant = get_then_vanish
    with pytest.raises(TenantNotFoundError):
        await tenant_store.update_tenant(created.id, TenantCreateRequest(name="Late"))
