# tests/conftest.py
import logging
import os
from typing import Callable, Set

import pytest

from tenant_directory.coordination import CoordinationConnectionError, InMemoryCoordinationStore
from tenant_directory.tenants import (
    CoordinationTenantStore,
    TenantCreateRequest,
    TenantPathScheme,
    TenantService,
)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
)

TEST_TENANTS_ROOT = "/tenant-directory/test-instance/config/tenants"


class FlakyCoordinationStore(InMemoryCoordinationStore):
    """In-memory tree that raises connection errors for the operations named in failing_operations."""

    def __init__(self):
        super().__init__()
        self.failing_operations: Set[str] = set()
        self.mutations = 0

    def _maybe_fail(self, operation: str, path: str) -> None:
        if operation in self.failing_operations:
            raise CoordinationConnectionError(
                f"Simulated connection loss during {operation}.", path=path, operation=operation
            )

    async def exists(self, path):
        self._maybe_fail("exists", path)
        return await super().exists(path)

    async def get_data(self, path):
        self._maybe_fail("get_data", path)
        return await super().get_data(path)

    async def create(self, path, data=b"", make_parents=False):
        self._maybe_fail("create", path)
        result = await super().create(path, data, make_parents)
        self.mutations += 1
        return result

    async def set_data(self, path, data):
        self._maybe_fail("set_data", path)
        await super().set_data(path, data)
        self.mutations += 1

    async def delete(self, path, recursive=False):
        self._maybe_fail("delete", path)
        await super().delete(path, recursive)
        self.mutations += 1

    async def get_children(self, path):
        self._maybe_fail("get_children", path)
        return await super().get_children(path)


@pytest.fixture
def coordination_store() -> FlakyCoordinationStore:
    return FlakyCoordinationStore()


@pytest.fixture
def path_scheme() -> TenantPathScheme:
    return TenantPathScheme(TEST_TENANTS_ROOT)


@pytest.fixture
def tenant_store(coordination_store, path_scheme) -> CoordinationTenantStore:
    return CoordinationTenantStore(coordination_store, path_scheme=path_scheme, actor="pytest")


@pytest.fixture
def service(tenant_store) -> TenantService:
    return TenantService(tenant_store)


@pytest.fixture
def make_request() -> Callable[..., TenantCreateRequest]:
    """Factory for valid create requests; keyword arguments override the defaults."""

    def _make(**overrides) -> TenantCreateRequest:
        values = {
            "token": "acme",
            "name": "Acme",
            "authentication_token": "acme-auth",
            "configuration_template_id": "default",
            "dataset_template_id": "empty",
        }
        values.update(overrides)
        return TenantCreateRequest(**values)

    return _make
