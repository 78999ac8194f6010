# tenant_directory/tenants/coordination_tenant_store.py
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional
from uuid import UUID

from ..coordination import (
    AbstractCoordinationStore,
    CoordinationStoreError,
    NoNodeError,
    NodeExistsError,
    get_coordination_store,
)
from .codec import decode_tenant, encode_tenant
from .errors import (
    DuplicateTenantError,
    StoreUnavailableError,
    TenantDirectoryError,
    TenantNotFoundError,
)
from .models import Tenant, TenantCreateRequest
from .paths import TenantPathScheme
from .persistence_logic import tenant_create_logic, tenant_update_logic
from .search import Pager, SearchResults, TenantSearchCriteria
from .storage_interfaces import AbstractTenantStore

logger = logging.getLogger(__name__)


@contextmanager
def _store_call(operation: str, path: str) -> Iterator[None]:
    """Wrap coordination store failures as StoreUnavailableError with operation and path context."""
    try:
        yield
    except TenantDirectoryError:
        raise
    except CoordinationStoreError as e:
        logger.error(f"Store: {operation} failed at '{path}': {e}")
        raise StoreUnavailableError(
            f"Coordination store call failed: {e}", operation=operation, path=path
        ) from e


class CoordinationTenantStore(AbstractTenantStore):
    """
    Tenant directory kept in a hierarchical coordination store.

    Every tenant owns the node '<tenants root>/<id>' and its record lives in
    the 'tenant.json' leaf below it. The tree is the source of truth: nothing
    is cached between calls and no locks are held, so every operation is a
    fresh sequence of store round trips.
    """

    def __init__(
        self,
        coordination_store: AbstractCoordinationStore,
        path_scheme: Optional[TenantPathScheme] = None,
        actor: Optional[str] = None,
    ):
        """
        Args:
            coordination_store: Tree the tenant records are kept in
            path_scheme: Layout of the tenant tree, defaults to the configured root
            actor: Recorded as created_by / updated_by on writes
        """
        self.coordination_store = coordination_store
        self.path_scheme = path_scheme or TenantPathScheme()
        self.actor = actor

    async def initialize(self) -> None:
        """Verify the store is reachable. The tenants root is created lazily by the first create."""
        root = self.path_scheme.tenants_root
        with _store_call("initialize", root):
            root_exists = await self.coordination_store.exists(root)
        logger.info(
            f"CoordinationTenantStore initialized. Tenants root '{root}' "
            f"{'present' if root_exists else 'not yet created'}."
        )

    async def teardown(self) -> None:
        """Clean up resources. The coordination store is managed globally so no action needed."""
        logger.info("CoordinationTenantStore teardown (coordination store managed globally).")

    async def create_tenant(self, request: TenantCreateRequest) -> Tenant:
        tenant = tenant_create_logic(request, created_by=self.actor)
        tenant_path = self.path_scheme.tenant_record_path(tenant.id)

        with _store_call("create_tenant", tenant_path):
            if await self.coordination_store.exists(tenant_path):
                raise DuplicateTenantError(
                    f"Tenant node for '{tenant.token}' already exists.", path=tenant_path
                )
            logger.debug(f"Store: Node for tenant '{tenant.token}' not found. Creating...")
            try:
                # Atomic create-if-absent, so a racing creator cannot be clobbered
                await self.coordination_store.create(tenant_path, encode_tenant(tenant), make_parents=True)
            except NodeExistsError as e:
                raise DuplicateTenantError(
                    f"Tenant node for '{tenant.token}' was created concurrently.", path=tenant_path
                ) from e

        logger.info(f"Store: Created tenant '{tenant.token}' with id '{tenant.id}'.")
        return tenant

    async def update_tenant(self, tenant_id: UUID, request: TenantCreateRequest) -> Tenant:
        current = await self.get_tenant(tenant_id)
        tenant_path = self.path_scheme.tenant_record_path(tenant_id)
        if current is None:
            raise TenantNotFoundError(
                f"Tenant '{tenant_id}' not found.", operation="update_tenant", path=tenant_path
            )

        updated = tenant_update_logic(request, current, updated_by=self.actor)
        with _store_call("update_tenant", tenant_path):
            try:
                await self.coordination_store.set_data(tenant_path, encode_tenant(updated))
            except NoNodeError as e:
                # Deleted by another process after the read
                raise TenantNotFoundError(
                    f"Tenant '{tenant_id}' not found.", operation="update_tenant", path=tenant_path
                ) from e

        logger.info(f"Store: Updated tenant '{tenant_id}'.")
        return updated

    async def get_tenant(self, tenant_id: UUID) -> Optional[Tenant]:
        tenant_path = self.path_scheme.tenant_record_path(tenant_id)
        with _store_call("get_tenant", tenant_path):
            if not await self.coordination_store.exists(tenant_path):
                return None
            try:
                content = await self.coordination_store.get_data(tenant_path)
            except NoNodeError:
                return None
        return decode_tenant(content, path=tenant_path)

    async def get_tenant_by_token(self, token: str) -> Optional[Tenant]:
        # No token index exists; tenant paths are keyed by id
        everything = await self.list_tenants(TenantSearchCriteria(page_number=1, page_size=0))
        for tenant in everything.results:
            if tenant.token == token:
                return tenant
        return None

    async def list_tenants(self, criteria: TenantSearchCriteria) -> SearchResults[Tenant]:
        pager: Pager[Tenant] = Pager(criteria)
        root = self.path_scheme.tenants_root

        with _store_call("list_tenants", root):
            try:
                children = await self.coordination_store.get_children(root)
            except NoNodeError:
                children = []

        tenants: List[Tenant] = []
        for child in children:
            tenant_id = self.path_scheme.id_from_child_segment(child)
            tenant = await self.get_tenant(tenant_id)
            if tenant is None:
                logger.debug(f"Store: Tenant '{child}' disappeared while listing. Skipping.")
                continue
            tenants.append(tenant)

        tenants.sort(key=lambda t: t.name)
        pager.process_all(tenants)
        return SearchResults[Tenant](results=pager.results, num_results=pager.total)

    async def delete_tenant(self, tenant_id: UUID) -> Tenant:
        tenant = await self.get_tenant(tenant_id)
        tenant_node = self.path_scheme.tenant_node_path(tenant_id)
        if tenant is None:
            raise TenantNotFoundError(
                f"Tenant '{tenant_id}' not found.", operation="delete_tenant", path=tenant_node
            )

        with _store_call("delete_tenant", tenant_node):
            try:
                await self.coordination_store.delete(tenant_node, recursive=True)
            except NoNodeError as e:
                raise TenantNotFoundError(
                    f"Tenant '{tenant_id}' not found.", operation="delete_tenant", path=tenant_node
                ) from e

        logger.info(f"Store: Deleted tenant '{tenant_id}' ('{tenant.token}').")
        return tenant


# Singleton instance management
_coordination_tenant_store_instance: Optional[CoordinationTenantStore] = None


async def get_coordination_tenant_store() -> CoordinationTenantStore:
    """
    Get or create the singleton CoordinationTenantStore instance.

    Ensures only one instance exists and is properly initialized.
    """
    global _coordination_tenant_store_instance
    if _coordination_tenant_store_instance is None:
        coordination_store = await get_coordination_store()
        _coordination_tenant_store_instance = CoordinationTenantStore(coordination_store)
        await _coordination_tenant_store_instance.initialize()
    return _coordination_tenant_store_instance
