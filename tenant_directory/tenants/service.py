# tenant_directory/tenants/service.py
import logging
from typing import Optional
from uuid import UUID

from .errors import DuplicateTenantError, InvalidTenantRequestError, TenantNotFoundError
from .models import Tenant, TenantCreateRequest
from .search import SearchResults, TenantSearchCriteria
from .storage_interfaces import AbstractTenantStore

logger = logging.getLogger(__name__)


class TenantService:
    """
    Service layer for tenant management operations.

    Logs each request and delegates to the tenant directory. Errors from the
    directory are logged and propagated unchanged; nothing is retried.
    """

    def __init__(self, tenant_store: AbstractTenantStore):
        """Initialize the service with a tenant directory implementation."""
        self.tenant_store = tenant_store

    async def create_tenant(self, request: TenantCreateRequest) -> Tenant:
        logger.info(f"Service: Attempting to create tenant with token: {request.token}")
        try:
            return await self.tenant_store.create_tenant(request)
        except (DuplicateTenantError, InvalidTenantRequestError) as e:
            logger.warning(f"Service: Tenant creation failed for token '{request.token}': {e}")
            raise

    async def get_tenant(self, tenant_id: UUID) -> Optional[Tenant]:
        """Retrieve a specific tenant by id."""
        logger.info(f"Service: Getting tenant with id: {tenant_id}")
        return await self.tenant_store.get_tenant(tenant_id)

    async def get_tenant_by_token(self, token: str) -> Optional[Tenant]:
        """
        Retrieve a tenant by its token.

        Scans every tenant, so the cost grows with the size of the directory.
        """
        logger.info(f"Service: Getting tenant with token: {token}")
        return await self.tenant_store.get_tenant_by_token(token)

    async def list_tenants(self, page_number: int = 1, page_size: int = 100) -> SearchResults[Tenant]:
        """Retrieve one page of tenants sorted by name."""
        logger.info(f"Service: Listing tenants with page_number: {page_number}, page_size: {page_size}")
        criteria = TenantSearchCriteria(page_number=page_number, page_size=page_size)
        return await self.tenant_store.list_tenants(criteria)

    async def update_tenant(self, tenant_id: UUID, request: TenantCreateRequest) -> Tenant:
        logger.info(f"Service: Updating tenant with id: {tenant_id}")
        try:
            return await self.tenant_store.update_tenant(tenant_id, request)
        except TenantNotFoundError as e:
            logger.warning(f"Service: Tenant update failed for id '{tenant_id}': {e}")
            raise

    async def delete_tenant(self, tenant_id: UUID) -> Tenant:
        logger.info(f"Service: Deleting tenant with id: {tenant_id}")
        try:
            return await self.tenant_store.delete_tenant(tenant_id)
        except TenantNotFoundError as e:
            logger.warning(f"Service: Tenant deletion failed for id '{tenant_id}': {e}")
            raise
