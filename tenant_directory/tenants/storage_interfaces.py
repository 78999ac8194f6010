# tenant_directory/tenants/storage_interfaces.py
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from .models import Tenant, TenantCreateRequest
from .search import SearchResults, TenantSearchCriteria


class AbstractTenantStore(ABC):
    """
    Abstract base class defining the interface for tenant directory operations.

    Absence is reported as None by the lookups; update and delete raise
    TenantNotFoundError instead, since they cannot proceed without a record.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the storage backend and prepare it for operations."""
        pass

    @abstractmethod
    async def teardown(self) -> None:
        """Clean up resources and properly close the storage backend."""
        pass

    @abstractmethod
    async def create_tenant(self, request: TenantCreateRequest) -> Tenant:
        """
        Create a new tenant.

        Args:
            request: Tenant creation data

        Returns:
            The stored tenant including its assigned id

        Raises:
            DuplicateTenantError: If a node already exists at the tenant path
            InvalidTenantRequestError: If a required field is missing
            StoreUnavailableError: If the store call fails
        """
        pass

    @abstractmethod
    async def update_tenant(self, tenant_id: UUID, request: TenantCreateRequest) -> Tenant:
        """
        Merge a request onto an existing tenant and write the whole record back.

        Raises:
            TenantNotFoundError: If the tenant does not exist
            StoreUnavailableError: If the store call fails
        """
        pass

    @abstractmethod
    async def get_tenant(self, tenant_id: UUID) -> Optional[Tenant]:
        """Retrieve a tenant by id, or None if it does not exist."""
        pass

    @abstractmethod
    async def get_tenant_by_token(self, token: str) -> Optional[Tenant]:
        """Retrieve a tenant by token, or None if no tenant carries it."""
        pass

    @abstractmethod
    async def list_tenants(self, criteria: TenantSearchCriteria) -> SearchResults[Tenant]:
        """
        Retrieve one page of tenants sorted by name.

        Returns:
            The requested page and the total number of tenants
        """
        pass

    @abstractmethod
    async def delete_tenant(self, tenant_id: UUID) -> Tenant:
        """
        Remove a tenant and everything nested under its node.

        Returns:
            The deleted tenant record

        Raises:
            TenantNotFoundError: If the tenant does not exist
        """
        pass
