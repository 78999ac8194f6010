# tenant_directory/tenants/__init__.py
"""
Tenant directory module initialization.

This module provides the tenant data models, the path layout of the tenant
tree, the record codec, the coordination-store-backed directory and the
service layer used by in-process callers and the CLI.
"""

from .models import Tenant, TenantBranding, TenantCreateRequest
from .errors import (
    TenantDirectoryError,
    DuplicateTenantError,
    TenantNotFoundError,
    StoreUnavailableError,
    TenantDecodeError,
    InvalidTenantRequestError,
)
from .search import TenantSearchCriteria, SearchResults, Pager
from .paths import TenantPathScheme, TENANT_JSON
from .codec import encode_tenant, decode_tenant
from .storage_interfaces import AbstractTenantStore
from .coordination_tenant_store import CoordinationTenantStore, get_coordination_tenant_store
from .service import TenantService

# Export all public components for external use
__all__ = [
    # Data models
    "Tenant",
    "TenantBranding",
    "TenantCreateRequest",
    "TenantSearchCriteria",
    "SearchResults",
    "Pager",
    # Errors
    "TenantDirectoryError",
    "DuplicateTenantError",
    "TenantNotFoundError",
    "StoreUnavailableError",
    "TenantDecodeError",
    "InvalidTenantRequestError",
    # Tree layout and record format
    "TenantPathScheme",
    "TENANT_JSON",
    "encode_tenant",
    "decode_tenant",
    # Directory abstractions and implementation
    "AbstractTenantStore",
    "CoordinationTenantStore",
    "get_coordination_tenant_store",
    # Business logic service
    "TenantService",
]
