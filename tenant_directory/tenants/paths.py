# tenant_directory/tenants/paths.py
from typing import Optional
from uuid import UUID

from ..coordination.paths import join_path, normalize_path
from ..settings import settings as directory_settings
from .errors import TenantDecodeError

# Leaf under each tenant node holding the serialized record
TENANT_JSON = "tenant.json"


class TenantPathScheme:
    """
    Maps tenant ids onto the tenant tree.

    Paths depend on the id alone, so a tenant keeps its node when its token
    or name changes.
    """

    def __init__(self, tenants_root: Optional[str] = None):
        self.tenants_root = normalize_path(tenants_root or directory_settings.tenants_configuration_path)

    def tenant_node_path(self, tenant_id: UUID) -> str:
        return join_path(self.tenants_root, str(tenant_id))

    def tenant_record_path(self, tenant_id: UUID) -> str:
        return join_path(self.tenant_node_path(tenant_id), TENANT_JSON)

    def id_from_child_segment(self, segment: str) -> UUID:
        try:
            return UUID(segment)
        except (ValueError, TypeError, AttributeError) as e:
            raise TenantDecodeError(
                f"Child segment '{segment}' is not a tenant id.",
                operation="list_tenants",
                path=f"{self.tenants_root}/{segment}",
            ) from e
