# tenant_directory/tenants/codec.py
from typing import Optional

from pydantic import ValidationError

from .errors import TenantDecodeError
from .models import Tenant


def encode_tenant(tenant: Tenant) -> bytes:
    """Serialize a tenant as pretty-printed JSON for storage at its record node."""
    return tenant.model_dump_json(indent=2).encode("utf-8")


def decode_tenant(content: bytes, path: Optional[str] = None) -> Tenant:
    """
    Parse a stored payload back into a Tenant.

    Raises:
        TenantDecodeError: If the payload is not valid UTF-8 JSON for a Tenant
    """
    try:
        return Tenant.model_validate_json(content.decode("utf-8"))
    except (UnicodeDecodeError, ValidationError) as e:
        raise TenantDecodeError(
            f"Stored tenant payload could not be parsed: {e}",
            operation="decode_tenant",
            path=path,
        ) from e
