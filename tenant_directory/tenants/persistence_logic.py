# tenant_directory/tenants/persistence_logic.py
import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from .errors import InvalidTenantRequestError
from .models import Tenant, TenantCreateRequest

logger = logging.getLogger(__name__)

# Fields every new tenant must carry
REQUIRED_CREATE_FIELDS = ("name", "authentication_token", "configuration_template_id", "dataset_template_id")

_BRANDING_FIELDS = ("background_color", "foreground_color", "border_color", "icon", "image_url")


def _require(request: TenantCreateRequest, field: str, operation: str) -> str:
    value = getattr(request, field)
    if value is None or not str(value).strip():
        raise InvalidTenantRequestError(f"Field '{field}' is required.", operation=operation)
    return value


def tenant_create_logic(request: TenantCreateRequest, created_by: Optional[str] = None) -> Tenant:
    """
    Build a new Tenant from a create request.

    A fresh id is always assigned; a missing token defaults to a random one.

    Raises:
        InvalidTenantRequestError: If a required field is missing or the token is blank
    """
    values = {field: _require(request, field, "create_tenant") for field in REQUIRED_CREATE_FIELDS}

    if request.token is not None and not request.token.strip():
        raise InvalidTenantRequestError("Field 'token' must not be blank.", operation="create_tenant")
    token = request.token if request.token is not None else str(uuid4())

    return Tenant(
        id=uuid4(),
        token=token,
        authorized_user_ids=list(request.authorized_user_ids or []),
        metadata=dict(request.metadata or {}),
        created_date=datetime.now(timezone.utc),
        created_by=created_by,
        **values,
        **{field: getattr(request, field) for field in _BRANDING_FIELDS},
    )


def tenant_update_logic(request: TenantCreateRequest, target: Tenant, updated_by: Optional[str] = None) -> Tenant:
    """
    Merge an update request onto a copy of an existing tenant.

    Fields left as None in the request keep their current value. The id and
    creation metadata never change. The target itself is not modified.
    """
    updated = target.model_copy(deep=True)
    changes = request.model_dump(exclude_none=True)

    for field in ("token",) + REQUIRED_CREATE_FIELDS:
        if field in changes and not str(changes[field]).strip():
            raise InvalidTenantRequestError(f"Field '{field}' must not be blank.", operation="update_tenant")

    for field, value in changes.items():
        setattr(updated, field, value)

    updated.updated_date = datetime.now(timezone.utc)
    updated.updated_by = updated_by
    logger.debug(f"Merged fields {sorted(changes)} onto tenant '{target.id}'.")
    return updated
