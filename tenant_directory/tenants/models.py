# tenant_directory/tenants/models.py
from pydantic import BaseModel, Field
from typing import Optional, Dict, List
from datetime import datetime
from uuid import UUID


class TenantBranding(BaseModel):
    """Presentation fields shared by tenants and tenant requests."""
    background_color: Optional[str] = None
    foreground_color: Optional[str] = None
    border_color: Optional[str] = None
    icon: Optional[str] = None
    image_url: Optional[str] = None


class TenantCreateRequest(TenantBranding):
    """
    Request used both to create a tenant and to update one.

    Every field is optional at the type level. Required fields are enforced
    when a tenant is created; on update a field left as None keeps its
    current value.
    """
    token: Optional[str] = Field(
        default=None,
        description="Unique external identifier. A random one is assigned on create when omitted."
    )
    name: Optional[str] = None
    authentication_token: Optional[str] = None
    authorized_user_ids: Optional[List[str]] = None
    configuration_template_id: Optional[str] = None
    dataset_template_id: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None


class Tenant(TenantBranding):
    """Tenant record as persisted in the coordination store."""
    id: UUID
    token: str
    name: str
    authentication_token: str
    authorized_user_ids: List[str] = Field(default_factory=list)
    configuration_template_id: str
    dataset_template_id: str
    metadata: Dict[str, str] = Field(default_factory=dict)
    created_date: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_date: Optional[datetime] = None
    updated_by: Optional[str] = None
