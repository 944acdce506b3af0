"""User profile and tenant membership schemas."""

from pydantic import BaseModel

from bizdesk.domain.enums import TenantRole


class CurrentUserResponse(BaseModel):
    """Caller's profile: uid, email, tenant and role in that tenant."""

    uid: str
    email: str
    tenant_id: str
    role: TenantRole


class InitializeUserResponse(BaseModel):
    """Result of POST /users/initialize."""

    uid: str
    tenant_id: str
    created: bool
