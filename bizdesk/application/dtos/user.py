"""DTOs for user profiles and tenant membership."""

from dataclasses import dataclass
from datetime import datetime

from bizdesk.domain.enums import TenantRole


@dataclass(frozen=True)
class UserProfileResult:
    """users/{uid}: maps a Firebase user to their tenant."""

    uid: str
    email: str
    tenant_id: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class TenantUserResult:
    """tenants/{tenantId}/users/{uid}: role within the tenant."""

    uid: str
    email: str
    role: TenantRole
    display_name: str | None = None


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated caller with resolved tenant (request-scoped)."""

    uid: str
    email: str
    tenant_id: str
    role: TenantRole


@dataclass(frozen=True)
class UserInitializationResult:
    uid: str
    tenant_id: str
    created: bool
