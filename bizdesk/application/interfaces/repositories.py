"""Repository interfaces (ports) for the application layer.

Field dicts passed to create/update use the snake_case names of the API
schemas; repositories own the mapping to stored document keys.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from bizdesk.application.dtos.client import ClientResult
    from bizdesk.application.dtos.job import JobResult
    from bizdesk.application.dtos.user import TenantUserResult, UserProfileResult


class IClientRepository(Protocol):
    """Protocol for tenant-scoped client storage."""

    async def list_by_tenant(self, tenant_id: str) -> list[ClientResult]:
        """Return all clients of the tenant ordered by name."""

    async def get_by_id(self, tenant_id: str, client_id: str) -> ClientResult | None:
        """Return client by ID within the tenant."""

    async def create(
        self, tenant_id: str, created_by: str, fields: dict[str, Any]
    ) -> ClientResult:
        """Create a client with a generated ID and audit fields."""

    async def update(
        self, tenant_id: str, client_id: str, changes: dict[str, Any]
    ) -> ClientResult | None:
        """Apply changes and stamp updated_at; None if the client does not exist."""

    async def delete(self, tenant_id: str, client_id: str) -> None:
        """Delete the client document (no-op if missing)."""


class IJobRepository(Protocol):
    """Protocol for tenant-scoped job storage."""

    async def list_by_tenant(self, tenant_id: str) -> list[JobResult]:
        """Return all jobs of the tenant, newest first."""

    async def list_by_client(self, tenant_id: str, client_id: str) -> list[JobResult]:
        """Return the client's jobs, newest first."""

    async def get_by_id(self, tenant_id: str, job_id: str) -> JobResult | None:
        """Return job by ID within the tenant."""

    async def create(
        self, tenant_id: str, created_by: str, fields: dict[str, Any]
    ) -> JobResult:
        """Create a job with a generated ID and audit fields."""

    async def update(
        self, tenant_id: str, job_id: str, changes: dict[str, Any]
    ) -> JobResult | None:
        """Apply changes and stamp updated_at; None if the job does not exist."""

    async def delete(self, tenant_id: str, job_id: str) -> None:
        """Delete the job document (no-op if missing)."""


class ITenantRepository(Protocol):
    """Protocol for user profiles, tenants and tenant membership."""

    async def get_user_profile(self, uid: str) -> UserProfileResult | None:
        """Return users/{uid}."""

    async def get_tenant_user(self, tenant_id: str, uid: str) -> TenantUserResult | None:
        """Return tenants/{tenant_id}/users/{uid}."""

    async def create_owner(
        self,
        uid: str,
        email: str,
        tenant_id: str,
        tenant_name: str,
        display_name: str,
    ) -> None:
        """Create profile, tenant and owner membership in one atomic write."""
