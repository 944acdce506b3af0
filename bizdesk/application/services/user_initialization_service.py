"""First-login tenant setup and resolution of the caller's tenant."""

from __future__ import annotations

import logging

from bizdesk.application.dtos.user import CurrentUser, UserInitializationResult
from bizdesk.application.interfaces.repositories import ITenantRepository
from bizdesk.domain.exceptions import AuthorizationException, TenantNotFoundException

logger = logging.getLogger(__name__)


def tenant_id_for_user(uid: str) -> str:
    """Tenant created for a signing-up user (unique because uid is)."""
    return f"tenant_{uid}"


def default_names(email: str) -> tuple[str, str]:
    """Return (tenant_name, display_name) derived from the email's local part."""
    local = email.split("@")[0]
    return f"{local}'s Business", local


class UserInitializationService:
    """Creates a tenant for new users and resolves tenant/role for existing ones."""

    def __init__(self, tenant_repo: ITenantRepository) -> None:
        self._repo = tenant_repo

    async def initialize_new_user(self, uid: str, email: str) -> UserInitializationResult:
        """Create users/{uid}, tenants/tenant_{uid} and the owner membership.

        Idempotent: a user who already has a profile keeps their tenant and
        nothing is written.
        """
        existing = await self._repo.get_user_profile(uid)
        if existing is not None:
            logger.info("User %s already initialized (tenant %s)", uid, existing.tenant_id)
            return UserInitializationResult(uid=uid, tenant_id=existing.tenant_id, created=False)
        tenant_id = tenant_id_for_user(uid)
        tenant_name, display_name = default_names(email)
        await self._repo.create_owner(
            uid=uid,
            email=email,
            tenant_id=tenant_id,
            tenant_name=tenant_name,
            display_name=display_name,
        )
        logger.info("Initialized user %s with tenant %s", uid, tenant_id)
        return UserInitializationResult(uid=uid, tenant_id=tenant_id, created=True)

    async def resolve_current_user(self, uid: str, email: str) -> CurrentUser:
        """Look up the caller's tenant and role.

        Raises:
            TenantNotFoundException: The user has no profile (not initialized).
            AuthorizationException: The profile's tenant has no membership for the user.
        """
        profile = await self._repo.get_user_profile(uid)
        if profile is None or not profile.tenant_id:
            logger.warning("No user profile for %s", uid)
            raise TenantNotFoundException(f"user:{uid}")
        membership = await self._repo.get_tenant_user(profile.tenant_id, uid)
        if membership is None:
            logger.warning("User %s is not a member of tenant %s", uid, profile.tenant_id)
            raise AuthorizationException("tenant", "access")
        return CurrentUser(
            uid=uid,
            email=profile.email or email,
            tenant_id=profile.tenant_id,
            role=membership.role,
        )
