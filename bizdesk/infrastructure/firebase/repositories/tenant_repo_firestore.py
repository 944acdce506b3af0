"""Firestore-backed tenant/user-profile repository (implements ITenantRepository)."""

from __future__ import annotations

from bizdesk.application.dtos.user import TenantUserResult, UserProfileResult
from bizdesk.domain.enums import TenantRole
from bizdesk.domain.exceptions import ResourceAlreadyExistsException
from bizdesk.infrastructure.exceptions import DocumentExistsError
from bizdesk.infrastructure.firebase._rest_client import FirestoreRESTClient
from bizdesk.infrastructure.firebase.collections import (
    COLLECTION_TENANTS,
    COLLECTION_USERS,
    SUBCOLLECTION_TENANT_USERS,
    tenant_collection,
)
from bizdesk.shared.utils.datetime import utc_now


class FirestoreTenantRepository:
    """users/{uid}, tenants/{tenantId} and tenants/{tenantId}/users/{uid}."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    async def get_user_profile(self, uid: str) -> UserProfileResult | None:
        doc = await self._client.collection(COLLECTION_USERS).document(uid).get()
        if not doc:
            return None
        d = doc.to_dict()
        return UserProfileResult(
            uid=d.get("uid") or doc.id,
            email=d.get("email", ""),
            tenant_id=d.get("tenantId", ""),
            created_at=d.get("createdAt"),
        )

    async def get_tenant_user(self, tenant_id: str, uid: str) -> TenantUserResult | None:
        coll = self._client.collection(
            tenant_collection(tenant_id, SUBCOLLECTION_TENANT_USERS)
        )
        doc = await coll.document(uid).get()
        if not doc:
            return None
        d = doc.to_dict()
        return TenantUserResult(
            uid=d.get("uid") or doc.id,
            email=d.get("email", ""),
            role=TenantRole(d.get("role", TenantRole.STAFF.value)),
            display_name=d.get("displayName"),
        )

    async def create_owner(
        self,
        uid: str,
        email: str,
        tenant_id: str,
        tenant_name: str,
        display_name: str,
    ) -> None:
        """Write profile, tenant and owner membership in a single commit.

        Every write is create-only, so a concurrent initialization of the same
        user fails as a whole.

        Raises:
            ResourceAlreadyExistsException: One of the documents already exists.
        """
        now = utc_now()
        membership_path = f"{tenant_collection(tenant_id, SUBCOLLECTION_TENANT_USERS)}/{uid}"
        writes = [
            {
                "path": f"{COLLECTION_USERS}/{uid}",
                "create": True,
                "data": {"uid": uid, "email": email, "tenantId": tenant_id, "createdAt": now},
            },
            {
                "path": f"{COLLECTION_TENANTS}/{tenant_id}",
                "create": True,
                "data": {"id": tenant_id, "name": tenant_name, "createdAt": now, "createdBy": uid},
            },
            {
                "path": membership_path,
                "create": True,
                "data": {
                    "uid": uid,
                    "email": email,
                    "role": TenantRole.OWNER.value,
                    "displayName": display_name,
                    "joinedAt": now,
                },
            },
        ]
        try:
            await self._client.batch_write(writes)
        except DocumentExistsError as e:
            raise ResourceAlreadyExistsException("tenant", tenant_id) from e
