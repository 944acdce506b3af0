"""Firestore-backed client repository (implements IClientRepository).

Documents live at tenants/{tenantId}/clients/{clientId}.
"""

from __future__ import annotations

from typing import Any

from bizdesk.application.dtos.client import ClientResult
from bizdesk.infrastructure.firebase._rest_client import (
    CollectionReference,
    FirestoreRESTClient,
)
from bizdesk.infrastructure.firebase.collections import (
    SUBCOLLECTION_CLIENTS,
    tenant_collection,
)
from bizdesk.infrastructure.firebase.repositories._mapping import (
    AUDIT_FIELD_KEYS,
    from_document,
    to_document,
)
from bizdesk.shared.utils.datetime import utc_now

CLIENT_FIELD_KEYS: dict[str, str] = {
    "name": "name",
    "email": "email",
    "phone": "phone",
    "abn": "abn",
    "address": "address",
    "contacts": "contacts",
    "notes": "notes",
    "is_active": "isActive",
}


def _to_result(doc_id: str, data: dict[str, Any], tenant_id: str) -> ClientResult:
    fields = from_document(data, {**CLIENT_FIELD_KEYS, **AUDIT_FIELD_KEYS})
    fields["tenant_id"] = fields.get("tenant_id") or tenant_id
    fields.setdefault("name", "")
    fields["contacts"] = fields.get("contacts") or []
    fields["is_active"] = bool(fields.get("is_active", True))
    fields["created_by"] = fields.get("created_by") or ""
    return ClientResult(id=doc_id, **fields)


class FirestoreClientRepository:
    """Client repository using Firestore subcollections per tenant."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    def _coll(self, tenant_id: str) -> CollectionReference:
        return self._client.collection(tenant_collection(tenant_id, SUBCOLLECTION_CLIENTS))

    async def list_by_tenant(self, tenant_id: str) -> list[ClientResult]:
        """Return all clients ordered by name (server-side order)."""
        q = self._coll(tenant_id).order_by("name", "asc")
        return [_to_result(s.id, s.to_dict(), tenant_id) async for s in q.stream()]

    async def get_by_id(self, tenant_id: str, client_id: str) -> ClientResult | None:
        doc = await self._coll(tenant_id).document(client_id).get()
        if not doc:
            return None
        return _to_result(doc.id, doc.to_dict(), tenant_id)

    async def create(
        self, tenant_id: str, created_by: str, fields: dict[str, Any]
    ) -> ClientResult:
        """Create with a generated ID; tenantId, createdBy and timestamps are set here."""
        now = utc_now()
        data = to_document(fields, CLIENT_FIELD_KEYS)
        data.update(
            {
                "tenantId": tenant_id,
                "createdBy": created_by,
                "createdAt": now,
                "updatedAt": now,
            }
        )
        ref = await self._coll(tenant_id).add(data)
        return _to_result(ref.id, data, tenant_id)

    async def update(
        self, tenant_id: str, client_id: str, changes: dict[str, Any]
    ) -> ClientResult | None:
        """Update given fields and updatedAt; None if the client does not exist."""
        data = to_document(changes, CLIENT_FIELD_KEYS)
        data["updatedAt"] = utc_now()
        ref = self._coll(tenant_id).document(client_id)
        if not await ref.update(data):
            return None
        return await self.get_by_id(tenant_id, client_id)

    async def delete(self, tenant_id: str, client_id: str) -> None:
        await self._coll(tenant_id).document(client_id).delete()
