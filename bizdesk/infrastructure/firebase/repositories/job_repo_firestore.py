"""Firestore-backed job repository (implements IJobRepository).

Documents live at tenants/{tenantId}/jobs/{jobId}.
"""

from __future__ import annotations

from typing import Any

from bizdesk.application.dtos.job import JobResult
from bizdesk.domain.enums import JobStatus
from bizdesk.infrastructure.firebase._rest_client import (
    CollectionReference,
    FirestoreRESTClient,
)
from bizdesk.infrastructure.firebase.collections import (
    SUBCOLLECTION_JOBS,
    tenant_collection,
)
from bizdesk.infrastructure.firebase.repositories._mapping import (
    AUDIT_FIELD_KEYS,
    from_document,
    to_document,
)
from bizdesk.shared.utils.datetime import utc_now

JOB_FIELD_KEYS: dict[str, str] = {
    "client_id": "clientId",
    "title": "title",
    "reference": "reference",
    "description": "description",
    "status": "status",
    "start_date": "startDate",
    "end_date": "endDate",
    "default_daily_hours": "defaultDailyHours",
}


def _to_result(doc_id: str, data: dict[str, Any], tenant_id: str) -> JobResult:
    fields = from_document(data, {**JOB_FIELD_KEYS, **AUDIT_FIELD_KEYS})
    fields["tenant_id"] = fields.get("tenant_id") or tenant_id
    fields.setdefault("client_id", "")
    fields.setdefault("title", "")
    fields["status"] = JobStatus(fields.get("status") or JobStatus.ACTIVE.value)
    hours = fields.get("default_daily_hours")
    if hours is not None:
        fields["default_daily_hours"] = float(hours)
    fields["created_by"] = fields.get("created_by") or ""
    return JobResult(id=doc_id, **fields)


class FirestoreJobRepository:
    """Job repository using Firestore subcollections per tenant."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    def _coll(self, tenant_id: str) -> CollectionReference:
        return self._client.collection(tenant_collection(tenant_id, SUBCOLLECTION_JOBS))

    async def list_by_tenant(self, tenant_id: str) -> list[JobResult]:
        q = self._coll(tenant_id).order_by("createdAt", "desc")
        return [_to_result(s.id, s.to_dict(), tenant_id) async for s in q.stream()]

    async def list_by_client(self, tenant_id: str, client_id: str) -> list[JobResult]:
        """Jobs for one client, newest first (needs a clientId+createdAt composite index)."""
        q = (
            self._coll(tenant_id)
            .where("clientId", "==", client_id)
            .order_by("createdAt", "desc")
        )
        return [_to_result(s.id, s.to_dict(), tenant_id) async for s in q.stream()]

    async def get_by_id(self, tenant_id: str, job_id: str) -> JobResult | None:
        doc = await self._coll(tenant_id).document(job_id).get()
        if not doc:
            return None
        return _to_result(doc.id, doc.to_dict(), tenant_id)

    async def create(
        self, tenant_id: str, created_by: str, fields: dict[str, Any]
    ) -> JobResult:
        now = utc_now()
        data = to_document(fields, JOB_FIELD_KEYS)
        data.setdefault("startDate", None)
        data.setdefault("endDate", None)
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
        self, tenant_id: str, job_id: str, changes: dict[str, Any]
    ) -> JobResult | None:
        data = to_document(changes, JOB_FIELD_KEYS)
        data["updatedAt"] = utc_now()
        ref = self._coll(tenant_id).document(job_id)
        if not await ref.update(data):
            return None
        return await self.get_by_id(tenant_id, job_id)

    async def delete(self, tenant_id: str, job_id: str) -> None:
        await self._coll(tenant_id).document(job_id).delete()
