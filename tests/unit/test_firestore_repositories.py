"""Firestore repositories against httpx.MockTransport: document keys and paths."""

import json

import httpx
import pytest

from bizdesk.domain.enums import JobStatus, TenantRole
from bizdesk.domain.exceptions import ResourceAlreadyExistsException
from bizdesk.infrastructure.exceptions import InvalidDocumentIdError
from bizdesk.infrastructure.firebase._rest_client import FirestoreRESTClient
from bizdesk.infrastructure.firebase._rest_encoding import encode_document
from bizdesk.infrastructure.firebase.repositories import (
    FirestoreClientRepository,
    FirestoreJobRepository,
    FirestoreTenantRepository,
)
from bizdesk.infrastructure.firebase.repositories._mapping import to_document

DOCS = "projects/demo-project/databases/(default)/documents"


def firestore(handler) -> tuple[FirestoreRESTClient, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = FirestoreRESTClient(
        "demo-project", http_client=httpx.AsyncClient(transport=httpx.MockTransport(record))
    )
    client.connect_emulator("localhost:8080")
    return client, seen


def stored(path: str, data: dict) -> dict:
    return {"name": f"{DOCS}/{path}", **encode_document(data)}


async def test_client_create_writes_camel_case_document() -> None:
    db, seen = firestore(lambda r: httpx.Response(200, json={}))
    repo = FirestoreClientRepository(db)
    result = await repo.create(
        "t1",
        "u1",
        {"name": "Acme", "email": None, "is_active": True, "contacts": [], "address": None},
    )
    request = seen[0]
    assert request.url.path.endswith(f"{DOCS}/tenants/t1/clients")
    fields = json.loads(request.content)["fields"]
    assert fields["tenantId"] == {"stringValue": "t1"}
    assert fields["createdBy"] == {"stringValue": "u1"}
    assert fields["isActive"] == {"booleanValue": True}
    assert "timestampValue" in fields["createdAt"]
    assert fields["createdAt"] == fields["updatedAt"]
    assert result.id == request.url.params["documentId"]
    assert result.tenant_id == "t1" and result.created_by == "u1"


async def test_client_get_maps_document_to_result() -> None:
    doc = stored(
        "tenants/t1/clients/c1",
        {
            "tenantId": "t1",
            "name": "Acme",
            "isActive": False,
            "address": {"city": "Hobart", "postcode": "7000"},
            "contacts": [{"name": "Ann"}],
            "createdBy": "u1",
        },
    )
    db, _ = firestore(lambda r: httpx.Response(200, json=doc))
    client = await FirestoreClientRepository(db).get_by_id("t1", "c1")
    assert client.id == "c1"
    assert client.is_active is False
    assert client.address == {"city": "Hobart", "postcode": "7000"}
    assert client.contacts == [{"name": "Ann"}]


async def test_minimal_documents_take_tenant_from_path() -> None:
    client_doc = stored("tenants/t1/clients/c1", {"name": "Acme"})
    db, _ = firestore(lambda r: httpx.Response(200, json=client_doc))
    client = await FirestoreClientRepository(db).get_by_id("t1", "c1")
    assert (client.tenant_id, client.created_by, client.contacts) == ("t1", "", [])

    job_doc = stored("tenants/t1/jobs/j1", {"clientId": "c1", "title": "Fit-out"})
    db, _ = firestore(lambda r: httpx.Response(200, json=job_doc))
    job = await FirestoreJobRepository(db).get_by_id("t1", "j1")
    assert job.tenant_id == "t1"
    assert job.status is JobStatus.ACTIVE


async def test_lookup_cannot_leave_the_tenant_collection() -> None:
    db, seen = firestore(lambda r: httpx.Response(200, json={}))
    with pytest.raises(InvalidDocumentIdError):
        await FirestoreClientRepository(db).get_by_id("t1", "../../t2/clients/c1")
    assert seen == []


async def test_client_list_orders_by_name() -> None:
    rows = [{"document": stored("tenants/t1/clients/c1", {"name": "Acme", "tenantId": "t1"})}]
    db, seen = firestore(lambda r: httpx.Response(200, json=rows))
    clients = await FirestoreClientRepository(db).list_by_tenant("t1")
    assert [c.name for c in clients] == ["Acme"]
    query = json.loads(seen[0].content)["structuredQuery"]
    assert query["orderBy"] == [{"field": {"fieldPath": "name"}, "direction": "ASCENDING"}]


async def test_client_update_missing_returns_none() -> None:
    db, seen = firestore(lambda r: httpx.Response(404, json={}))
    assert await FirestoreClientRepository(db).update("t1", "c1", {"is_active": False}) is None
    assert seen[0].url.params.get_list("updateMask.fieldPaths") == ["isActive", "updatedAt"]


async def test_job_list_by_client_filters_and_orders_newest_first() -> None:
    row = {
        "document": stored(
            "tenants/t1/jobs/j1",
            {"tenantId": "t1", "clientId": "c1", "title": "Fit-out", "status": "completed",
             "defaultDailyHours": 8},
        )
    }
    db, seen = firestore(lambda r: httpx.Response(200, json=[row]))
    jobs = await FirestoreJobRepository(db).list_by_client("t1", "c1")
    assert jobs[0].status is JobStatus.COMPLETED
    assert jobs[0].default_daily_hours == 8.0
    query = json.loads(seen[0].content)["structuredQuery"]
    assert query["where"]["fieldFilter"]["field"] == {"fieldPath": "clientId"}
    assert query["orderBy"][0]["direction"] == "DESCENDING"


async def test_job_update_encodes_status_value() -> None:
    doc = stored("tenants/t1/jobs/j1", {"tenantId": "t1", "clientId": "c1", "title": "X", "status": "archived"})
    db, seen = firestore(lambda r: httpx.Response(200, json=doc))
    job = await FirestoreJobRepository(db).update("t1", "j1", {"status": JobStatus.ARCHIVED})
    assert job.status is JobStatus.ARCHIVED
    assert json.loads(seen[0].content)["fields"]["status"] == {"stringValue": "archived"}


async def test_tenant_create_owner_commits_three_create_only_writes() -> None:
    db, seen = firestore(lambda r: httpx.Response(200, json={"writeResults": []}))
    await FirestoreTenantRepository(db).create_owner(
        uid="u1", email="jane@x.com", tenant_id="tenant_u1",
        tenant_name="jane's Business", display_name="jane",
    )
    writes = json.loads(seen[0].content)["writes"]
    names = [w["update"]["name"].removeprefix(f"{DOCS}/") for w in writes]
    assert names == ["users/u1", "tenants/tenant_u1", "tenants/tenant_u1/users/u1"]
    assert all(w["currentDocument"] == {"exists": False} for w in writes)
    assert writes[2]["update"]["fields"]["role"] == {"stringValue": "owner"}
    assert writes[0]["update"]["fields"]["tenantId"] == {"stringValue": "tenant_u1"}


async def test_tenant_create_owner_conflict_raises() -> None:
    db, _ = firestore(lambda r: httpx.Response(409, json={}))
    with pytest.raises(ResourceAlreadyExistsException):
        await FirestoreTenantRepository(db).create_owner("u1", "e", "tenant_u1", "n", "d")


async def test_tenant_user_lookup() -> None:
    doc = stored("tenants/t1/users/u1", {"uid": "u1", "email": "e", "role": "owner", "displayName": "Jane"})
    db, seen = firestore(lambda r: httpx.Response(200, json=doc))
    member = await FirestoreTenantRepository(db).get_tenant_user("t1", "u1")
    assert member.role is TenantRole.OWNER
    assert member.display_name == "Jane"
    assert seen[0].url.path.endswith("/tenants/t1/users/u1")


def test_unknown_field_is_rejected() -> None:
    with pytest.raises(ValueError):
        to_document({"tenant_id": "t2"}, {"name": "name"})
