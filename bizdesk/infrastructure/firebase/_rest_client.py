"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Can be pointed at the local Firestore emulator with connect_emulator().
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote, unquote

import httpx

from bizdesk.infrastructure.exceptions import (
    DocumentExistsError,
    EmulatorAlreadyConnectedError,
    FirebaseError,
    InvalidDocumentIdError,
)
from bizdesk.infrastructure.firebase._rest_encoding import (
    decode_document,
    encode_document,
    encode_value,
)
from bizdesk.shared.utils.generators import generate_document_id

logger = logging.getLogger(__name__)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_PRODUCTION_BASE = "https://firestore.googleapis.com/v1"
# The emulator accepts this bearer token as an admin that bypasses security rules.
EMULATOR_TOKEN = "owner"


def check_document_id(document_id: str) -> None:
    """Require document_id to name a single document segment.

    Raises:
        InvalidDocumentIdError: Empty, contains "/", or is "." or "..".
    """
    if not document_id or "/" in document_id or document_id in (".", ".."):
        raise InvalidDocumentIdError(document_id)


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    params: list[tuple[str, str]] | None = None,
) -> dict | list | None:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method not in ("GET", "PATCH", "POST", "DELETE"):
        raise ValueError(f"Unsupported method: {method!r}")
    resp = await client.request(method, url, headers=headers, json=body, params=params)
    if resp.status_code == 404:
        return None
    if resp.status_code == 409:
        raise DocumentExistsError(url)
    if resp.status_code not in (200, 204):
        resp.raise_for_status()
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


def _snapshot(document: dict) -> DocumentSnapshot:
    name = document.get("name", "")
    doc_id = name.split("/")[-1] if name else ""
    return DocumentSnapshot(doc_id, decode_document(document))


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return unquote(self._path.split("/")[-1])

    async def update(self, data: dict[str, Any]) -> bool:
        """Update only the given top-level fields. Returns False if the document does not exist."""
        params = [("updateMask.fieldPaths", field) for field in data]
        params.append(("currentDocument.exists", "true"))
        out = await _request_async(
            self._client.http,
            self._client.url(self._path),
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
            params=params,
        )
        return out is not None

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client.http,
            self._client.url(self._path),
            access_token=await self._client.get_token(),
        )
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_document(out))

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing (404)."""
        await _request_async(
            self._client.http,
            self._client.url(self._path),
            method="DELETE",
            access_token=await self._client.get_token(),
        )


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "not-in": "NOT_IN",
    "array-contains": "ARRAY_CONTAINS",
    "array-contains-any": "ARRAY_CONTAINS_ANY",
}

_DIRECTION_MAP: dict[str, str] = {
    "asc": "ASCENDING",
    "desc": "DESCENDING",
    "ASCENDING": "ASCENDING",
    "DESCENDING": "DESCENDING",
}


class _Query:
    """Fluent query builder for a collection; runs via runQuery (filter and order on server)."""

    def __init__(self, client: FirestoreRESTClient, parent: str, collection_id: str):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[dict[str, Any]] = []
        self._orders: list[dict[str, Any]] = []

    def where(self, field: str, op: str, value: Any) -> _Query:
        self._filters.append(
            {
                "fieldFilter": {
                    "field": {"fieldPath": field},
                    "op": _OP_MAP.get(op, op),
                    "value": encode_value(value),
                }
            }
        )
        return self

    def order_by(self, field: str, direction: str = "asc") -> _Query:
        self._orders.append(
            {
                "field": {"fieldPath": field},
                "direction": _DIRECTION_MAP.get(direction, direction),
            }
        )
        return self

    def to_structured_query(self) -> dict[str, Any]:
        structured: dict[str, Any] = {"from": [{"collectionId": self._collection_id}]}
        if len(self._filters) == 1:
            structured["where"] = self._filters[0]
        elif self._filters:
            structured["where"] = {
                "compositeFilter": {"op": "AND", "filters": self._filters}
            }
        if self._orders:
            structured["orderBy"] = self._orders
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        resp = await _request_async(
            self._client.http,
            f"{self._client.url(self._parent)}:runQuery",
            method="POST",
            body={"structuredQuery": self.to_structured_query()},
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            yield _snapshot(item["document"])


class CollectionReference:
    """Reference to a (possibly nested) collection; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path.rstrip("/")

    @property
    def id(self) -> str:
        return self._path.split("/")[-1]

    def document(self, document_id: str) -> DocumentReference:
        """Document in this collection. The ID is checked and percent-encoded."""
        check_document_id(document_id)
        return DocumentReference(self._client, f"{self._path}/{quote(document_id, safe='')}")

    async def create(self, document_id: str, data: dict[str, Any]) -> DocumentReference:
        """Create a document with the given ID (DocumentExistsError if it exists)."""
        check_document_id(document_id)
        await _request_async(
            self._client.http,
            self._client.url(self._path),
            method="POST",
            body=encode_document(data),
            access_token=await self._client.get_token(),
            params=[("documentId", document_id)],
        )
        return self.document(document_id)

    async def add(self, data: dict[str, Any]) -> DocumentReference:
        """Create a document with a generated ID and return its reference."""
        return await self.create(generate_document_id(), data)

    def _query(self) -> _Query:
        parent, collection_id = self._path.rsplit("/", 1)
        return _Query(self._client, parent, collection_id)

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a query with a filter. Use .order_by(), then .stream()."""
        return self._query().where(field, op, value)

    def order_by(self, field: str, direction: str = "asc") -> _Query:
        """Start an unfiltered, ordered query."""
        return self._query().order_by(field, direction)


class FirestoreRESTClient:
    """Lightweight Firestore client using the REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials=None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._database = f"projects/{project_id}/databases/(default)"
        self._prefix = f"{self._database}/documents"
        self._base_url = _PRODUCTION_BASE
        self._emulator_host: str | None = None
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    @property
    def emulator_host(self) -> str | None:
        return self._emulator_host

    def url(self, resource_path: str) -> str:
        return f"{self._base_url}/{resource_path}"

    def connect_emulator(self, host: str) -> None:
        """Point all requests at the Firestore emulator (host:port).

        Raises:
            EmulatorAlreadyConnectedError: If already connected.
        """
        if self._emulator_host is not None:
            raise EmulatorAlreadyConnectedError("firestore", self._emulator_host)
        self._emulator_host = host
        self._base_url = f"http://{host}/v1"

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        if self._emulator_host is not None:
            return EMULATOR_TOKEN
        if self._credentials is None:
            raise FirebaseError(
                "Firestore has no credentials and is not connected to an emulator",
                "FIRESTORE_NOT_CONFIGURED",
            )
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_path: str) -> CollectionReference:
        """Collection by path relative to the database root (e.g. 'tenants/t1/clients')."""
        return CollectionReference(self, f"{self._prefix}/{collection_path.strip('/')}")

    async def batch_write(self, writes: list[dict[str, Any]]) -> None:
        """Apply writes atomically via documents:commit.

        Each write is {"path": "<relative path>", "data": {...}} (set),
        optionally with "create": True (fail if the document exists), or
        {"path": ..., "delete": True}.
        """
        body_writes: list[dict[str, Any]] = []
        for w in writes:
            name = f"{self._prefix}/{w['path'].strip('/')}"
            if w.get("delete"):
                body_writes.append({"delete": name})
                continue
            entry: dict[str, Any] = {"update": {"name": name, **encode_document(w["data"])}}
            if w.get("create"):
                entry["currentDocument"] = {"exists": False}
            body_writes.append(entry)
        if not body_writes:
            return
        await _request_async(
            self._http,
            f"{self.url(self._prefix)}:commit",
            method="POST",
            body={"writes": body_writes},
            access_token=await self.get_token(),
        )
        logger.debug("Committed %s Firestore writes", len(body_writes))
