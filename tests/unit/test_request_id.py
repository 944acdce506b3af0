"""Tests for the request ID middleware."""

import re

import pytest
from httpx import ASGITransport, AsyncClient

from bizdesk.middleware.request_id import (
    RequestIDMiddleware,
    request_id_var,
    sanitize_request_id,
)

UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[0-9a-f]{4}-[0-9a-f]{12}$")


@pytest.mark.parametrize("raw", [None, "", "bad id", "x" * 65, "id\nFORGED log line"])
def test_unsafe_values_are_replaced(raw) -> None:
    assert UUID_RE.match(sanitize_request_id(raw))


def test_safe_value_is_kept() -> None:
    assert sanitize_request_id("  req_123-abc ") == "req_123-abc"


async def inner_app(scope, receive, send) -> None:
    body = f"{scope['state']['request_id']}|{request_id_var.get()}".encode()
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": body})


async def test_middleware_forwards_and_echoes_header() -> None:
    app = RequestIDMiddleware(inner_app, header_name="X-Request-ID")
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.get("/", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["x-request-id"] == "abc-123"
    assert resp.text == "abc-123|abc-123"
    assert request_id_var.get() == "-"


async def test_middleware_generates_id_when_missing() -> None:
    app = RequestIDMiddleware(inner_app)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.get("/")
    assert UUID_RE.match(resp.headers["x-request-id"])
