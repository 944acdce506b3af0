"""API tests for /users: initialization and the caller's profile."""

from httpx import AsyncClient

NEWCOMER_HEADERS = {"Authorization": "Bearer newcomer-token"}


async def test_initialize_creates_tenant_for_token_user(client: AsyncClient, fakes) -> None:
    resp = await client.post("/api/v1/users/initialize", headers=NEWCOMER_HEADERS)
    assert resp.status_code == 200
    assert resp.json() == {
        "uid": "newcomer-uid",
        "tenant_id": "tenant_newcomer-uid",
        "created": True,
    }
    assert fakes.tenants.tenants["tenant_newcomer-uid"]["name"] == "sam's Business"


async def test_initialize_is_idempotent(client: AsyncClient) -> None:
    await client.post("/api/v1/users/initialize", headers=NEWCOMER_HEADERS)
    again = await client.post("/api/v1/users/initialize", headers=NEWCOMER_HEADERS)
    assert again.status_code == 200
    assert again.json()["created"] is False
    assert again.json()["tenant_id"] == "tenant_newcomer-uid"


async def test_initialize_requires_token(client: AsyncClient) -> None:
    resp = await client.post("/api/v1/users/initialize")
    assert resp.status_code == 401
    assert resp.json()["error"] == "AUTHENTICATION_ERROR"


async def test_me_returns_tenant_and_role(client: AsyncClient, owner) -> None:
    resp = await client.get("/api/v1/users/me", headers=owner.headers)
    assert resp.status_code == 200
    assert resp.json() == {
        "uid": owner.uid,
        "email": owner.email,
        "tenant_id": owner.tenant_id,
        "role": "owner",
    }


async def test_me_before_initialization_is_not_found(client: AsyncClient) -> None:
    resp = await client.get("/api/v1/users/me", headers=NEWCOMER_HEADERS)
    assert resp.status_code == 404
    assert resp.json()["error"] == "TENANT_NOT_FOUND"


async def test_invalid_token_is_unauthorized(client: AsyncClient) -> None:
    resp = await client.get("/api/v1/users/me", headers={"Authorization": "Bearer forged"})
    assert resp.status_code == 401


async def test_me_without_membership_is_forbidden(client: AsyncClient, owner, fakes) -> None:
    fakes.tenants.members.pop((owner.tenant_id, owner.uid))
    resp = await client.get("/api/v1/users/me", headers=owner.headers)
    assert resp.status_code == 403
    assert resp.json()["error"] == "PERMISSION_DENIED"
