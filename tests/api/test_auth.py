"""API tests for sign-up, login and password reset."""

from httpx import AsyncClient

from bizdesk.domain.enums import TenantRole


async def test_signup_creates_user_and_tenant(client: AsyncClient, fakes) -> None:
    resp = await client.post(
        "/api/v1/auth/signup", json={"email": "new@example.com", "password": "secret123"}
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["email"] == "new@example.com"
    assert body["token_type"] == "bearer"
    uid = body["uid"]
    profile = fakes.tenants.profiles[uid]
    assert profile.tenant_id == f"tenant_{uid}"
    assert fakes.tenants.tenants[profile.tenant_id]["name"] == "new's Business"
    assert fakes.tenants.members[(profile.tenant_id, uid)].role is TenantRole.OWNER


async def test_signup_existing_email_is_conflict(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/v1/auth/signup", json={"email": "jane@example.com", "password": "secret123"}
    )
    assert resp.status_code == 409
    assert resp.json()["error"] == "FIREBASE_AUTH_ERROR"
    assert resp.json()["details"]["code"] == "EMAIL_EXISTS"


async def test_signup_weak_password_is_bad_request(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/v1/auth/signup", json={"email": "new@example.com", "password": "123"}
    )
    assert resp.status_code == 400


async def test_signup_rejects_malformed_email(client: AsyncClient) -> None:
    resp = await client.post("/api/v1/auth/signup", json={"email": "nope", "password": "secret123"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "VALIDATION_ERROR"


async def test_login_returns_tokens(client: AsyncClient, owner) -> None:
    resp = await client.post(
        "/api/v1/auth/login", json={"email": owner.email, "password": "secret123"}
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["uid"] == owner.uid
    assert body["id_token"]
    assert body["expires_in"] == 3600


async def test_login_wrong_password_is_unauthorized(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/v1/auth/login", json={"email": "jane@example.com", "password": "wrong"}
    )
    assert resp.status_code == 401


async def test_password_reset_is_always_accepted(client: AsyncClient, fakes) -> None:
    known = await client.post("/api/v1/auth/password-reset", json={"email": "jane@example.com"})
    unknown = await client.post("/api/v1/auth/password-reset", json={"email": "who@example.com"})
    assert known.status_code == unknown.status_code == 202
    assert fakes.auth.reset_requests == ["jane@example.com"]
