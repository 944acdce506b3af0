"""Pytest configuration and fixtures for bizdesk.

HTTP tests run bizdesk.main:app over ASGITransport with the Firebase-backed
repositories and auth client replaced through app.dependency_overrides by the
in-memory fakes below. The lifespan does not run under ASGITransport, so no
emulator or network access is needed.
"""

import os

os.environ["APP_ENV"] = "development"
os.environ["FIREBASE_BACKEND_TARGET"] = "local"
os.environ["FIREBASE_PROJECT_ID"] = "demo-project"

from dataclasses import replace  # noqa: E402
from types import SimpleNamespace  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from bizdesk.api.v1.dependencies import (  # noqa: E402
    get_auth_client,
    get_client_repo,
    get_job_repo,
    get_tenant_repo,
)
from bizdesk.application.dtos.client import ClientResult  # noqa: E402
from bizdesk.application.dtos.job import JobResult  # noqa: E402
from bizdesk.application.dtos.user import (  # noqa: E402
    TenantUserResult,
    UserProfileResult,
)
from bizdesk.core.config import get_settings  # noqa: E402
from bizdesk.core.limiter import limiter  # noqa: E402
from bizdesk.domain.enums import TenantRole  # noqa: E402
from bizdesk.infrastructure.exceptions import FirebaseAuthError  # noqa: E402
from bizdesk.infrastructure.firebase.auth import AuthSession  # noqa: E402
from bizdesk.main import app  # noqa: E402
from bizdesk.shared.utils import generate_document_id, utc_now  # noqa: E402

OWNER_UID = "owner-uid"
OWNER_EMAIL = "jane@example.com"
OWNER_TOKEN = "owner-token"
OWNER_TENANT = f"tenant_{OWNER_UID}"
NEWCOMER_UID = "newcomer-uid"
NEWCOMER_EMAIL = "sam@example.com"
NEWCOMER_TOKEN = "newcomer-token"


class InMemoryClientRepository:
    """IClientRepository over a dict keyed by (tenant_id, client_id)."""

    def __init__(self) -> None:
        self.items: dict[tuple[str, str], ClientResult] = {}

    async def list_by_tenant(self, tenant_id: str) -> list[ClientResult]:
        clients = [c for (t, _), c in self.items.items() if t == tenant_id]
        return sorted(clients, key=lambda c: c.name)

    async def get_by_id(self, tenant_id: str, client_id: str) -> ClientResult | None:
        return self.items.get((tenant_id, client_id))

    async def create(
        self, tenant_id: str, created_by: str, fields: dict[str, Any]
    ) -> ClientResult:
        now = utc_now()
        client = ClientResult(
            id=generate_document_id(),
            tenant_id=tenant_id,
            created_by=created_by,
            created_at=now,
            updated_at=now,
            **fields,
        )
        self.items[(tenant_id, client.id)] = client
        return client

    async def update(
        self, tenant_id: str, client_id: str, changes: dict[str, Any]
    ) -> ClientResult | None:
        current = self.items.get((tenant_id, client_id))
        if current is None:
            return None
        updated = replace(current, **changes, updated_at=utc_now())
        self.items[(tenant_id, client_id)] = updated
        return updated

    async def delete(self, tenant_id: str, client_id: str) -> None:
        self.items.pop((tenant_id, client_id), None)


class InMemoryJobRepository:
    """IJobRepository over a dict; insertion order stands in for createdAt."""

    def __init__(self) -> None:
        self.items: dict[tuple[str, str], JobResult] = {}

    async def list_by_tenant(self, tenant_id: str) -> list[JobResult]:
        jobs = [j for (t, _), j in self.items.items() if t == tenant_id]
        return list(reversed(jobs))

    async def list_by_client(self, tenant_id: str, client_id: str) -> list[JobResult]:
        return [j for j in await self.list_by_tenant(tenant_id) if j.client_id == client_id]

    async def get_by_id(self, tenant_id: str, job_id: str) -> JobResult | None:
        return self.items.get((tenant_id, job_id))

    async def create(
        self, tenant_id: str, created_by: str, fields: dict[str, Any]
    ) -> JobResult:
        now = utc_now()
        job = JobResult(
            id=generate_document_id(),
            tenant_id=tenant_id,
            created_by=created_by,
            created_at=now,
            updated_at=now,
            **fields,
        )
        self.items[(tenant_id, job.id)] = job
        return job

    async def update(
        self, tenant_id: str, job_id: str, changes: dict[str, Any]
    ) -> JobResult | None:
        current = self.items.get((tenant_id, job_id))
        if current is None:
            return None
        updated = replace(current, **changes, updated_at=utc_now())
        self.items[(tenant_id, job_id)] = updated
        return updated

    async def delete(self, tenant_id: str, job_id: str) -> None:
        self.items.pop((tenant_id, job_id), None)


class InMemoryTenantRepository:
    """ITenantRepository: profiles, tenants and memberships in dicts."""

    def __init__(self) -> None:
        self.profiles: dict[str, UserProfileResult] = {}
        self.tenants: dict[str, dict[str, Any]] = {}
        self.members: dict[tuple[str, str], TenantUserResult] = {}

    async def get_user_profile(self, uid: str) -> UserProfileResult | None:
        return self.profiles.get(uid)

    async def get_tenant_user(self, tenant_id: str, uid: str) -> TenantUserResult | None:
        return self.members.get((tenant_id, uid))

    async def create_owner(
        self,
        uid: str,
        email: str,
        tenant_id: str,
        tenant_name: str,
        display_name: str,
    ) -> None:
        self.profiles[uid] = UserProfileResult(
            uid=uid, email=email, tenant_id=tenant_id, created_at=utc_now()
        )
        self.tenants[tenant_id] = {"id": tenant_id, "name": tenant_name, "created_by": uid}
        self.members[(tenant_id, uid)] = TenantUserResult(
            uid=uid, email=email, role=TenantRole.OWNER, display_name=display_name
        )


class FakeAuthClient:
    """Stands in for FirebaseAuthClient: fixed accounts and token -> uid table."""

    def __init__(self) -> None:
        self.accounts: dict[str, tuple[str, str]] = {OWNER_EMAIL: (OWNER_UID, "secret123")}
        self.tokens: dict[str, tuple[str, str]] = {
            OWNER_TOKEN: (OWNER_UID, OWNER_EMAIL),
            NEWCOMER_TOKEN: (NEWCOMER_UID, NEWCOMER_EMAIL),
        }
        self.reset_requests: list[str] = []

    def _session(self, uid: str, email: str) -> AuthSession:
        token = f"token-{uid}"
        self.tokens[token] = (uid, email)
        return AuthSession(
            uid=uid, email=email, id_token=token, refresh_token="refresh", expires_in=3600
        )

    async def sign_up(self, email: str, password: str) -> AuthSession:
        if email in self.accounts:
            raise FirebaseAuthError("EMAIL_EXISTS")
        if len(password) < 6:
            raise FirebaseAuthError("WEAK_PASSWORD", "Password should be at least 6 characters")
        uid = f"uid-{len(self.accounts) + 1}"
        self.accounts[email] = (uid, password)
        return self._session(uid, email)

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        account = self.accounts.get(email)
        if account is None or account[1] != password:
            raise FirebaseAuthError("INVALID_LOGIN_CREDENTIALS")
        return self._session(account[0], email)

    async def send_password_reset(self, email: str) -> None:
        if email not in self.accounts:
            raise FirebaseAuthError("EMAIL_NOT_FOUND")
        self.reset_requests.append(email)

    async def verify_id_token(self, token: str) -> dict[str, Any]:
        if token not in self.tokens:
            raise FirebaseAuthError("INVALID_ID_TOKEN")
        uid, email = self.tokens[token]
        return {"aud": "demo-project", "user_id": uid, "sub": uid, "email": email}


@pytest.fixture(autouse=True)
def _no_rate_limits():
    """Rate limits are per client address; every test shares one."""
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def settings_env(monkeypatch):
    """Set env vars for Settings and reload them; restores the cache afterwards."""

    def apply(**env: str):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        get_settings.cache_clear()
        return get_settings()

    yield apply
    get_settings.cache_clear()


@pytest.fixture
def fakes() -> SimpleNamespace:
    return SimpleNamespace(
        clients=InMemoryClientRepository(),
        jobs=InMemoryJobRepository(),
        tenants=InMemoryTenantRepository(),
        auth=FakeAuthClient(),
    )


@pytest.fixture
async def owner(fakes: SimpleNamespace) -> SimpleNamespace:
    """An initialized owner account (profile, tenant and membership exist)."""
    await fakes.tenants.create_owner(
        uid=OWNER_UID,
        email=OWNER_EMAIL,
        tenant_id=OWNER_TENANT,
        tenant_name="jane's Business",
        display_name="jane",
    )
    return SimpleNamespace(
        uid=OWNER_UID,
        email=OWNER_EMAIL,
        tenant_id=OWNER_TENANT,
        headers={"Authorization": f"Bearer {OWNER_TOKEN}"},
    )


@pytest.fixture
async def client(fakes: SimpleNamespace) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with in-memory backends."""
    app.dependency_overrides[get_client_repo] = lambda: fakes.clients
    app.dependency_overrides[get_job_repo] = lambda: fakes.jobs
    app.dependency_overrides[get_tenant_repo] = lambda: fakes.tenants
    app.dependency_overrides[get_auth_client] = lambda: fakes.auth
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def bare_client() -> AsyncClient:
    """HTTP client with no overrides and no Firebase backend on app.state."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
