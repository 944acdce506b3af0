"""Presentation-layer dependency injection (composition root).

Repositories and services are built here from the Firebase backend stored on
app.state.firebase by the lifespan. Routes depend only on these providers;
tests replace them through app.dependency_overrides.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bizdesk.application.dtos.user import CurrentUser
from bizdesk.application.interfaces.repositories import (
    IClientRepository,
    IJobRepository,
    ITenantRepository,
)
from bizdesk.application.services import (
    ClientService,
    JobService,
    UserInitializationService,
)
from bizdesk.domain.exceptions import AuthenticationException
from bizdesk.infrastructure.exceptions import FirebaseAuthError
from bizdesk.infrastructure.firebase import FirebaseBackend
from bizdesk.infrastructure.firebase.auth import FirebaseAuthClient
from bizdesk.infrastructure.firebase.repositories import (
    FirestoreClientRepository,
    FirestoreJobRepository,
    FirestoreTenantRepository,
)

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class VerifiedToken:
    """Identity taken from a verified Firebase ID token."""

    uid: str
    email: str


def get_firebase_backend(request: Request) -> FirebaseBackend:
    """Backend created by the lifespan; 503 until it exists."""
    backend = getattr(request.app.state, "firebase", None)
    if backend is None:
        raise HTTPException(status_code=503, detail="Firebase backend not initialized")
    return backend


def get_auth_client(
    backend: Annotated[FirebaseBackend, Depends(get_firebase_backend)],
) -> FirebaseAuthClient:
    return backend.auth


def get_client_repo(
    backend: Annotated[FirebaseBackend, Depends(get_firebase_backend)],
) -> IClientRepository:
    return FirestoreClientRepository(backend.db)


def get_job_repo(
    backend: Annotated[FirebaseBackend, Depends(get_firebase_backend)],
) -> IJobRepository:
    return FirestoreJobRepository(backend.db)


def get_tenant_repo(
    backend: Annotated[FirebaseBackend, Depends(get_firebase_backend)],
) -> ITenantRepository:
    return FirestoreTenantRepository(backend.db)


def get_client_service(
    client_repo: Annotated[IClientRepository, Depends(get_client_repo)],
) -> ClientService:
    return ClientService(client_repo)


def get_job_service(
    job_repo: Annotated[IJobRepository, Depends(get_job_repo)],
    client_repo: Annotated[IClientRepository, Depends(get_client_repo)],
) -> JobService:
    return JobService(job_repo, client_repo)


def get_user_initialization_service(
    tenant_repo: Annotated[ITenantRepository, Depends(get_tenant_repo)],
) -> UserInitializationService:
    return UserInitializationService(tenant_repo)


async def verify_token(auth: FirebaseAuthClient, id_token: str) -> VerifiedToken:
    """Verify a Firebase ID token; AuthenticationException if it is not valid."""
    try:
        claims = await auth.verify_id_token(id_token)
    except FirebaseAuthError as e:
        raise AuthenticationException("Invalid or expired token") from e
    uid = claims.get("user_id") or claims["sub"]
    return VerifiedToken(uid=uid, email=claims.get("email", ""))


async def get_verified_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
    auth: Annotated[FirebaseAuthClient, Depends(get_auth_client)],
) -> VerifiedToken:
    """Verify the Authorization: Bearer <Firebase ID token> header.

    Raises:
        AuthenticationException: Header missing, or token invalid/expired.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Missing bearer token")
    return await verify_token(auth, credentials.credentials)


async def get_current_user(
    token: Annotated[VerifiedToken, Depends(get_verified_token)],
    service: Annotated[
        UserInitializationService, Depends(get_user_initialization_service)
    ],
) -> CurrentUser:
    """Caller with tenant and role resolved from their profile documents."""
    return await service.resolve_current_user(token.uid, token.email)
