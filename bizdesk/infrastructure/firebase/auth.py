"""Firebase Auth client over the Identity Toolkit REST API.

Sign-up, password sign-in and password-reset emails use the project's web
API key. ID tokens are verified with google-auth against Google's public
certificates; when connected to the Auth emulator (which issues unsigned
tokens) they are decoded without signature verification.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from bizdesk.infrastructure.exceptions import (
    EmulatorAlreadyConnectedError,
    FirebaseAuthError,
)

logger = logging.getLogger(__name__)

_PRODUCTION_BASE = "https://identitytoolkit.googleapis.com/v1"
# The emulator ignores the key but the request must still carry one.
_EMULATOR_API_KEY = "fake-api-key"


@dataclass(frozen=True)
class AuthSession:
    """Tokens returned by sign-up / sign-in."""

    uid: str
    email: str
    id_token: str
    refresh_token: str
    expires_in: int


def _verify_firebase_token(token: str, project_id: str) -> dict[str, Any]:
    from google.auth.transport.requests import Request
    from google.oauth2 import id_token

    return id_token.verify_firebase_token(token, Request(), audience=project_id)


def _decode_unverified(token: str) -> dict[str, Any]:
    from google.auth import jwt

    return jwt.decode(token, verify=False)


class FirebaseAuthClient:
    """Auth handle for one Firebase project."""

    def __init__(
        self,
        project_id: str,
        api_key: str,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._api_key = api_key
        self._base_url = _PRODUCTION_BASE
        self._emulator_host: str | None = None
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def emulator_host(self) -> str | None:
        return self._emulator_host

    def connect_emulator(self, host: str) -> None:
        """Point all requests at the Auth emulator (host:port).

        Raises:
            EmulatorAlreadyConnectedError: If already connected.
        """
        if self._emulator_host is not None:
            raise EmulatorAlreadyConnectedError("auth", self._emulator_host)
        self._emulator_host = host
        self._base_url = f"http://{host}/identitytoolkit.googleapis.com/v1"

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _call(self, method: str, body: dict[str, Any]) -> dict[str, Any]:
        key = self._api_key or (_EMULATOR_API_KEY if self._emulator_host else "")
        resp = await self._http.post(
            f"{self._base_url}/accounts:{method}",
            params={"key": key},
            json=body,
        )
        if resp.status_code >= 400:
            raise _auth_error(resp)
        return resp.json()

    async def sign_up(self, email: str, password: str) -> AuthSession:
        """Create an email/password account and return its tokens."""
        data = await self._call(
            "signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return _session(data, email)

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Exchange email/password for an ID token and refresh token."""
        data = await self._call(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return _session(data, email)

    async def send_password_reset(self, email: str) -> None:
        """Ask Firebase to email a password reset link."""
        await self._call("sendOobCode", {"requestType": "PASSWORD_RESET", "email": email})

    async def verify_id_token(self, token: str) -> dict[str, Any]:
        """Return the claims of a valid Firebase ID token (uid is in 'user_id' / 'sub').

        Raises:
            FirebaseAuthError: If the token is malformed, expired, or for another project.
        """
        try:
            if self._emulator_host is not None:
                claims = await asyncio.to_thread(_decode_unverified, token)
            else:
                claims = await asyncio.to_thread(
                    _verify_firebase_token, token, self._project_id
                )
        except ValueError as e:
            raise FirebaseAuthError("INVALID_ID_TOKEN", str(e)) from e
        if claims.get("aud") != self._project_id:
            raise FirebaseAuthError("INVALID_ID_TOKEN", "audience mismatch")
        if not (claims.get("user_id") or claims.get("sub")):
            raise FirebaseAuthError("INVALID_ID_TOKEN", "missing subject")
        return claims


def _session(data: dict[str, Any], email: str) -> AuthSession:
    return AuthSession(
        uid=data["localId"],
        email=data.get("email", email),
        id_token=data["idToken"],
        refresh_token=data.get("refreshToken", ""),
        expires_in=int(data.get("expiresIn", 3600)),
    )


def _auth_error(resp: httpx.Response) -> FirebaseAuthError:
    """Build FirebaseAuthError from {"error": {"message": "CODE : reason"}}."""
    try:
        message = resp.json().get("error", {}).get("message", "")
    except ValueError:
        message = ""
    if not message:
        return FirebaseAuthError(f"HTTP_{resp.status_code}")
    code, _, reason = message.partition(" : ")
    logger.debug("Identity Toolkit error %s (%s)", code, resp.status_code)
    return FirebaseAuthError(code.strip(), reason.strip() or None)
