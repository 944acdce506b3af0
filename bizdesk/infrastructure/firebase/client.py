"""Firebase backend bootstrap: app handle, auth client and Firestore client.

The backend is built explicitly by create_backend(settings) and owned by the
application lifespan (see bizdesk.core.lifespan). init_firebase() keeps one
instance per process for code that runs outside a request (scripts, tests).

Local target: both clients are pointed at the emulators. Remote target:
Firestore authenticates with a service account loaded from
FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or FIREBASE_SERVICE_ACCOUNT_PATH.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path

import httpx

from bizdesk.core.config import Settings, get_settings
from bizdesk.infrastructure.exceptions import EmulatorAlreadyConnectedError
from bizdesk.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)
from bizdesk.infrastructure.firebase.app import FirebaseApp, FirebaseOptions
from bizdesk.infrastructure.firebase.auth import FirebaseAuthClient

logger = logging.getLogger(__name__)

_backend: FirebaseBackend | None = None
_backend_lock = threading.Lock()


@dataclass
class FirebaseBackend:
    """The three handles consumers need, plus the target they point at."""

    app: FirebaseApp
    auth: FirebaseAuthClient
    db: FirestoreRESTClient
    target: str
    http: httpx.AsyncClient

    async def aclose(self) -> None:
        """Close the shared HTTP connection pool."""
        await self.http.aclose()


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key = settings.firebase_service_account_key
    key_json = key.get_secret_value() if key else None
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            raise ValueError(
                f"FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: {path} (resolved: {resolved})"
            )
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def connect_emulators(backend: FirebaseBackend, settings: Settings) -> None:
    """Point auth and Firestore at the local emulators (local target only).

    Best-effort and idempotent: a client that is already connected is logged
    and left as is.
    """
    if backend.target != "local":
        return
    try:
        backend.auth.connect_emulator(settings.firebase_auth_emulator_host)
        logger.info(
            "Connected to Firebase Auth emulator at %s",
            settings.firebase_auth_emulator_host,
        )
    except EmulatorAlreadyConnectedError:
        logger.info("Firebase Auth emulator already connected")
    try:
        backend.db.connect_emulator(settings.firebase_firestore_emulator_host)
        logger.info(
            "Connected to Firestore emulator at %s",
            settings.firebase_firestore_emulator_host,
        )
    except EmulatorAlreadyConnectedError:
        logger.info("Firestore emulator already connected")


def create_backend(
    settings: Settings,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> FirebaseBackend:
    """Build a backend for the configured target. Caller owns aclose().

    Raises:
        ValueError: If remote credentials are missing or malformed.
    """
    options = FirebaseOptions.from_settings(settings)
    http = http_client or httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    credentials = None
    if settings.backend_target == "remote":
        key_dict = _load_key_dict(settings)
        if not key_dict:
            raise ValueError("Remote Firestore requires a service account")
        credentials = _get_credentials(key_dict)
    backend = FirebaseBackend(
        app=FirebaseApp(options=options),
        auth=FirebaseAuthClient(options.project_id, options.api_key, http_client=http),
        db=FirestoreRESTClient(options.project_id, credentials, http_client=http),
        target=settings.backend_target,
        http=http,
    )
    connect_emulators(backend, settings)
    logger.info(
        "Firebase backend initialized (project=%s, target=%s)",
        options.project_id,
        backend.target,
    )
    return backend


def init_firebase(settings: Settings | None = None) -> FirebaseBackend:
    """Return the process-wide backend, creating it on first call.

    Later calls return the same instance; settings passed then are ignored.
    """
    global _backend
    with _backend_lock:
        if _backend is None:
            _backend = create_backend(settings or get_settings())
        return _backend


def get_firebase() -> FirebaseBackend | None:
    """Return the process-wide backend, or None if not initialized."""
    return _backend


async def close_firebase() -> None:
    """Close and forget the process-wide backend. Call from app shutdown."""
    global _backend
    with _backend_lock:
        backend, _backend = _backend, None
    if backend is not None:
        await backend.aclose()
        logger.info("Firebase HTTP client closed")
