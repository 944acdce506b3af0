"""Firebase Auth and Firestore integration (REST, no firebase-admin)."""

from bizdesk.infrastructure.firebase.client import (
    FirebaseBackend,
    close_firebase,
    connect_emulators,
    create_backend,
    get_firebase,
    init_firebase,
)

__all__ = [
    "FirebaseBackend",
    "close_firebase",
    "connect_emulators",
    "create_backend",
    "get_firebase",
    "init_firebase",
]
