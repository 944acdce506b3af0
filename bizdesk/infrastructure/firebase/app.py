"""Firebase app handle: project identity shared by the auth and Firestore clients."""

from __future__ import annotations

from dataclasses import dataclass

from bizdesk.core.config import Settings

DEFAULT_APP_NAME = "[DEFAULT]"


@dataclass(frozen=True)
class FirebaseOptions:
    """The six values that identify a Firebase project."""

    api_key: str
    auth_domain: str
    project_id: str
    storage_bucket: str
    messaging_sender_id: str
    app_id: str

    @classmethod
    def from_settings(cls, settings: Settings) -> FirebaseOptions:
        return cls(
            api_key=settings.firebase_api_key,
            auth_domain=settings.firebase_auth_domain,
            project_id=settings.firebase_project_id,
            storage_bucket=settings.firebase_storage_bucket,
            messaging_sender_id=settings.firebase_messaging_sender_id,
            app_id=settings.firebase_app_id,
        )


@dataclass(frozen=True)
class FirebaseApp:
    """Initialized app: a name plus its options."""

    options: FirebaseOptions
    name: str = DEFAULT_APP_NAME
