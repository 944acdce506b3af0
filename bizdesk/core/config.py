"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. The Firebase backend target (local emulators or the
managed project) is resolved and validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_ENVIRONMENTS = ("development", "production")
BACKEND_TARGETS = ("local", "remote")
DEFAULT_LOCAL_PROJECT_ID = "demo-project"


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    APP_ENV selects the default backend target: development talks to the
    local Firebase emulators, production (the default) to the managed project.
    FIREBASE_BACKEND_TARGET overrides that choice explicitly.
    """

    # App
    app_name: str = "bizdesk"
    app_version: str = "1.0.0"
    debug: bool = False
    # Unset means production; the emulator target must be chosen explicitly.
    app_env: str = "production"

    # Firebase project identity
    firebase_api_key: str = ""
    firebase_auth_domain: str = ""
    firebase_project_id: str = ""
    firebase_storage_bucket: str = ""
    firebase_messaging_sender_id: str = ""
    firebase_app_id: str = ""

    # Backend target: "local" (emulators) or "remote"; empty = derive from app_env
    firebase_backend_target: str = ""
    firebase_auth_emulator_host: str = "localhost:9099"
    firebase_firestore_emulator_host: str = "localhost:8080"

    # Remote Firestore credentials: key (env JSON) or path (file)
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None

    # HTTP
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"
    request_id_header: str = "X-Request-ID"
    http_timeout_seconds: float = 30.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def backend_target(self) -> str:
        """Resolved backend target ("local" or "remote")."""
        if self.firebase_backend_target:
            return self.firebase_backend_target
        return "local" if self.is_development else "remote"

    @model_validator(mode="after")
    def validate_backend(self) -> "Settings":
        """Validate environment and backend target.

        - Local: project id defaults to demo-project; no credentials needed.
        - Remote: FIREBASE_API_KEY, FIREBASE_PROJECT_ID and a service account
          (FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH) are required.
        """
        self.app_env = self.app_env.strip().lower()
        if self.app_env not in APP_ENVIRONMENTS:
            raise ValueError(
                f"app_env must be one of {APP_ENVIRONMENTS}, got: {self.app_env!r}"
            )
        self.firebase_backend_target = self.firebase_backend_target.strip().lower()
        if self.backend_target not in BACKEND_TARGETS:
            raise ValueError(
                f"firebase_backend_target must be 'local' or 'remote', got: {self.firebase_backend_target!r}"
            )
        if self.backend_target == "local":
            if not self.firebase_project_id:
                self.firebase_project_id = DEFAULT_LOCAL_PROJECT_ID
            return self
        if not self.firebase_api_key:
            raise ValueError(
                "FIREBASE_API_KEY is required when the backend target is 'remote'."
            )
        if not self.firebase_project_id:
            raise ValueError(
                "FIREBASE_PROJECT_ID is required when the backend target is 'remote'."
            )
        has_key = (
            self.firebase_service_account_key
            and self.firebase_service_account_key.get_secret_value()
        )
        if not has_key and not self.firebase_service_account_path:
            raise ValueError(
                "When the backend target is 'remote', set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string) "
                "or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
