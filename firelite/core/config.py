"""Client configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from firelite.core.constants import DEFAULT_DATABASE_ID, FIRESTORE_BASE_URL


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    Credentials come from FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or
    FIREBASE_SERVICE_ACCOUNT_PATH (file path); the key wins when both are set.
    """

    # App
    app_name: str = "firelite"
    app_version: str = "0.1.0"
    debug: bool = False

    # Firestore target. Project id falls back to the service account's project_id.
    firestore_project_id: str = ""
    firestore_database_id: str = DEFAULT_DATABASE_ID
    firestore_base_url: str = FIRESTORE_BASE_URL
    # Sent as ?key=... on every request when set.
    firestore_api_key: SecretStr | None = None

    # Service account: key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None

    # HTTP
    request_timeout_seconds: float = 30.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_firestore(self) -> "Settings":
        """Reject an empty database id and a non-positive request timeout."""
        if not self.firestore_database_id.strip():
            raise ValueError(
                "FIRESTORE_DATABASE_ID must not be empty (use '(default)' for the default database)."
            )
        if self.request_timeout_seconds <= 0:
            raise ValueError(
                f"REQUEST_TIMEOUT_SECONDS must be > 0, got: {self.request_timeout_seconds!r}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
