"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend credentials are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults; validate_backend enforces Firestore
    credentials when database_backend is 'firestore'.
    """

    # App
    app_name: str = "audit-log-service"
    app_version: str = "1.0.0"
    debug: bool = False

    # Document store: "firestore" (REST API) or "memory" (process-local, dev/tests)
    database_backend: str = "firestore"
    firestore_timeout_seconds: float = 30.0

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Organization partition header
    organization_header_name: str = "X-Organization-ID"
    request_id_header: str = "X-Request-ID"

    # Pagination
    default_items_per_page: int = 20
    max_items_per_page: int = 100

    # Messages
    default_locale: str = "en"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_backend(self) -> "Settings":
        """Validate document store backend and pagination bounds.

        - Firestore: FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH required.
        - Memory: no credentials; data lives for the process lifetime only.
        """
        if self.database_backend == "firestore":
            has_key = (
                self.firebase_service_account_key
                and self.firebase_service_account_key.get_secret_value()
            )
            if not has_key and not self.firebase_service_account_path:
                raise ValueError(
                    "When database_backend is 'firestore', set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string) "
                    "or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
                )
        elif self.database_backend != "memory":
            raise ValueError(
                f"database_backend must be 'firestore' or 'memory', got: {self.database_backend!r}"
            )
        if self.max_items_per_page < 1:
            raise ValueError("MAX_ITEMS_PER_PAGE must be at least 1")
        if not 1 <= self.default_items_per_page <= self.max_items_per_page:
            raise ValueError(
                "DEFAULT_ITEMS_PER_PAGE must be between 1 and MAX_ITEMS_PER_PAGE"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
