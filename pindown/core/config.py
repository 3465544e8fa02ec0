"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (FIREBASE_DATABASE_URL, API_KEY_SALT and
store credentials) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENVIRONMENTS = ("development", "test", "staging", "production")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    The development auth bypass is a config-gated switch: it can never be
    enabled together with ENVIRONMENT=production (the validator refuses to
    load such a configuration).
    """

    # App
    app_name: str = "pindown"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Development auth bypass (never in production)
    dev_auth_bypass: bool = False
    dev_user_id: str = "dev_user_123"

    # Firebase Realtime Database + Auth
    firebase_database_url: str = ""
    firebase_project_id: str = ""
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    # Talk to the local emulator: no service account, no OAuth token on requests.
    firebase_emulator: bool = False

    # API keys: stored as sha256(key + salt)
    api_key_salt: SecretStr = SecretStr("")

    # Store behaviour
    store_timeout_seconds: float = 30.0
    store_max_cas_retries: int = 5

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    # Workflow payloads and dataset bodies; larger requests get 413.
    max_request_bytes: int = 1_048_576

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @model_validator(mode="after")
    def validate_required_and_bypass(self) -> "Settings":
        """Validate required env and the development bypass gate.

        - ENVIRONMENT must be one of development, test, staging, production.
        - DEV_AUTH_BYPASS is rejected in production.
        - FIREBASE_DATABASE_URL and API_KEY_SALT are always required.
        - A service account (key or path) is required unless FIREBASE_EMULATOR is set.
        - FIREBASE_PROJECT_ID is required with the emulator (no service account).
        """
        if self.environment not in ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {', '.join(ENVIRONMENTS)}, got: {self.environment!r}"
            )
        if self.dev_auth_bypass and self.is_production:
            raise ValueError(
                "DEV_AUTH_BYPASS cannot be enabled when ENVIRONMENT is 'production'."
            )
        if not self.firebase_database_url:
            raise ValueError(
                "FIREBASE_DATABASE_URL is required "
                "(e.g. https://<project>-default-rtdb.firebaseio.com)."
            )
        if not self.api_key_salt.get_secret_value():
            raise ValueError(
                "API_KEY_SALT is required. Generate with: openssl rand -hex 16."
            )
        if self.firebase_emulator and not self.firebase_project_id:
            raise ValueError("FIREBASE_PROJECT_ID is required with FIREBASE_EMULATOR=true.")
        if not self.firebase_emulator:
            has_key = (
                self.firebase_service_account_key
                and self.firebase_service_account_key.get_secret_value()
            )
            if not has_key and not self.firebase_service_account_path:
                raise ValueError(
                    "Set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string) or "
                    "FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file), "
                    "or FIREBASE_EMULATOR=true for local development."
                )
        if self.store_max_cas_retries < 1:
            raise ValueError("STORE_MAX_CAS_RETRIES must be at least 1")
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
