"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (COSMIC_BUCKET_SLUG, COSMIC_READ_KEY)
are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except the Cosmic bucket slug
    and read key, which are checked in validate_required.
    """

    # App
    app_name: str = "wanderbites"
    app_version: str = "1.0.0"
    debug: bool = False

    # Cosmic headless CMS (read-only access)
    cosmic_api_url: str = "https://api.cosmicjs.com/v3"
    cosmic_bucket_slug: str = ""
    cosmic_read_key: SecretStr = SecretStr("")
    cosmic_timeout_seconds: float = 10.0

    # Search
    search_debounce_ms: int = 300
    search_rate_limit: str = "60/minute"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"
    correlation_id_header: str = "X-Correlation-ID"

    # Redis cache for content lookups (search results are never cached)
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    cache_ttl_content: int = 60

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
    def validate_required(self) -> "Settings":
        """Validate required Cosmic credentials and search tuning."""
        if not self.cosmic_bucket_slug:
            raise ValueError(
                "COSMIC_BUCKET_SLUG is required. Set in environment or .env file."
            )
        if not self.cosmic_read_key.get_secret_value():
            raise ValueError(
                "COSMIC_READ_KEY is required. Find it under Bucket → Settings → API Access."
            )
        if self.search_debounce_ms < 0:
            raise ValueError(
                f"search_debounce_ms must be >= 0, got: {self.search_debounce_ms!r}"
            )
        return self

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000.0


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
