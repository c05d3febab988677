"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults suitable for local development against a
    SQLite file; production overrides DATABASE_URL (e.g. postgresql+asyncpg).
    """

    # App
    app_name: str = "passage-search"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./passages.db"
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None
    # Create tables with metadata.create_all at startup (local SQLite); use Alembic otherwise.
    database_auto_create: bool = True

    # Seeding
    seed_on_startup: bool = True
    seed_data_path: str | None = None

    # CORS
    allowed_origins: str = "*"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"
    correlation_id_header: str = "X-Correlation-ID"

    # Rate limits (slowapi limit strings)
    search_rate_limit: str = "120/minute"
    autocomplete_rate_limit: str = "600/minute"

    # Resilience: database pipeline
    db_retry_max_attempts: int = 3
    db_retry_base_delay_seconds: float = 1.0
    db_retry_max_delay_seconds: float = 30.0
    db_timeout_seconds: float = 30.0
    db_breaker_failure_ratio: float = 0.5
    db_breaker_sampling_seconds: float = 10.0
    db_breaker_minimum_throughput: int = 5
    db_breaker_break_seconds: float = 30.0

    # Resilience: outbound HTTP pipeline
    http_retry_max_attempts: int = 2
    http_retry_base_delay_seconds: float = 0.5
    http_retry_max_delay_seconds: float = 10.0
    http_timeout_seconds: float = 10.0
    http_breaker_failure_ratio: float = 0.5
    http_breaker_sampling_seconds: float = 10.0
    http_breaker_minimum_throughput: int = 3
    http_breaker_break_seconds: float = 15.0

    # Performance logging: searches/autocompletes slower than this log at WARNING.
    slow_operation_warning_ms: int = 200

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
    def validate_database_and_resilience(self) -> "Settings":
        """Validate database URL and resilience tuning.

        - DATABASE_URL must be set.
        - Breaker failure ratios must be in (0, 1].
        - Durations, throughputs and retry counts must be positive (retries may be 0).
        """
        if not self.database_url:
            raise ValueError(
                "DATABASE_URL is required. Set in environment or .env file "
                "(e.g. sqlite+aiosqlite:///./passages.db)."
            )
        for prefix in ("db", "http"):
            ratio = getattr(self, f"{prefix}_breaker_failure_ratio")
            if not 0 < ratio <= 1:
                raise ValueError(
                    f"{prefix}_breaker_failure_ratio must be in (0, 1], got: {ratio!r}"
                )
            if getattr(self, f"{prefix}_retry_max_attempts") < 0:
                raise ValueError(f"{prefix}_retry_max_attempts must be >= 0")
            for suffix in (
                "retry_base_delay_seconds",
                "retry_max_delay_seconds",
                "timeout_seconds",
                "breaker_sampling_seconds",
                "breaker_break_seconds",
                "breaker_minimum_throughput",
            ):
                name = f"{prefix}_{suffix}"
                if getattr(self, name) <= 0:
                    raise ValueError(f"{name} must be positive")
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
