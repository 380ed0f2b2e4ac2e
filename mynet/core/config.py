"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY) and the cache
backend choice are validated at load time.
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RouteCacheGroup(BaseModel):
    """One entry of the route cache table: route patterns sharing a TTL.

    Accepts the `Routes` / `TTL` keys used by the platform's caching
    strategy file as well as the snake_case field names.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    routes: list[str] = Field(default_factory=list, alias="Routes")
    ttl: int = Field(..., ge=0, alias="TTL")


def default_cache_strategy() -> dict[str, RouteCacheGroup]:
    """Route table used when CACHE_STRATEGY is not set.

    Declaration order matters: the first matching pattern wins, so the
    never-cache group comes first.
    """
    return {
        "Private": RouteCacheGroup(
            routes=[
                "/api/v1/health",
                "/api/v1/health/*",
                "/api/v1/permissions/me",
                "/api/v1/cache",
                "/api/v1/cache/*",
                "/api/messages",
                "/api/messages/*",
            ],
            ttl=0,
        ),
        "Reference": RouteCacheGroup(
            routes=[
                "/api/v1/permissions/roles",
                "/api/v1/permissions/roles/:role",
                "/api/categories",
                "/api/categories/*",
                "/api/regions",
            ],
            ttl=3600,
        ),
        "Tenders": RouteCacheGroup(
            routes=["/api/tenders", "/api/tenders/:id"],
            ttl=120,
        ),
        "Search": RouteCacheGroup(
            routes=["/api/search", "/api/search/*"],
            ttl=60,
        ),
        "Offers": RouteCacheGroup(
            routes=["/api/offers/:id"],
            ttl=60,
        ),
        "Users": RouteCacheGroup(
            routes=["/api/users/:id", "/api/users/:id/profile"],
            ttl=300,
        ),
        "Analytics": RouteCacheGroup(
            routes=["/api/admin/analytics/*", "/api/dashboard/*"],
            ttl=600,
        ),
        "Reviews": RouteCacheGroup(
            routes=["/api/reviews/*"],
            ttl=900,
        ),
    }


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except SECRET_KEY, validated in
    validate_required_and_cache.
    """

    # App
    app_name: str = "mynet"
    app_version: str = "1.0.0"
    debug: bool = False

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"
    hsts_enabled: bool = False

    # Response cache: "memory" (process-local) or "redis" (shared)
    cache_enabled: bool = True
    cache_backend: str = "memory"
    cache_default_ttl: int = Field(default=300, ge=0)
    cache_sweep_interval_seconds: int = Field(default=60, ge=0)
    cache_strategy: dict[str, RouteCacheGroup] = Field(
        default_factory=default_cache_strategy
    )

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_reconnect_interval_seconds: float = Field(default=30.0, ge=0)

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
    def validate_required_and_cache(self) -> "Settings":
        """Validate required env and cache backend.

        Route patterns themselves are compiled (and rejected) when the
        RouteCachePolicy is built in create_app().
        """
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.cache_backend not in ("memory", "redis"):
            raise ValueError(
                f"cache_backend must be 'memory' or 'redis', got: {self.cache_backend!r}"
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
