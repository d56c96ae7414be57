"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. SECRET_KEY is validated at load time; DATABASE_URL is
checked lazily on first database use.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PUBLIC_PATH_PREFIXES: list[str] = [
    "/",
    "/catalog",
    "/about",
    "/contact",
    "/login",
    "/signup",
    "/api/auth",
]


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except SECRET_KEY. Storage
    backend and S3 bucket are cross-checked in validate_required_and_storage.
    """

    # App
    app_name: str = "storefront"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (postgresql+asyncpg in production, sqlite+aiosqlite in tests)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 30  # 30 days, like the session cookie
    session_cookie_name: str = "storefront_session"
    bcrypt_rounds: int = 12

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Storage (local filesystem or S3-compatible: AWS S3, Cloudflare R2, MinIO)
    storage_backend: str = "local"
    storage_root: str = "/var/storefront/storage"
    storage_base_url: str | None = None
    s3_bucket: str | None = None
    s3_region: str = "auto"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None
    s3_public_url: str | None = None
    max_upload_size: int = 10 * 1024 * 1024  # 10MB

    # Redis cache; when disabled an in-process cache is used
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_max_connections: int = 10
    cache_ttl_queries: int = 300

    # Shipping provider (RajaOngkir)
    rajaongkir_api_key: SecretStr | None = None
    rajaongkir_base_url: str | None = None
    shipping_timeout_seconds: float = 10.0

    # Access control
    public_path_prefixes: list[str] = list(DEFAULT_PUBLIC_PATH_PREFIXES)
    login_path: str = "/login"

    # Request logging
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required_and_storage(self) -> "Settings":
        """Validate required secrets and storage backend."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.storage_backend == "s3":
            if not self.s3_bucket:
                raise ValueError(
                    "s3_bucket is required when storage_backend is 's3'. "
                    "Set S3_BUCKET environment variable or update .env file."
                )
        elif self.storage_backend != "local":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                "Must be one of: 'local', 's3'"
            )
        if not self.login_path.startswith("/"):
            raise ValueError(f"login_path must start with '/', got: {self.login_path!r}")
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


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
