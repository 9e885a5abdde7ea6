from functools import lru_cache
from urllib.parse import urlparse

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Onboarding Service"
    app_env: str = "development"  # development, testing, production
    debug: bool = False

    # Security
    log_user_emails: bool = False  # Set to False in production for GDPR compliance
    allowed_app_url_domains: list[str] = ["localhost", "127.0.0.1"]  # Allowed domains for APP_URL
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"

    # Frontend URL that redirect targets (/dashboard, /onboarding, ...) resolve against
    app_url: str = "http://localhost:3000"

    # Database
    database_url: str
    database_migrations_url: str | None = None
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_ssl_mode: str = "prefer"  # disable, prefer, require, verify-ca, verify-full
    database_statement_cache_size: int = 100

    # Identity provider (GoTrue-compatible auth API)
    identity_url: str
    identity_anon_key: str
    identity_timeout_seconds: float = 10.0
    oauth_redirect_path: str = "/api/v1/auth/callback"
    api_url: str = "http://localhost:8000"  # Public URL of this API, used for OAuth callbacks

    # Session cookies
    session_cookie_prefix: str = "onb"
    session_cookie_secure: bool = True
    session_cookie_max_age_seconds: int = 60 * 60 * 24 * 7

    # Invite codes
    invite_code_expire_days: int = 365
    invite_code_max_attempts: int = 5

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Rate limiting storage (optional - in-memory when unset)
    redis_url: str | None = None  # e.g., "redis://localhost:6379/0"

    @field_validator("identity_url")
    @classmethod
    def validate_identity_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError("IDENTITY_URL must be an absolute http(s) URL")
        return v.rstrip("/")

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("app_url")
    @classmethod
    def validate_app_url(cls, v: str, info: ValidationInfo) -> str:
        """Validate APP_URL is from allowed domain list to prevent open redirects."""
        allowed = info.data.get("allowed_app_url_domains", ["localhost", "127.0.0.1"])
        parsed = urlparse(v)
        hostname = parsed.hostname or ""

        if not any(hostname == domain or hostname.endswith(f".{domain}") for domain in allowed):
            raise ValueError(
                f"APP_URL domain '{hostname}' not in allowed list. "
                f"Add it to ALLOWED_APP_URL_DOMAINS or use: {allowed}"
            )
        return v.rstrip("/")

    @property
    def oauth_redirect_url(self) -> str:
        """Absolute URL the identity provider sends the browser back to."""
        return f"{self.api_url.rstrip('/')}{self.oauth_redirect_path}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
