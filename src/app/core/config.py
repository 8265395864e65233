from functools import lru_cache
from typing import Literal
from urllib.parse import urlparse

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SslMode = Literal["disable", "prefer", "require", "verify-ca", "verify-full"]


class Settings(BaseSettings):
    """EasyPM configuration, read from the environment and an optional ``.env``."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "EasyPM API"
    app_env: Literal["development", "testing", "production"] = "development"
    debug: bool = False
    enable_openapi: bool = True
    allowed_app_url_domains: list[str] = ["localhost", "127.0.0.1"]
    app_url: str = "http://localhost:9002"  # frontend base for reset and invite links
    cors_origins: list[str] = ["http://localhost:9002"]
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"
    log_user_emails: bool = False
    shutdown_grace_period: int = 30

    # Postgres
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_ssl_mode: SslMode = "prefer"

    # Access tokens and password hashing
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    # Link tokens
    password_reset_expire_minutes: int = 60
    invite_expire_hours: int = 24

    # Task attachments
    upload_dir: str = "uploads"
    max_upload_bytes: int = 10 * 1024 * 1024

    # Outgoing mail; without a Resend key messages are only logged
    resend_api_key: str | None = None
    email_from: str = "noreply@easypm.local"
    email_send_timeout_seconds: int = 10

    # Optional services
    redis_url: str | None = None
    redis_pool_size: int = 10
    metrics_api_key: str | None = None

    # Background jobs
    temporal_host: str = "localhost:7233"
    temporal_namespace: str = "default"
    temporal_task_queue: str = "easypm-jobs"
    cleanup_schedule: str | None = None  # cron, e.g. "0 3 * * *"
    cleanup_retention_days: int = 7

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError("JWT_SECRET_KEY is still the placeholder; generate one with: openssl rand -hex 32")
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("app_url")
    @classmethod
    def validate_app_url(cls, v: str, info: ValidationInfo) -> str:
        """Links in outgoing mail may only point at an allow-listed host."""
        allowed: list[str] = info.data.get("allowed_app_url_domains") or []
        host = urlparse(v).hostname or ""
        if host in allowed or any(host.endswith("." + domain) for domain in allowed):
            return v
        raise ValueError(f"APP_URL host '{host}' is not in ALLOWED_APP_URL_DOMAINS ({allowed})")

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        if "*" in v:
            raise ValueError("CORS_ORIGINS cannot contain '*' because credentials are allowed")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
