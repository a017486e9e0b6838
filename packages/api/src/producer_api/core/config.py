# This project was developed with assistance from AI tools.
"""
Application configuration.

All settings read from environment variables with sensible local dev defaults.
Group related settings together; each group becomes a section future PRs extend.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve project root .env regardless of CWD
_PROJECT_ROOT = Path(__file__).resolve().parents[5]
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings -- single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- App --
    APP_NAME: str = "producer-onboarding"
    DEBUG: bool = False

    # -- CORS --
    ALLOWED_HOSTS: list[str] = ["http://localhost:8000"]

    # -- Admin session --
    SESSION_SECRET_KEY: str = Field(
        default="dev-change-me",
        description="Signs the admin session cookie. Override outside local dev.",
    )
    SESSION_COOKIE_NAME: str = "producer_admin_session"
    SESSION_MAX_AGE: int = Field(
        default=8 * 60 * 60,
        description="Admin session lifetime in seconds (default 8 hours).",
    )

    # -- Storage (S3 / MinIO) --
    S3_ENDPOINT: str = "http://localhost:9090"
    S3_ACCESS_KEY: str = "minio"
    S3_SECRET_KEY: str = "miniosecret"
    S3_BUCKET: str = "producer-documents"
    S3_REGION: str = "us-east-1"
    S3_PUBLIC_BASE_URL: str | None = Field(
        default=None,
        description="Base URL for publicly fetchable objects. Defaults to {S3_ENDPOINT}/{S3_BUCKET}.",
    )

    # -- Uploads --
    UPLOAD_MAX_SIZE_MB: int = 5
    UPLOAD_ALLOWED_CONTENT_TYPES: set[str] = {"application/pdf"}

    # -- Credentials --
    CREDENTIAL_USERNAME_PREFIX: str = "producer_"
    CREDENTIAL_USERNAME_LENGTH: int = 6
    CREDENTIAL_PASSWORD_LENGTH: int = 10

    @property
    def upload_max_bytes(self) -> int:
        return self.UPLOAD_MAX_SIZE_MB * 1024 * 1024

    @property
    def s3_public_base_url(self) -> str:
        base = self.S3_PUBLIC_BASE_URL or f"{self.S3_ENDPOINT.rstrip('/')}/{self.S3_BUCKET}"
        return base.rstrip("/")


settings = Settings()
