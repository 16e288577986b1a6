import os
import sys
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _should_load_env_file() -> str | None:
    """Determine if .env should be loaded.

    Local development picks up `backend/.env` automatically. Under pytest or
    in CI the file is ignored so tests control the environment explicitly.
    """
    if any("pytest" in str(x) for x in sys.argv if x):
        return None
    if os.environ.get("CI") in ("1", "true", "True"):
        return None
    return ".env"


class Settings(BaseSettings):
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment: 'development', 'staging', 'production' or 'test'",
    )
    PROJECT_NAME: str = Field(
        default="BeAware",
        description="Project name used in the API title and outgoing emails",
    )

    DATABASE_URL: str = "sqlite:///./data/beaware.db"
    SECRET_KEY: str = Field(
        ...,
        description="JWT secret key - must be set via SECRET_KEY environment variable",
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:5173"],
        description="Allowed CORS origins (comma-separated in env var)",
    )

    # Bootstrap admin account (used by init_db.py only)
    ADMIN_EMAIL: str = Field(
        default="",
        description="Email of the admin account created by init_db.py",
    )
    ADMIN_PASSWORD: str = Field(
        default="",
        description="Password of the admin account created by init_db.py",
    )

    DB_POOL_SIZE: int = Field(default=5, description="Persistent connections in pool")
    DB_MAX_OVERFLOW: int = Field(default=10, description="Extra connections")
    DB_POOL_TIMEOUT: int = Field(default=30, description="Seconds to wait for a connection")
    DB_POOL_RECYCLE: int = Field(default=1800, description="Recycle connections after N seconds")

    AUTO_CREATE_DB: bool = Field(
        default=False,
        description="When true (development only), call Base.metadata.create_all on startup",
    )
    SLOW_REQUEST_THRESHOLD: float = Field(
        default=1.0,
        description="Log warning for requests slower than this (seconds)",
    )
    RATE_LIMIT_ENABLED: bool = Field(
        default=True,
        description="Apply per-IP rate limits to submission, contact and chat endpoints",
    )
    TRUST_PROXY_HEADERS: bool = Field(
        default=True,
        description=(
            "Read the client IP from CF-Connecting-IP / X-Real-IP / "
            "X-Forwarded-For. Disable when the API is exposed without a proxy."
        ),
    )

    # Consolidation
    CONSOLIDATION_CANONICALIZE: bool = Field(
        default=False,
        description=(
            "Canonicalize identifiers before grouping (digits-only phones, "
            "lower-cased emails and business names). Off keeps exact matching."
        ),
    )

    # Statistics snapshots
    STATS_SNAPSHOT_RETENTION: int = Field(
        default=100,
        ge=1,
        description="Number of snapshot rows kept per scope",
    )

    # Proof file uploads
    UPLOAD_DIR: str = Field(default="data/uploads", description="Proof file directory")
    MAX_UPLOAD_SIZE_MB: int = Field(default=10, description="Maximum proof file size")
    ALLOWED_UPLOAD_TYPES: List[str] = Field(
        default=[
            "image/jpeg",
            "image/png",
            "image/gif",
            "application/pdf",
            "text/plain",
        ],
        description="MIME types accepted for proof files",
    )

    # Email provider
    EMAIL_PROVIDER: str = Field(
        default="console",
        description="Email provider: 'smtp' or 'console'",
    )
    SMTP_HOST: str = Field(default="localhost")
    SMTP_PORT: int = Field(default=587)
    SMTP_USER: str = Field(default="")
    SMTP_PASSWORD: str = Field(default="")
    SMTP_FROM_EMAIL: str = Field(default="noreply@beaware.fyi")
    SMTP_FROM_NAME: str = Field(default="BeAware Contact Form")
    SMTP_USE_TLS: bool = Field(default=True)
    SMTP_USE_SSL: bool = Field(default=False)
    CONTACT_RECIPIENT_EMAIL: str = Field(
        default="beaware.fyi@gmail.com",
        description="Mailbox receiving contact form submissions",
    )

    # Help chatbot
    PERPLEXITY_API_KEY: str = Field(
        default="",
        description="Perplexity API key; the chatbot answers from a fallback text when empty",
    )
    PERPLEXITY_API_URL: str = Field(default="https://api.perplexity.ai/chat/completions")
    PERPLEXITY_MODEL: str = Field(default="llama-3.1-sonar-small-128k-online")
    PERPLEXITY_TIMEOUT: float = Field(default=30.0)

    @field_validator("CORS_ORIGINS", "ALLOWED_UPLOAD_TYPES", mode="before")
    @classmethod
    def parse_comma_list(cls, v: str | List[str]) -> List[str]:
        """Parse list settings from comma-separated strings."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=_should_load_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()  # type: ignore[call-arg]


def get_settings() -> Settings:
    """Get the settings instance (for dependency injection)."""
    return settings
