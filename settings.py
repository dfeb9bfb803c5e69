# settings.py
"""
SEA Catering API Settings.

Pydantic settings management with environment variable support.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


DEFAULT_SECRET_KEY = "dev-only-change-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Environment
    ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # Relational database
    DATABASE_URL: str = Field(
        default="sqlite:///./sea_catering.db",
        description="SQLAlchemy connection string"
    )
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = Field(default=30, description="Seconds to wait for a pooled connection")
    DB_CONNECT_TIMEOUT: int = Field(default=10, description="Seconds to wait when opening a connection")

    # Transient storage failures are retried with exponential backoff
    DB_RETRY_ATTEMPTS: int = Field(default=3, ge=1)
    DB_RETRY_BASE_DELAY: float = Field(default=1.0, ge=0, description="First backoff delay in seconds")

    # JWT
    SECRET_KEY: str = Field(default=DEFAULT_SECRET_KEY, description="JWT signing secret")
    ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24)

    # CSRF tokens
    CSRF_TOKEN_TTL_SECONDS: int = Field(default=3600)
    TOKEN_STORE_URL: str = Field(
        default="memory://",
        description="memory:// or redis://[:password@]host:port/db"
    )

    # Rate limiting (slowapi)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = Field(default="memory://")
    RATE_LIMIT_GENERAL: str = "50/minute"
    RATE_LIMIT_AUTH: str = "5/15minutes"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Sentry Error Tracking
    SENTRY_DSN: Optional[str] = None
    SENTRY_ENVIRONMENT: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite (local development and tests)."""
        return self.DATABASE_URL.startswith("sqlite")

    def get_cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def validate_required_settings(self) -> None:
        """Validate that required settings are configured."""
        if not self.DATABASE_URL:
            raise ValueError("DATABASE_URL must be set")
        if not self.SECRET_KEY or self.SECRET_KEY == DEFAULT_SECRET_KEY:
            raise ValueError("SECRET_KEY must be changed from default in production")


settings = Settings()

# Validate in production
if settings.ENV == "production":
    settings.validate_required_settings()
