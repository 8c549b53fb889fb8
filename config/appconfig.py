# config/appconfig.py
"""
Application Configuration
Database, identity provider, pagination and logging settings
"""
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Calculate the project root
BASE_DIR = Path(__file__).resolve().parent.parent


class AppSettings(BaseSettings):
    """Core settings for the prescription service"""

    APP_NAME: str = "Dari Prescription Service"
    APP_VERSION: str = "1.0.0"

    # ============================================================================
    # DATABASE
    # ============================================================================
    # Managed Postgres (Neon etc.) in production, SQLite for local work
    DATABASE_URL: str = Field(default=f"sqlite+aiosqlite:///{BASE_DIR / 'prescriptions.db'}")
    DATABASE_ECHO: bool = False

    # ============================================================================
    # IDENTITY PROVIDER
    # ============================================================================
    # PEM public key used to verify session tokens issued by the identity provider
    AUTH_JWT_PUBLIC_KEY: Optional[str] = None
    AUTH_JWT_ALGORITHM: str = "RS256"
    AUTH_SESSION_COOKIE: str = "__session"
    # Admin user ids (comma separated) allowed to reset runtime configuration
    ADMIN_USER_IDS: str = ""

    # ============================================================================
    # PAGINATION
    # ============================================================================
    DEFAULT_PAGE_LIMIT: int = 50
    MAX_PAGE_LIMIT: int = 200

    # ============================================================================
    # LOGGING
    # ============================================================================
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @field_validator("DATABASE_URL")
    @classmethod
    def use_async_driver(cls, value: str) -> str:
        """Rewrite plain Postgres URLs to the asyncpg driver."""
        if value.startswith("postgres://"):
            return "postgresql+asyncpg://" + value[len("postgres://"):]
        if value.startswith("postgresql://"):
            return "postgresql+asyncpg://" + value[len("postgresql://"):]
        return value

    @property
    def admin_user_ids(self) -> list[str]:
        return [uid.strip() for uid in self.ADMIN_USER_IDS.split(",") if uid.strip()]

    @property
    def LOGGING_CONFIG(self) -> dict:
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {"handlers": ["console"], "level": self.LOG_LEVEL},
            "loggers": {
                "sqlalchemy.engine": {"level": "WARNING", "propagate": True},
                "httpx": {"level": "WARNING", "propagate": True},
            },
        }


settings = AppSettings()
