"""
Health Check Configuration Module
=================================

Centralized configuration management using Pydantic Settings.

Loads configuration from:
    1. Environment variables
    2. .env file (if present)
    3. Default values

Usage:
    from healthcheck.config import settings

    print(settings.postgres_async_dsn)
    print(settings.registry_api_url)

Author: Health Check Team
Version: 1.0.0
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Naming convention: UPPER_SNAKE_CASE in env, lower_snake_case in code.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # =========================================================================
    # Application Settings
    # =========================================================================

    app_name: str = Field(default="Compliance Health Check", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=True, description="Render logs as JSON")

    # =========================================================================
    # API Server
    # =========================================================================

    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")
    cors_allowed_origins: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origins (comma-separated)"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    # =========================================================================
    # PostgreSQL
    # =========================================================================

    database_enabled: bool = Field(
        default=False,
        description="Persist results in PostgreSQL (in-memory store otherwise)"
    )
    postgres_host: str = Field(default="localhost", description="PostgreSQL host")
    postgres_port: int = Field(default=5432, description="PostgreSQL port")
    postgres_db: str = Field(default="healthcheck", description="PostgreSQL database")
    postgres_user: str = Field(default="healthcheck_user", description="PostgreSQL user")
    postgres_password: str = Field(
        default="healthcheck_password_change_me",
        description="PostgreSQL password"
    )

    @property
    def postgres_async_dsn(self) -> str:
        """Get async PostgreSQL connection string for asyncpg."""
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # =========================================================================
    # Authentication
    # =========================================================================

    jwt_secret: str = Field(
        default="healthcheck-dev-secret-CHANGE-IN-PRODUCTION",
        description="HMAC secret for access tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_expire_minutes: int = Field(default=60, ge=1, description="Access token TTL")

    # =========================================================================
    # Company Registry
    # =========================================================================

    registry_enabled: bool = Field(
        default=False,
        description="Whether company registry lookups are enabled"
    )
    registry_api_url: str = Field(
        default="http://localhost:8010",
        description="Company registry API base URL"
    )
    registry_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="Registry request timeout"
    )

    # =========================================================================
    # Shareable Reports
    # =========================================================================

    frontend_url: str = Field(
        default="http://localhost:5173",
        description="Frontend base URL used in share links"
    )
    share_default_expiry_days: int = Field(default=30, ge=1, le=365)

    # =========================================================================
    # History
    # =========================================================================

    history_default_limit: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Default page size for assessment history"
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are loaded only once.

    Returns:
        Settings instance
    """
    return Settings()


# Convenience alias
settings = get_settings()
