"""
Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Allows an ephemeral JWT signing key when none is configured.
    # Never honoured in production.
    dev_mode: bool = False

    # ==========================================================================
    # API Server
    # ==========================================================================

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # ==========================================================================
    # Storage
    # ==========================================================================

    storage_backend: str = "memory"  # memory | json
    data_dir: str = "./data"

    # ==========================================================================
    # Authentication
    # ==========================================================================

    jwt_secret_key: str = ""
    jwt_algorithm: str = "HS256"
    jwt_token_expire_days: int = 7

    # Signup may pick a role; when off everyone starts as player
    allow_role_on_register: bool = True

    # ==========================================================================
    # Club
    # ==========================================================================

    default_club_name: str = "Clube"
    chat_history_limit: int = 100

    # ==========================================================================
    # Optional Services
    # ==========================================================================

    sentry_dsn: str = ""

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
