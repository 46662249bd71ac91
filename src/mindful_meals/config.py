"""
Mindful Meals - Configuration and settings.

Settings are read from the environment (and `.env`). Supabase credentials are
required: without them the backend refuses to start.
"""

from functools import lru_cache
from typing import Literal

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class MissingConfiguration(RuntimeError):
    """Required settings are absent. Fatal at startup."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        names = ", ".join(name.upper() for name in missing)
        super().__init__(f"Please define the {names} environment variable(s)")


class Settings(BaseSettings):
    """Backend settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Supabase
    supabase_url: str
    supabase_service_role_key: str

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 6000
    cors_origins: list[str] = [
        "http://localhost:8081",
        "exp://localhost:8081",
        "http://localhost:19006",
    ]

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


def load_settings(**overrides) -> Settings:
    """
    Build Settings, turning missing required fields into MissingConfiguration.

    Other validation errors (bad values) propagate unchanged.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = [
            str(err["loc"][0])
            for err in e.errors()
            if err["type"] == "missing" and err["loc"]
        ]
        if missing:
            raise MissingConfiguration(missing) from e
        raise


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
