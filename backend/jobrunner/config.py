"""Application configuration settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_VERSION = "0.1.0"


class Settings(BaseSettings):
    """Runtime configuration loaded from environment."""

    VERSION: str = APP_VERSION

    # Required connection details
    REDIS_URL: str = Field(..., min_length=1)

    # Shared secret the external scheduler sends with each trigger
    WEBHOOK_TOKEN: str | None = None

    # Locks are only enforced in production so local dispatches never skip jobs
    ENVIRONMENT: str = "development"

    # Job dispatch
    JOB_LOCK_PREFIX: str = "job:"
    DEFAULT_LOCK_EXPIRATION: int = 60 * 14 + 50
    CRON_TIMEZONE: str = "UTC"
    HEARTBEAT_KEY: str = "jobs:heartbeat"

    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings():
    """Return Settings instance."""
    return Settings()
