"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a default: the service runs with no environment at all
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - DATAFEED_GUARD_ env prefix: avoids clashing with other services in the same container
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from datafeed_guard.core.domain_types import Locale


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="DATAFEED_GUARD_", case_sensitive=False,
    )

    # Messages
    default_locale: Locale = Locale.EN

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
