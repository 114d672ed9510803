from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # Service
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    # Host page
    meet_host: str = "meet.google.com"
    max_snapshot_bytes: int = 5 * 1024 * 1024

    # Timing (milliseconds)
    debounce_ms: int = 1000
    autostart_settle_ms: int = 2000  # lets the Meet UI finish its own first render

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    @property
    def autostart_settle_seconds(self) -> float:
        return self.autostart_settle_ms / 1000.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
