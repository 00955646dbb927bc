"""
Configuration helpers for the postboard backend.

Settings are read from environment variables once and cached; tests call
``get_settings.cache_clear()`` after changing the environment.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    db_path: str
    host: str
    port: int
    log_level: str
    hash_passwords: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        db_path=os.getenv("DB_PATH") or "./db.json",
        host=os.getenv("HOST") or "localhost",
        port=_int(os.getenv("PORT", "8080"), 8080),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        hash_passwords=_bool(os.getenv("HASH_PASSWORDS"), True),
    )
