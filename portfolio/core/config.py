"""
Configuration helpers for the portfolio back end.

Exposes a frozen Settings object read from environment variables (public base
URL, database URL, slug-check debounce, log level) so that routers/services do
not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_SLUG_CHECK_DEBOUNCE_MS = 500


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    public_base_url: str
    database_url: str
    slug_check_debounce_ms: int
    log_level: str

    @property
    def slug_check_debounce_seconds(self) -> float:
        return self.slug_check_debounce_ms / 1000.0


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            return default
        return parsed if parsed >= 0 else default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:3000").rstrip("/"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./portfolio.db"),
        slug_check_debounce_ms=_int(
            os.getenv("SLUG_CHECK_DEBOUNCE_MS"), DEFAULT_SLUG_CHECK_DEBOUNCE_MS
        ),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
