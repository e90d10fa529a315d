"""Runtime settings sourced from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple


_DEFAULT_CORS_ORIGINS = (
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:8000",
)


@dataclass(frozen=True)
class Settings:
    log_level: str
    auth_cookie_name: str
    auth_cookie_value: str
    cors_origins: Tuple[str, ...]


def _split_csv(value: str | None, default: Tuple[str, ...]) -> Tuple[str, ...]:
    """Return a tuple of non-empty comma-separated entries, or the default."""
    if value is None:
        return default
    items = tuple(part.strip() for part in value.split(",") if part.strip())
    return items or default


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings snapshot."""
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        auth_cookie_name=os.getenv("AUTH_COOKIE_NAME", "Auth-key"),
        auth_cookie_value=os.getenv("AUTH_COOKIE_VALUE", "A100"),
        cors_origins=_split_csv(os.getenv("CORS_ORIGINS"), _DEFAULT_CORS_ORIGINS),
    )


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
