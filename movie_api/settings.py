"""Centralized configuration management for the movie search backend."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before the settings
# singleton is instantiated so every consumer of :mod:`movie_api.settings` sees
# the same values regardless of import order.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_OMDB_BASE_URL = "http://www.omdbapi.com/"
DEFAULT_OMDB_TIMEOUT_SECONDS = 10.0
DEFAULT_DATA_DIR = "./data"
DEFAULT_FAVORITES_FILENAME = "favorites.json"
DEFAULT_CORS_ORIGINS = "http://localhost:3000"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3001
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_REDIS_RETRY_BACKOFF_SECONDS = 30.0
DEFAULT_SEARCH_CACHE_TTL_SECONDS = 300


def _normalize_origin(origin: str) -> str:
    """Return the origin stripped of whitespace and trailing slashes."""

    return origin.strip().rstrip("/")


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Every field maps onto one environment variable (see the ``alias`` of each
    field). Derived values such as the favorites file location and the parsed
    CORS allow-list are exposed as properties so callers never repeat the
    parsing logic.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    omdb_api_key: str | None = Field(
        default=None,
        alias="OMDB_API_KEY",
        description="API key for the OMDb provider. Required at startup.",
    )
    omdb_base_url: str = Field(
        default=DEFAULT_OMDB_BASE_URL,
        alias="OMDB_BASE_URL",
        description="Endpoint queried for movie searches.",
    )
    omdb_timeout_seconds: float = Field(
        default=DEFAULT_OMDB_TIMEOUT_SECONDS,
        alias="OMDB_TIMEOUT_SECONDS",
        gt=0,
        description="Timeout applied to every outbound provider request.",
    )
    data_dir: Path = Field(
        default=Path(DEFAULT_DATA_DIR),
        alias="DATA_DIR",
        description="Directory holding the favorites JSON file; created on demand.",
    )
    favorites_filename: str = Field(
        default=DEFAULT_FAVORITES_FILENAME,
        alias="FAVORITES_FILENAME",
    )
    cors_origins_raw: str | None = Field(
        default=None,
        alias="CORS_ORIGINS",
        description="Comma-separated list of origins allowed to call the API.",
    )
    host: str = Field(default=DEFAULT_HOST, alias="HOST")
    port: int = Field(default=DEFAULT_PORT, alias="PORT", ge=1, le=65535)
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )
    redis_url: str | None = Field(
        default=None,
        alias="REDIS_URL",
        description=(
            "Redis connection string for the search cache. When unset the"
            " in-process cache is used on its own."
        ),
    )
    redis_retry_backoff_seconds: float = Field(
        default=DEFAULT_REDIS_RETRY_BACKOFF_SECONDS,
        alias="REDIS_RETRY_BACKOFF_SECONDS",
        description="Cooldown duration applied after Redis connection failures.",
    )
    search_cache_ttl_seconds: int = Field(
        default=DEFAULT_SEARCH_CACHE_TTL_SECONDS,
        alias="SEARCH_CACHE_TTL_SECONDS",
        ge=0,
        description="Lifetime of cached provider search pages. ``0`` disables caching.",
    )

    @property
    def favorites_path(self) -> Path:
        """Return the full path of the favorites JSON file."""

        return self.data_dir / self.favorites_filename

    @property
    def cors_origins(self) -> list[str]:
        """Return the normalised CORS allow-list, falling back to localhost."""

        raw = self.cors_origins_raw or DEFAULT_CORS_ORIGINS
        origins = [_normalize_origin(origin) for origin in raw.split(",")]
        return [origin for origin in origins if origin]

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def required_config_errors(self) -> list[str]:
        """Return human-readable errors for configuration the API cannot run without."""

        errors: list[str] = []
        if not self.omdb_api_key or not self.omdb_api_key.strip():
            errors.append(
                "OMDB_API_KEY environment variable is required "
                "(get a free key at http://www.omdbapi.com/apikey.aspx)"
            )
        return errors

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if not self.redis_url:
            warnings.append(
                "REDIS_URL is not set - search results are cached in-process only"
            )

        if not self.cors_origins_raw:
            warnings.append(
                f"CORS_ORIGINS is not set - allowing {DEFAULT_CORS_ORIGINS} only"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_CORS_ORIGINS",
    "DEFAULT_DATA_DIR",
    "DEFAULT_FAVORITES_FILENAME",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_OMDB_BASE_URL",
    "DEFAULT_PORT",
    "DEFAULT_REDIS_RETRY_BACKOFF_SECONDS",
    "DEFAULT_SEARCH_CACHE_TTL_SECONDS",
    "get_settings",
]
