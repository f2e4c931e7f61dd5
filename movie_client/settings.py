"""Configuration for the API client and the terminal UI."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "http://localhost:3001/movies"


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    api_url: str = Field(
        default=DEFAULT_API_URL,
        alias="MOVIE_API_URL",
        description="Base URL of the ``/movies`` API router.",
    )
    timeout_seconds: float = Field(default=10.0, alias="MOVIE_API_TIMEOUT_SECONDS", gt=0)


@lru_cache(maxsize=1)
def get_client_settings() -> ClientSettings:
    return ClientSettings()


__all__ = ["ClientSettings", "DEFAULT_API_URL", "get_client_settings"]
