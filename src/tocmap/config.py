"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `TOCMAP_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """tocmap settings.

    All fields are environment-configurable. Prefix is `TOCMAP_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOCMAP_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
    )

    # Core
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = Field(default="WARNING")

    # Sources
    open_library_base_url: str = Field(default="https://openlibrary.org")
    google_books_base_url: str = Field(default="https://www.googleapis.com")
    # Description lines must be strictly longer than this to count as a chapter
    min_chapter_length: int = Field(default=5, ge=0)

    # Networking
    http_timeout_s: float = Field(default=30.0, gt=0.0)
    http_user_agent: str = Field(default="tocmap/0.1 (+https://openlibrary.org/developers/api)")

    # Output
    output_dir: Path = Field(default=Path("."))
    output_extension: str = Field(default=".mm")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("TOCMAP_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
