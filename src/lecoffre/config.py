"""Runtime configuration read from ``LECOFFRE_*`` environment variables.

Settings are rebuilt per invocation (see :func:`get_settings`) so that
tests can steer them with ``monkeypatch.setenv`` without cache busting.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STORAGE_PATH = Path("/tmp/lecoffre.json")


class Settings(BaseSettings):
    """Environment-driven settings for the CLI and its adapters."""

    model_config = SettingsConfigDict(env_prefix="LECOFFRE_", extra="ignore")

    storage_path: Path = Field(default=DEFAULT_STORAGE_PATH)
    """JSON file holding every project's variable sets."""

    log_level: str = Field(default="WARNING")
    """Threshold for diagnostics written to stderr."""

    shell: Literal["bash", "zsh", "fish"] | None = None
    """Skip parent-process detection and emit code for this shell."""

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level


def get_settings() -> Settings:
    return Settings()
