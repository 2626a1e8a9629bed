"""Configuration — env vars, YAML files, defaults."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    # None selects the platform default location
    path: Path | None = None
    max_connections: int = Field(default=10, ge=1)
    pool_timeout: float = 30.0
    busy_timeout: float = 30.0
    # applied to file targets only; None keeps the SQLite default
    journal_mode: str | None = "WAL"
    echo: bool = False

    model_config = {"env_prefix": "BURNCLOUD_DB_"}


class LoggingSettings(BaseSettings):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    model_config = {"env_prefix": "BURNCLOUD_LOG_"}


class AppConfig(BaseSettings):
    """Top-level configuration."""

    app_name: str = "BurnCloud"
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    log: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {"env_prefix": "BURNCLOUD_"}

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> AppConfig:
        """Load config from a YAML file; keys it omits fall back to env vars and defaults."""
        values: dict[str, Any] = {}
        if path is not None and path.exists():
            with open(path) as f:
                values = yaml.safe_load(f) or {}

        return cls(**values)


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Install a root handler at the configured level."""
    settings = settings or LoggingSettings()
    logging.basicConfig(
        level=getattr(logging, settings.level.upper(), logging.INFO),
        format=settings.format,
    )
