"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""


@dataclass
class Config:
    database_path: str
    log_level: str
    log_file: str
    backup_dir: str
    keep_backups: int
    trend_window_days: int


def _positive_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got: {raw!r}")
    if value < 1:
        raise ConfigError(f"{name} must be positive, got: {value}")
    return value


def load_config() -> Config:
    """Load and validate configuration from environment variables."""
    database_path = os.getenv("DATABASE_PATH", "./data/life_analytics.db")
    log_file = os.getenv("LOG_FILE", "./logs/life_analytics.log")

    # Ensure data and logs directories exist
    Path(database_path).parent.mkdir(parents=True, exist_ok=True)
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    return Config(
        database_path=database_path,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=log_file,
        backup_dir=os.getenv("BACKUP_DIR", "./data/backups"),
        keep_backups=_positive_int("KEEP_BACKUPS", "7"),
        trend_window_days=_positive_int("TREND_WINDOW_DAYS", "7"),
    )
