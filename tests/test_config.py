"""Tests for life_analytics/config.py."""

import os
from unittest.mock import patch

import pytest

from life_analytics.config import ConfigError, load_config


@pytest.fixture
def base_env(tmp_path) -> dict:
    return {
        "DATABASE_PATH": str(tmp_path / "data" / "test.db"),
        "LOG_FILE": str(tmp_path / "logs" / "test.log"),
    }


def test_load_config_defaults(base_env, tmp_path):
    with patch.dict(os.environ, base_env, clear=True):
        config = load_config()
    assert config.log_level == "INFO"
    assert config.backup_dir == "./data/backups"
    assert config.keep_backups == 7
    assert config.trend_window_days == 7
    assert (tmp_path / "data").is_dir()
    assert (tmp_path / "logs").is_dir()


def test_load_config_from_env(base_env):
    env = dict(base_env, LOG_LEVEL="DEBUG", BACKUP_DIR="/tmp/snaps", KEEP_BACKUPS="3", TREND_WINDOW_DAYS="14")
    with patch.dict(os.environ, env, clear=True):
        config = load_config()
    assert config.database_path == base_env["DATABASE_PATH"]
    assert config.log_level == "DEBUG"
    assert config.backup_dir == "/tmp/snaps"
    assert config.keep_backups == 3
    assert config.trend_window_days == 14


@pytest.mark.parametrize("name, value", [
    ("KEEP_BACKUPS", "many"),
    ("KEEP_BACKUPS", "0"),
    ("TREND_WINDOW_DAYS", "-7"),
    ("TREND_WINDOW_DAYS", "7.5"),
])
def test_load_config_rejects_bad_integers(base_env, name, value):
    env = dict(base_env, **{name: value})
    with patch.dict(os.environ, env, clear=True):
        with pytest.raises(ConfigError, match=name):
            load_config()
