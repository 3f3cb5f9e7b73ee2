"""Tests for life_analytics/utils/backup.py."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from life_analytics.analytics.records import DailyRecord
from life_analytics.database.repository import Repository
from life_analytics.utils.backup import _prune_old_backups, create_backup, read_export, write_export


@pytest.fixture
def repo(tmp_path):
    r = Repository(str(tmp_path / "backup.db"))
    r.init_database()
    yield r
    r._engine.dispose()


def test_create_backup_writes_export(repo, tmp_path):
    repo.save_record(DailyRecord(date=date(2026, 3, 10), sleep_hours=7))
    dest = create_backup(repo, tmp_path / "backups")
    assert dest is not None
    assert dest.name.startswith("life_analytics_")
    data = read_export(dest)
    assert data["entries"][0]["date"] == "2026-03-10"


def test_create_backup_failure_returns_none(tmp_path):
    broken = MagicMock()
    broken.export_data.side_effect = RuntimeError("disk gone")
    assert create_backup(broken, tmp_path / "backups") is None


def test_prune_keeps_most_recent(tmp_path):
    for i in range(5):
        (tmp_path / f"life_analytics_20260301_00000{i}.json").write_text("{}")
    (tmp_path / "unrelated.json").write_text("{}")
    _prune_old_backups(tmp_path, keep=2)
    remaining = sorted(p.name for p in tmp_path.glob("*.json"))
    assert remaining == [
        "life_analytics_20260301_000003.json",
        "life_analytics_20260301_000004.json",
        "unrelated.json",
    ]


def test_write_and_read_export(tmp_path):
    path = write_export({"entries": [], "habits": [], "goals": [], "achievements": ["ü"]}, tmp_path / "x" / "e.json")
    assert read_export(path)["achievements"] == ["ü"]
