"""JSON snapshot backups of the full data set, keeping the most recent copies."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from ..database.repository import Repository

logger = logging.getLogger(__name__)

_PREFIX = "life_analytics_"


def write_export(data: dict[str, Any], path: str | Path) -> Path:
    """Write an export document as pretty-printed UTF-8 JSON."""
    dest = Path(path)
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return dest


def read_export(path: str | Path) -> dict[str, Any]:
    """Load an export document written by write_export (or the browser app)."""
    return json.loads(Path(path).read_text(encoding="utf-8"))


def create_backup(repo: Repository, backup_dir: str | Path, keep: int = 7) -> Path | None:
    """Export the repository to a timestamped snapshot file.

    Args:
        repo: Repository to export.
        backup_dir: Directory for snapshot files.
        keep: Number of snapshots to retain.

    Returns:
        Path to the created snapshot, or None on failure.
    """
    directory = Path(backup_dir)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    dest = directory / f"{_PREFIX}{timestamp}.json"

    try:
        write_export(repo.export_data(), dest)
        logger.info("Backup created: %s", dest)
        _prune_old_backups(directory, keep)
        return dest
    except Exception as exc:
        logger.error("Backup failed: %s", exc)
        return None


def _prune_old_backups(directory: Path, keep: int) -> None:
    """Remove snapshots beyond the retention limit."""
    backups = sorted(directory.glob(f"{_PREFIX}*.json"))
    to_remove = backups[:-keep] if len(backups) > keep else []
    for path in to_remove:
        try:
            path.unlink()
            logger.debug("Removed old backup: %s", path)
        except Exception as exc:
            logger.warning("Could not remove old backup %s: %s", path, exc)
