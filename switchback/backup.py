"""Safety backups of the configuration document.

A backup is taken right before an import overwrites the document. Its id is
the backup file stem (``backup_YYYYMMDD_HHMMSS``) and is reported back to the
caller so the user knows which snapshot holds their previous settings.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "backup_"


@dataclass(frozen=True)
class BackupInfo:
    """A safety backup on disk.

    Attributes:
        backup_id: File stem, e.g. "backup_20260101_120000".
        path: Full path to the backup file.
        created_at: File modification time.
    """

    backup_id: str
    path: Path
    created_at: datetime


def create_backup(
    config_path: Path,
    backup_dir: Path,
    now: Callable[[], datetime] = datetime.now,
) -> str | None:
    """Copy the current document into the backup directory.

    Args:
        config_path: Document to back up.
        backup_dir: Directory receiving backups (created if needed).
        now: Clock, injectable for testing.

    Returns:
        The backup id, or None if there was no document to back up.

    Raises:
        OSError: If the backup cannot be written.
    """
    if not config_path.exists():
        logger.debug("backup: nothing to back up at %s", config_path)
        return None

    backup_dir.mkdir(parents=True, exist_ok=True)

    base_id = f"{BACKUP_PREFIX}{now():%Y%m%d_%H%M%S}"
    backup_id = base_id
    suffix = 1
    while (backup_dir / f"{backup_id}.json").exists():
        backup_id = f"{base_id}_{suffix}"
        suffix += 1

    shutil.copyfile(config_path, backup_dir / f"{backup_id}.json")
    logger.info("backup: created, backup_id=%s", backup_id)
    return backup_id


def list_backups(backup_dir: Path) -> list[BackupInfo]:
    """List safety backups, newest first."""
    if not backup_dir.is_dir():
        return []

    backups = []
    for path in backup_dir.glob(f"{BACKUP_PREFIX}*.json"):
        backups.append(
            BackupInfo(
                backup_id=path.stem,
                path=path,
                created_at=datetime.fromtimestamp(path.stat().st_mtime),
            )
        )
    # Ids embed the timestamp, so they break ties between equal mtimes
    backups.sort(key=lambda b: (b.created_at, b.backup_id), reverse=True)
    return backups


def cleanup_old_backups(backup_dir: Path, keep_count: int) -> list[str]:
    """Remove the oldest backups beyond keep_count.

    The newest backup is always kept, so the id reported for the import
    that just ran stays valid even when keep_count is 0.

    Returns:
        Ids of removed backups.
    """
    keep_count = max(keep_count, 1)
    backups = list_backups(backup_dir)
    if len(backups) <= keep_count:
        return []

    removed = []
    for backup in backups[keep_count:]:
        backup.path.unlink()
        removed.append(backup.backup_id)
    logger.info("backup: pruned %d old backups, keep_count=%d", len(removed), keep_count)
    return removed
