"""Tests for safety backups."""

from __future__ import annotations

import os
from datetime import datetime

from switchback.backup import cleanup_old_backups, create_backup, list_backups


def _fixed_clock():
    return datetime(2026, 5, 6, 7, 8, 9)


class TestCreateBackup:
    """Tests for create_backup function."""

    def test_no_document_returns_none(self, tmp_path):
        """Test that nothing is backed up when no document exists."""
        backup_dir = tmp_path / "backups"

        assert create_backup(tmp_path / "config.json", backup_dir) is None
        assert not backup_dir.exists()

    def test_copies_document(self, existing_document, tmp_path):
        """Test that the backup holds the previous document content."""
        backup_dir = tmp_path / "backups"

        backup_id = create_backup(existing_document, backup_dir, now=_fixed_clock)

        assert backup_id == "backup_20260506_070809"
        backup_path = backup_dir / f"{backup_id}.json"
        assert backup_path.read_text(encoding="utf-8") == existing_document.read_text(encoding="utf-8")

    def test_same_second_gets_suffix(self, existing_document, tmp_path):
        """Test that a second backup in the same second does not overwrite the first."""
        backup_dir = tmp_path / "backups"

        first = create_backup(existing_document, backup_dir, now=_fixed_clock)
        second = create_backup(existing_document, backup_dir, now=_fixed_clock)

        assert first == "backup_20260506_070809"
        assert second == "backup_20260506_070809_1"


class TestListAndCleanup:
    """Tests for listing and pruning backups."""

    def _make_backups(self, backup_dir, count):
        backup_dir.mkdir(parents=True, exist_ok=True)
        for i in range(count):
            path = backup_dir / f"backup_20260101_00000{i}.json"
            path.write_text("{}", encoding="utf-8")
            os.utime(path, (1_700_000_000 + i, 1_700_000_000 + i))

    def test_list_newest_first(self, tmp_path):
        """Test backups are listed newest first."""
        backup_dir = tmp_path / "backups"
        self._make_backups(backup_dir, 3)

        ids = [b.backup_id for b in list_backups(backup_dir)]

        assert ids == ["backup_20260101_000002", "backup_20260101_000001", "backup_20260101_000000"]

    def test_list_missing_dir(self, tmp_path):
        """Test a missing backup directory lists nothing."""
        assert list_backups(tmp_path / "nope") == []

    def test_list_ignores_other_files(self, tmp_path):
        """Test unrelated files in the backup directory are ignored."""
        backup_dir = tmp_path / "backups"
        self._make_backups(backup_dir, 1)
        (backup_dir / "notes.txt").write_text("x", encoding="utf-8")

        assert len(list_backups(backup_dir)) == 1

    def test_cleanup_keeps_newest(self, tmp_path):
        """Test cleanup removes the oldest backups beyond keep_count."""
        backup_dir = tmp_path / "backups"
        self._make_backups(backup_dir, 5)

        removed = cleanup_old_backups(backup_dir, keep_count=2)

        assert removed == ["backup_20260101_000002", "backup_20260101_000001", "backup_20260101_000000"]
        remaining = [b.backup_id for b in list_backups(backup_dir)]
        assert remaining == ["backup_20260101_000004", "backup_20260101_000003"]

    def test_cleanup_under_limit_is_noop(self, tmp_path):
        """Test cleanup leaves backups alone when under the limit."""
        backup_dir = tmp_path / "backups"
        self._make_backups(backup_dir, 2)

        assert cleanup_old_backups(backup_dir, keep_count=10) == []
        assert len(list_backups(backup_dir)) == 2

    def test_cleanup_zero_keeps_newest(self, tmp_path):
        """Test a keep_count of 0 still keeps the newest backup."""
        backup_dir = tmp_path / "backups"
        self._make_backups(backup_dir, 3)

        cleanup_old_backups(backup_dir, keep_count=0)

        assert [b.backup_id for b in list_backups(backup_dir)] == ["backup_20260101_000002"]
