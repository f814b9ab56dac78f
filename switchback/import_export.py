"""File import and export of the configuration document.

Content problems (not JSON, wrong structure) come back as a failed
``ImportResult``. Problems reaching the files themselves raise
``ImportExportError`` so callers can tell a bad backup from a broken disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from switchback.backup import cleanup_old_backups, create_backup
from switchback.store import DocumentFormatError, parse_document, write_text_atomic

logger = logging.getLogger(__name__)


class ImportExportError(Exception):
    """Raised when a backup file or the document cannot be read or written."""


@dataclass
class ImportResult:
    """Result of importing a backup file.

    Attributes:
        success: Whether the document was replaced.
        message: Human-readable outcome.
        backup_id: Safety backup taken before overwriting, if any.
    """

    success: bool
    message: str = ""
    backup_id: str | None = None


@dataclass
class ExportResult:
    """Result of exporting the document.

    Attributes:
        success: Whether the file was written.
        message: Human-readable outcome.
        file_path: Where the export was written.
    """

    success: bool
    message: str = ""
    file_path: str | None = None


def import_config_from_file(
    file_path: str | Path,
    document_path: Path,
    backup_dir: Path,
    max_backups: int = 10,
) -> ImportResult:
    """Replace the document with the content of a backup file.

    Flow:
    1. Read and validate the backup file
    2. Take a safety backup of the current document
    3. Write the new document atomically
    4. Prune old safety backups

    Args:
        file_path: Backup file chosen by the user.
        document_path: Persisted document to replace.
        backup_dir: Where safety backups go.
        max_backups: Safety backups to keep.

    Returns:
        ImportResult; success=False when the backup content is invalid.

    Raises:
        ImportExportError: If a file cannot be read or written.
    """
    source = Path(file_path)
    logger.info("import: starting, source=%s", source)

    try:
        content = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ImportExportError(f"Failed to read import file: {e}") from e

    try:
        parse_document(content)
    except DocumentFormatError as e:
        logger.warning("import: rejected invalid content, source=%s", source)
        return ImportResult(success=False, message=str(e))

    try:
        backup_id = create_backup(document_path, backup_dir)
    except OSError as e:
        raise ImportExportError(f"Failed to create backup: {e}") from e

    try:
        write_text_atomic(document_path, content)
    except OSError as e:
        raise ImportExportError(f"Failed to write configuration: {e}") from e

    try:
        cleanup_old_backups(backup_dir, max_backups)
    except OSError as e:
        # The import itself is done; stale backups are only clutter
        logger.warning("import: backup cleanup failed: %s", e)

    logger.info("import: complete, backup_id=%s", backup_id)
    return ImportResult(
        success=True,
        message="Configuration imported successfully",
        backup_id=backup_id,
    )


def export_config_to_file(file_path: str | Path, document_path: Path) -> ExportResult:
    """Copy the current document to file_path.

    Returns:
        ExportResult; success=False when there is no document yet.

    Raises:
        ImportExportError: If a file cannot be read or written.
    """
    target = Path(file_path)

    if not document_path.exists():
        return ExportResult(success=False, message="No configuration to export")

    try:
        content = document_path.read_text(encoding="utf-8")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ImportExportError(f"Failed to export configuration: {e}") from e

    logger.info("export: complete, target=%s", target)
    return ExportResult(
        success=True,
        message="Configuration exported successfully",
        file_path=str(target),
    )
