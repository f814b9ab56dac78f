"""Backend operations consumed by the import/export controller.

The controller only talks to an ImportExportBackend. LocalBackend wires the
protocol to native file dialogs and the on-disk document; tests and
embedding UIs can supply their own implementation.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol

from switchback.config import (
    Config,
    get_backup_dir,
    get_config,
    get_document_path,
)
from switchback.import_export import (
    ExportResult,
    ImportResult,
    export_config_to_file,
    import_config_from_file,
)
from switchback.live_sync import SyncResult, sync_current_providers_live_safe

logger = logging.getLogger(__name__)


class ImportExportBackend(Protocol):
    """Operations the controller awaits.

    Dialog methods return None on cancellation and never raise for it.
    import_config_from_file raises on transport failure and returns a failed
    ImportResult for invalid content. sync_current_providers_live never
    raises.
    """

    async def open_file_dialog(self) -> str | None: ...

    async def save_file_dialog(self, default_name: str) -> str | None: ...

    async def import_config_from_file(self, path: str) -> ImportResult: ...

    async def export_config_to_file(self, path: str) -> ExportResult: ...

    async def sync_current_providers_live(self) -> SyncResult: ...


class LocalBackend:
    """Backend operating on the local document and native dialogs.

    Blocking file work runs in a worker thread. Dialogs run on the calling
    thread because Tk must stay on the thread that created it.
    """

    def __init__(
        self,
        config: Config | None = None,
        document_path: Path | None = None,
        backup_dir: Path | None = None,
    ) -> None:
        """Initialize the backend.

        Args:
            config: Settings; defaults to the cached settings.
            document_path: Override for the persisted document (for testing).
            backup_dir: Override for the safety backup directory (for testing).
        """
        self._config = config if config is not None else get_config()
        self.document_path = document_path or get_document_path()
        self.backup_dir = backup_dir or get_backup_dir()

    @property
    def max_backups(self) -> int:
        return int(self._config.get("backup", {}).get("max_backups", 10))

    @property
    def live_paths(self) -> dict[str, str]:
        return dict(self._config.get("live", {}))

    async def open_file_dialog(self) -> str | None:
        from switchback.dialogs import open_file_dialog

        return open_file_dialog()

    async def save_file_dialog(self, default_name: str) -> str | None:
        from switchback.dialogs import save_file_dialog

        return save_file_dialog(default_name)

    async def import_config_from_file(self, path: str) -> ImportResult:
        return await asyncio.to_thread(
            import_config_from_file,
            path,
            self.document_path,
            self.backup_dir,
            self.max_backups,
        )

    async def export_config_to_file(self, path: str) -> ExportResult:
        return await asyncio.to_thread(export_config_to_file, path, self.document_path)

    async def sync_current_providers_live(self) -> SyncResult:
        try:
            return await asyncio.to_thread(
                sync_current_providers_live_safe,
                self.document_path,
                self.live_paths,
            )
        except Exception as e:
            # Thread dispatch itself failed
            logger.error("backend: live sync dispatch failed: %s", e)
            return SyncResult(ok=False, error=e)


class HeadlessBackend(LocalBackend):
    """Local backend whose dialogs return preset paths.

    Used by the command line, where paths come from arguments. A preset of
    None behaves like a cancelled dialog.
    """

    def __init__(
        self,
        open_path: str | None = None,
        save_path: str | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._open_path = open_path
        self._save_path = save_path

    async def open_file_dialog(self) -> str | None:
        return self._open_path

    async def save_file_dialog(self, default_name: str) -> str | None:
        if self._save_path is None:
            return None
        target = Path(self._save_path)
        # An existing directory receives the default file name
        if target.is_dir():
            target = target / default_name
        return str(target)
