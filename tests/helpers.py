"""Shared test helper classes and utilities.

This module contains classes that test files import directly (as opposed
to pytest fixtures which are auto-injected).
"""

from __future__ import annotations

import asyncio
from typing import Any

from switchback.import_export import ExportResult, ImportResult
from switchback.live_sync import SyncResult


class FakeBackend:
    """In-memory ImportExportBackend that records every call.

    Attributes:
        events: Names of backend calls, in order. Tests append their own
            markers (e.g. "notify") to check sequencing.
        import_gate: When set to an Event, import_config_from_file waits
            for it, keeping the import in flight.
        import_started: Set once import_config_from_file is entered.
    """

    def __init__(
        self,
        open_path: str | None = "/backups/config.json",
        save_path: str | None = "/exports/out.json",
        import_result: ImportResult | None = None,
        import_error: Exception | None = None,
        export_result: ExportResult | None = None,
        export_error: Exception | None = None,
        sync_result: SyncResult | None = None,
        dialog_error: Exception | None = None,
    ) -> None:
        self.open_path = open_path
        self.save_path = save_path
        self.import_result = import_result or ImportResult(success=True, backup_id="b1")
        self.import_error = import_error
        self.export_result = export_result
        self.export_error = export_error
        self.sync_result = sync_result or SyncResult(ok=True)
        self.dialog_error = dialog_error

        self.events: list[str] = []
        self.calls: list[tuple[str, Any]] = []
        self.import_gate: asyncio.Event | None = None
        self.import_started = asyncio.Event()

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def _record(self, name: str, arg: Any = None) -> None:
        self.calls.append((name, arg))
        self.events.append(name)

    async def open_file_dialog(self) -> str | None:
        self._record("open_file_dialog")
        if self.dialog_error is not None:
            raise self.dialog_error
        return self.open_path

    async def save_file_dialog(self, default_name: str) -> str | None:
        self._record("save_file_dialog", default_name)
        if self.dialog_error is not None:
            raise self.dialog_error
        return self.save_path

    async def import_config_from_file(self, path: str) -> ImportResult:
        self._record("import_config_from_file", path)
        self.import_started.set()
        if self.import_gate is not None:
            await self.import_gate.wait()
        if self.import_error is not None:
            raise self.import_error
        return self.import_result

    async def export_config_to_file(self, path: str) -> ExportResult:
        self._record("export_config_to_file", path)
        if self.export_error is not None:
            raise self.export_error
        return self.export_result or ExportResult(success=True, file_path=path)

    async def sync_current_providers_live(self) -> SyncResult:
        self._record("sync_current_providers_live")
        return self.sync_result
