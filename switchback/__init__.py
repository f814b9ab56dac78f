"""SwitchBack - configuration backup import/export with live provider sync."""

__version__ = "0.1.0"

from switchback.backend import HeadlessBackend, ImportExportBackend, LocalBackend  # noqa: E402
from switchback.controller import (  # noqa: E402
    ImportExportController,
    default_export_name,
    open_import_session,
)
from switchback.import_export import ExportResult, ImportExportError, ImportResult  # noqa: E402
from switchback.live_sync import LiveSyncError, SyncResult  # noqa: E402
from switchback.notifications import Notifier, ToastNotifier  # noqa: E402
from switchback.session import ImportSession, ImportState, ImportStatus  # noqa: E402

__all__ = [
    "ExportResult",
    "HeadlessBackend",
    "ImportExportBackend",
    "ImportExportController",
    "ImportExportError",
    "ImportResult",
    "ImportSession",
    "ImportState",
    "ImportStatus",
    "LiveSyncError",
    "LocalBackend",
    "Notifier",
    "SyncResult",
    "ToastNotifier",
    "default_export_name",
    "open_import_session",
]
