"""Import/export controller for SwitchBack.

Drives the import flow as a two-phase commit:

    Phase 1 (persist + notify): the backend replaces the configuration and,
    as soon as it reports success, the on_import_success callback fires so
    dependent views refresh whatever happens next.

    Phase 2 (reconcile): the current providers are synced to their live
    settings files. A failure here leaves the import in place and resolves
    to PARTIAL_SUCCESS, asking the user to re-select the provider manually.

Outcomes are never returned or raised. Callers observe the session fields
(or the on_state_changed observer) and the notifier.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import TYPE_CHECKING, Any, AsyncIterator, Awaitable, Callable

from switchback import messages
from switchback.live_sync import SyncResult
from switchback.session import ImportSession, ImportState, ImportStatus

if TYPE_CHECKING:
    from switchback.backend import ImportExportBackend
    from switchback.notifications import Notifier

logger = logging.getLogger(__name__)

ImportSuccessCallback = Callable[[], Awaitable[None] | None]


def default_export_name(
    now: datetime,
    prefix: str = "switchback-export",
    extension: str = "json",
) -> str:
    """Build the default export file name, e.g. prefix-20260101_093000.json."""
    return f"{prefix}-{now:%Y%m%d_%H%M%S}.{extension}"


class ImportExportController:
    """Owns an ImportSession and runs import/export against a backend.

    Example:
        >>> controller = ImportExportController(LocalBackend(), ToastNotifier())
        >>> await controller.select_import_file()
        >>> await controller.import_config()
        >>> controller.status
        <ImportStatus.SUCCESS: 'success'>

    Concurrency:
        All methods run on one event loop. A single-slot lock guards the
        import sequence; an import_config() call made while another is in
        flight returns immediately without touching the backend.
    """

    def __init__(
        self,
        backend: "ImportExportBackend",
        notifier: "Notifier",
        on_import_success: ImportSuccessCallback | None = None,
        on_state_changed: Callable[[ImportState], Any] | None = None,
        export_prefix: str = "switchback-export",
        export_extension: str = "json",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the controller.

        Args:
            backend: Dialogs, import/export and live sync operations.
            notifier: Toast-equivalent feedback channel.
            on_import_success: Fired once per successful backend import,
                before live sync. May return an awaitable, which is scheduled
                and not awaited.
            on_state_changed: Observer receiving each new session state.
            export_prefix: Default export file name prefix.
            export_extension: Default export file extension.
            clock: Time source for export file names.
        """
        self._backend = backend
        self._notifier = notifier
        self._on_import_success = on_import_success
        self._export_prefix = export_prefix
        self._export_extension = export_extension
        self._clock = clock

        self._session = ImportSession(on_change=on_state_changed)
        self._import_lock = asyncio.Lock()
        self._callback_tasks: set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def state(self) -> ImportState:
        return self._session.state

    @property
    def selected_file(self) -> str:
        return self._session.selected_file

    @property
    def status(self) -> ImportStatus:
        return self._session.status

    @property
    def error_message(self) -> str | None:
        return self._session.error_message

    @property
    def backup_id(self) -> str | None:
        return self._session.backup_id

    @property
    def is_importing(self) -> bool:
        return self._session.is_importing

    @property
    def disposed(self) -> bool:
        return self._session.disposed

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    async def select_import_file(self) -> None:
        """Pick a backup file with the backend's file dialog.

        A picked file starts a fresh attempt (status back to idle). A
        cancelled dialog changes nothing. A failing dialog is reported
        through the notifier and leaves the status fields untouched.
        """
        try:
            file_path = await self._backend.open_file_dialog()
        except Exception as e:
            logger.error("controller: file dialog failed: %s", e)
            self._notify("error", messages.SELECT_FILE_FAILED)
            return

        if file_path:
            self.select_file(file_path)

    def select_file(self, file_path: str) -> None:
        """Select a backup file without a dialog (CLI argument, drag and drop)."""
        logger.info("controller: file selected, path=%s", file_path)
        self._session.update(
            selected_file=file_path,
            status=ImportStatus.IDLE,
            error_message=None,
        )

    def clear_selection(self) -> None:
        """Reset the file, status, error message and backup id."""
        self._session.reset()

    def reset_status(self) -> None:
        """Reset status, error message and backup id, keeping the file."""
        self._session.reset_status()

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    async def import_config(self) -> None:
        """Import the selected backup and reconcile live settings.

        Flow:
        1. Enter IMPORTING and take the guard
        2. Backend import
        3. On success, record the backup id and fire on_import_success
        4. Live sync
        5. Resolve SUCCESS / PARTIAL_SUCCESS / ERROR
        6. Release the guard
        """
        file_path = self._session.selected_file
        if not file_path:
            logger.warning("controller: import requested with no file selected")
            self._notify("error", messages.NO_FILE_SELECTED)
            return

        if self._import_lock.locked():
            logger.debug("controller: import already in flight, dropping request")
            return

        async with self._import_lock:
            self._session.update(
                status=ImportStatus.IMPORTING,
                error_message=None,
                is_importing=True,
            )
            try:
                await self._run_import(file_path)
            except Exception as e:
                logger.error("controller: import failed, error=%s", e)
                message = str(e)
                self._resolve(ImportStatus.ERROR, error_message=message, backup_id=None)
                self._notify("error", messages.IMPORT_FAILED.format(message=message))
            finally:
                # Reached still IMPORTING only when the task was cancelled
                if self._session.status is ImportStatus.IMPORTING:
                    logger.warning("controller: import cancelled, path=%s", file_path)
                    self._resolve(
                        ImportStatus.ERROR,
                        error_message=messages.IMPORT_CANCELLED,
                        backup_id=None,
                    )
                elif self._session.is_importing:
                    self._session.update(is_importing=False)

    async def _run_import(self, file_path: str) -> None:
        logger.info("controller: import started, path=%s", file_path)
        result = await self._backend.import_config_from_file(file_path)

        if not result.success:
            message = result.message or messages.CONFIG_CORRUPTED
            logger.warning("controller: backend rejected import, message=%s", message)
            self._resolve(ImportStatus.ERROR, error_message=message, backup_id=None)
            self._notify("error", message)
            return

        # Phase 1 done: data is persisted, let dependent views refresh now
        self._session.update(backup_id=result.backup_id)
        self._fire_import_success()

        # Phase 2: best effort
        try:
            sync_result = await self._backend.sync_current_providers_live()
        except Exception as e:
            sync_result = SyncResult(ok=False, error=e)
        if sync_result.ok:
            logger.info("controller: import complete, backup_id=%s", result.backup_id)
            self._resolve(ImportStatus.SUCCESS, error_message=None, backup_id=result.backup_id)
            self._notify("success", messages.IMPORT_SUCCESS)
        else:
            logger.error("controller: live sync failed after import, error=%s", sync_result.error)
            self._resolve(
                ImportStatus.PARTIAL_SUCCESS,
                error_message=None,
                backup_id=result.backup_id,
            )
            self._notify("warning", messages.IMPORT_PARTIAL_SUCCESS)

    def _resolve(self, status: ImportStatus, error_message: str | None, backup_id: str | None) -> None:
        # Final status and guard flag change together
        self._session.update(
            status=status,
            error_message=error_message,
            backup_id=backup_id,
            is_importing=False,
        )

    def _fire_import_success(self) -> None:
        """Invoke on_import_success without waiting for it.

        Synchronous failures are logged. An awaitable result is scheduled as
        a task whose failure is logged when it completes.
        """
        if self._on_import_success is None or self.disposed:
            return

        try:
            result = self._on_import_success()
        except Exception as e:
            logger.error("controller: on_import_success callback failed: %s", e)
            return

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._callback_tasks.add(task)
            task.add_done_callback(self._on_callback_done)

    def _on_callback_done(self, task: asyncio.Task) -> None:
        self._callback_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("controller: on_import_success callback failed: %s", error)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    async def export_config(self) -> None:
        """Export the configuration to a user-chosen file.

        Independent of the import status. Outcomes are reported through the
        notifier only.
        """
        try:
            default_name = default_export_name(
                self._clock(),
                prefix=self._export_prefix,
                extension=self._export_extension,
            )
            destination = await self._backend.save_file_dialog(default_name)
            if not destination:
                logger.info("controller: export cancelled, no destination")
                self._notify("error", messages.NO_SAVE_PATH)
                return

            result = await self._backend.export_config_to_file(destination)
            if result.success:
                display_path = result.file_path or destination
                self._notify("success", f"{messages.CONFIG_EXPORTED}\n{display_path}")
            else:
                detail = f": {result.message}" if result.message else ""
                self._notify("error", f"{messages.EXPORT_FAILED}{detail}")
        except Exception as e:
            logger.error("controller: export failed: %s", e)
            self._notify("error", messages.EXPORT_FAILED_ERROR.format(message=e))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def dispose(self) -> None:
        """Detach the session. Later writes and notifications are dropped."""
        if not self._session.disposed:
            logger.debug("controller: disposed")
        self._session.dispose()

    def _notify(self, level: str, message: str) -> None:
        if self.disposed:
            return
        try:
            getattr(self._notifier, level)(message)
        except Exception as e:
            logger.warning("controller: notifier failed, level=%s, error=%s", level, e)


@asynccontextmanager
async def open_import_session(
    backend: "ImportExportBackend",
    notifier: "Notifier",
    **kwargs: Any,
) -> AsyncIterator[ImportExportController]:
    """Provide a controller whose session is reset and disposed on exit.

    Example:
        >>> async with open_import_session(LocalBackend(), ToastNotifier()) as ctl:
        ...     ctl.select_file("/tmp/backup.json")
        ...     await ctl.import_config()
    """
    controller = ImportExportController(backend, notifier, **kwargs)
    try:
        yield controller
    finally:
        controller.clear_selection()
        controller.dispose()
