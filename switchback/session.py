"""Import session state for SwitchBack.

An ImportSession holds everything a UI needs to render the import panel:
the selected file, the status, the error message and the safety backup id.
State is kept as one immutable ImportState so readers always see a
consistent combination of fields.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class ImportStatus(str, Enum):
    """Status of the import flow.

    IDLE is both the initial state and the state reached by a reset.
    SUCCESS, PARTIAL_SUCCESS and ERROR are resting states; a new import
    attempt from any of them goes back through IMPORTING.
    """

    IDLE = "idle"
    IMPORTING = "importing"
    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial-success"
    ERROR = "error"

    @property
    def is_resting(self) -> bool:
        return self in (ImportStatus.SUCCESS, ImportStatus.PARTIAL_SUCCESS, ImportStatus.ERROR)


@dataclass(frozen=True)
class ImportState:
    """Immutable snapshot of an import session.

    Attributes:
        selected_file: Chosen backup path, "" when none.
        status: Current import status.
        error_message: Set only while status is ERROR.
        backup_id: Safety backup id of the latest successful import.
        is_importing: True while an import call sequence is pending.
    """

    selected_file: str = ""
    status: ImportStatus = ImportStatus.IDLE
    error_message: str | None = None
    backup_id: str | None = None
    is_importing: bool = False

    def __post_init__(self) -> None:
        if self.error_message is not None and self.status is not ImportStatus.ERROR:
            raise ValueError("error_message requires status 'error'")
        if self.is_importing and self.status.is_resting:
            raise ValueError(f"is_importing cannot be set while status is '{self.status.value}'")


class ImportSession:
    """Owned, disposable holder of ImportState.

    Only the controller writes to a session. After dispose() further writes
    are dropped so that work finishing after the owning UI went away has no
    visible effect.
    """

    def __init__(self, on_change: Callable[[ImportState], Any] | None = None) -> None:
        self._state = ImportState()
        self._on_change = on_change
        self._disposed = False

    @property
    def state(self) -> ImportState:
        return self._state

    @property
    def selected_file(self) -> str:
        return self._state.selected_file

    @property
    def status(self) -> ImportStatus:
        return self._state.status

    @property
    def error_message(self) -> str | None:
        return self._state.error_message

    @property
    def backup_id(self) -> str | None:
        return self._state.backup_id

    @property
    def is_importing(self) -> bool:
        return self._state.is_importing

    @property
    def disposed(self) -> bool:
        return self._disposed

    def update(self, **changes: Any) -> None:
        """Apply field changes in one step and notify the observer."""
        if self._disposed:
            logger.debug("session: dropped write after dispose, fields=%s", sorted(changes))
            return

        self._state = dataclasses.replace(self._state, **changes)

        if self._on_change is not None:
            try:
                self._on_change(self._state)
            except Exception as e:
                logger.error("session: on_change observer failed: %s", e)

    def reset(self) -> None:
        """Return every field to its initial value."""
        self.update(selected_file="", status=ImportStatus.IDLE, error_message=None, backup_id=None)

    def reset_status(self) -> None:
        """Return status fields to initial values, keeping the selected file."""
        self.update(status=ImportStatus.IDLE, error_message=None, backup_id=None)

    def dispose(self) -> None:
        self._disposed = True
        self._on_change = None
