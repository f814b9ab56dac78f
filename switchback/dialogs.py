"""Native file pickers for SwitchBack.

Both dialogs return None when the user cancels. A missing display or a
broken Tk installation raises DialogError instead.
"""

from __future__ import annotations

import logging
import tkinter as tk
from pathlib import PurePath
from tkinter import filedialog

logger = logging.getLogger(__name__)

FILE_TYPES = [("JSON", "*.json"), ("All files", "*.*")]


class DialogError(Exception):
    """Raised when a file dialog cannot be shown."""


def _hidden_root() -> tk.Tk:
    """Create an invisible, topmost root so the dialog gets focus."""
    try:
        root = tk.Tk()
    except tk.TclError as e:
        raise DialogError(f"Cannot open file dialog: {e}") from e
    root.withdraw()
    root.attributes("-topmost", True)
    return root


def open_file_dialog(title: str = "Select configuration backup") -> str | None:
    """Ask the user for a backup file to import.

    Returns:
        Chosen path, or None if cancelled.

    Raises:
        DialogError: If the dialog cannot be shown.
    """
    root = _hidden_root()
    try:
        path = filedialog.askopenfilename(parent=root, title=title, filetypes=FILE_TYPES)
    except tk.TclError as e:
        raise DialogError(f"File dialog failed: {e}") from e
    finally:
        root.destroy()

    logger.debug("dialogs: open returned, selected=%s", bool(path))
    return path or None


def save_file_dialog(default_name: str, title: str = "Export configuration") -> str | None:
    """Ask the user where to write an export.

    Args:
        default_name: Pre-filled file name.

    Returns:
        Chosen path, or None if cancelled.

    Raises:
        DialogError: If the dialog cannot be shown.
    """
    root = _hidden_root()
    try:
        path = filedialog.asksaveasfilename(
            parent=root,
            title=title,
            initialfile=default_name,
            defaultextension=PurePath(default_name).suffix or ".json",
            filetypes=FILE_TYPES,
        )
    except tk.TclError as e:
        raise DialogError(f"File dialog failed: {e}") from e
    finally:
        root.destroy()

    logger.debug("dialogs: save returned, selected=%s", bool(path))
    return path or None
