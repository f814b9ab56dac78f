"""Multi-app configuration document for SwitchBack.

The document is the single JSON file that exports and imports move around:

    {
      "version": 2,
      "claude": {"providers": {"<id>": {...}}, "current": "<id>"},
      "codex": {...},
      "gemini": {...}
    }

Each provider carries an ``id``, a ``name`` and a ``settingsConfig`` object,
which is what live sync writes to the app's own settings file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

APP_TYPES: tuple[str, ...] = ("claude", "codex", "gemini")


class DocumentFormatError(Exception):
    """Raised when a configuration document has invalid content."""


def parse_document(text: str) -> dict[str, Any]:
    """Parse and validate document text.

    Args:
        text: Raw file content.

    Returns:
        The parsed document.

    Raises:
        DocumentFormatError: If the text is not valid JSON or fails validation.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentFormatError(f"Invalid configuration file: {e}") from e
    validate_document(data)
    return data


def validate_document(data: Any) -> None:
    """Check the document structure.

    Raises:
        DocumentFormatError: Describing the first problem found.
    """
    if not isinstance(data, dict):
        raise DocumentFormatError("Invalid configuration file: top level must be an object")

    for app in APP_TYPES:
        if app not in data:
            continue
        section = data[app]
        if not isinstance(section, dict):
            raise DocumentFormatError(f"Invalid configuration file: '{app}' must be an object")

        providers = section.get("providers")
        if not isinstance(providers, dict):
            raise DocumentFormatError(
                f"Invalid configuration file: '{app}.providers' must be an object"
            )
        current = section.get("current", "")
        if not isinstance(current, str):
            raise DocumentFormatError(
                f"Invalid configuration file: '{app}.current' must be a string"
            )

        for key, provider in providers.items():
            _validate_provider(app, key, provider)

        if current and current not in providers:
            raise DocumentFormatError(
                f"Invalid configuration file: '{app}.current' refers to unknown provider '{current}'"
            )


def _validate_provider(app: str, key: str, provider: Any) -> None:
    where = f"{app}.providers.{key}"
    if not isinstance(provider, dict):
        raise DocumentFormatError(f"Invalid configuration file: '{where}' must be an object")
    for field in ("id", "name"):
        if not isinstance(provider.get(field), str):
            raise DocumentFormatError(
                f"Invalid configuration file: '{where}.{field}' must be a string"
            )
    if not isinstance(provider.get("settingsConfig"), dict):
        raise DocumentFormatError(
            f"Invalid configuration file: '{where}.settingsConfig' must be an object"
        )


def load_document(path: Path) -> dict[str, Any]:
    """Read and validate the document at path.

    Raises:
        OSError: If the file cannot be read.
        DocumentFormatError: If the content is invalid.
    """
    return parse_document(path.read_text(encoding="utf-8"))


def current_provider(document: dict[str, Any], app: str) -> dict[str, Any] | None:
    """Return the current provider for an app, or None if unset."""
    section = document.get(app)
    if not section:
        return None
    current = section.get("current") or ""
    if not current:
        return None
    return section["providers"].get(current)


def write_text_atomic(path: Path, text: str) -> None:
    """Write text so readers never observe a half-written file.

    The content goes to a temporary file in the same directory which then
    replaces the target.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise
    logger.debug("store: wrote %s", path)


def write_json_atomic(path: Path, value: Any) -> None:
    """Serialize value as indented JSON and write it atomically."""
    write_text_atomic(path, json.dumps(value, indent=2, ensure_ascii=False) + "\n")
