"""Live reconciliation of the current providers.

After an import replaces the persisted document, the apps themselves still
read their own settings files. Live sync writes a snapshot of each app's
current provider so the running tools pick up the imported selection.

Snapshot layout per app, relative to the configured live path:

    claude  settingsConfig written as JSON to the live path
    codex   settingsConfig["auth"] as JSON to the live path (auth.json),
            settingsConfig["config"] as text to config.toml beside it
    gemini  settingsConfig["env"] as KEY=VALUE lines to .env beside the
            live path, settingsConfig["config"] merged into the live path
            (settings.json); a null or missing config leaves it untouched
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

from switchback.store import (
    APP_TYPES,
    current_provider,
    load_document,
    write_json_atomic,
    write_text_atomic,
)

logger = logging.getLogger(__name__)

CODEX_CONFIG_NAME = "config.toml"
GEMINI_ENV_NAME = ".env"


class LiveSyncError(Exception):
    """Raised when live settings cannot be brought in line with the document."""


@dataclass
class SyncResult:
    """Outcome of a best-effort live sync.

    Attributes:
        ok: Whether every live file was written.
        error: The failure cause when not ok.
    """

    ok: bool
    error: Any = None


def _write_claude(path: Path, settings: dict[str, Any]) -> None:
    write_json_atomic(path, settings)


def _write_codex(path: Path, settings: dict[str, Any]) -> None:
    auth = settings.get("auth")
    config = settings.get("config")
    if not isinstance(auth, dict):
        raise LiveSyncError("Codex provider settings are missing an 'auth' object")
    if not isinstance(config, str):
        raise LiveSyncError("Codex provider settings are missing a 'config' string")

    write_json_atomic(path, auth)
    write_text_atomic(path.with_name(CODEX_CONFIG_NAME), config)


def _env_lines(settings: dict[str, Any]) -> str:
    env = settings.get("env") or {}
    if not isinstance(env, dict):
        raise LiveSyncError("Gemini provider 'env' must be an object")
    lines = [f"{key}={value}" for key, value in env.items() if isinstance(value, str)]
    return "\n".join(lines) + "\n" if lines else ""


def _write_gemini(path: Path, settings: dict[str, Any]) -> None:
    config = settings.get("config")
    if config is not None and not isinstance(config, dict):
        raise LiveSyncError("Gemini provider 'config' must be an object or null")

    write_text_atomic(path.with_name(GEMINI_ENV_NAME), _env_lines(settings))

    if config is None:
        return
    merged: dict[str, Any] = {}
    if path.exists():
        try:
            existing = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("live_sync: replacing unreadable gemini settings, path=%s", path)
            existing = {}
        if isinstance(existing, dict):
            merged = existing
    # Keys the provider does not set (mcpServers etc.) are kept
    merged.update(config)
    write_json_atomic(path, merged)


_WRITERS: dict[str, Callable[[Path, dict[str, Any]], None]] = {
    "claude": _write_claude,
    "codex": _write_codex,
    "gemini": _write_gemini,
}


def write_live_snapshot(app: str, path: Path, provider: dict[str, Any]) -> None:
    """Write one provider's settings into an app's live files.

    Raises:
        LiveSyncError: If the provider settings do not fit the app.
        OSError: If a live file cannot be read or written.
    """
    _WRITERS[app](path, provider["settingsConfig"])


def sync_current_to_live(document_path: Path, live_paths: Mapping[str, str]) -> list[str]:
    """Write the current provider of each app to its live settings files.

    Apps with no current provider or no configured live path are skipped.

    Args:
        document_path: Persisted multi-app document.
        live_paths: App name to live settings path ("" disables the app).

    Returns:
        Names of the apps that were synced.

    Raises:
        LiveSyncError: If the document cannot be read or a live file cannot be written.
    """
    try:
        document = load_document(document_path)
    except Exception as e:
        raise LiveSyncError(f"Failed to read configuration: {e}") from e

    synced = []
    for app in APP_TYPES:
        target = live_paths.get(app, "")
        if not target:
            continue
        provider = current_provider(document, app)
        if provider is None:
            continue

        path = Path(target).expanduser()
        try:
            write_live_snapshot(app, path, provider)
        except (OSError, LiveSyncError) as e:
            raise LiveSyncError(f"Failed to write live settings for {app}: {e}") from e
        logger.info("live_sync: synced app=%s, provider=%s", app, provider["id"])
        synced.append(app)

    return synced


def sync_current_providers_live_safe(
    document_path: Path,
    live_paths: Mapping[str, str],
) -> SyncResult:
    """Run live sync, reporting failure as a result instead of raising."""
    try:
        sync_current_to_live(document_path, live_paths)
        return SyncResult(ok=True)
    except Exception as e:
        logger.warning("live_sync: failed, error=%s", e)
        return SyncResult(ok=False, error=e)
