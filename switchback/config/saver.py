"""Settings saving for SwitchBack."""

import json
import logging
from pathlib import Path

from switchback.config.loader import get_settings_path
from switchback.config.types import Config

logger = logging.getLogger(__name__)


def _toml_str(value: str) -> str:
    # JSON string escaping is a valid TOML basic string
    return json.dumps(value)


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save settings to a commented TOML file.

    Args:
        config: Settings dictionary to save.
        config_path: Path to settings file. Defaults to <data_dir>/settings.toml.
    """
    if config_path is None:
        config_path = get_settings_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    lines = ["# SwitchBack Settings", ""]

    lines.append("[backup]")
    lines.append("# Safety backups kept before each import (oldest are removed first)")
    lines.append(f"max_backups = {int(config['backup']['max_backups'])}")
    lines.append("")

    lines.append("[export]")
    lines.append("# Default export file name: <file_prefix>-YYYYMMDD_HHMMSS.<extension>")
    lines.append(f"file_prefix = {_toml_str(config['export']['file_prefix'])}")
    lines.append(f"extension = {_toml_str(config['export']['extension'])}")
    lines.append("")

    notifications = config.get("notifications", {})
    lines.append("[notifications]")
    lines.append("# Show desktop toasts for import/export results")
    enabled = "true" if notifications.get("enabled", True) else "false"
    lines.append(f"enabled = {enabled}")
    lines.append("")
    lines.append("# Toast display duration (seconds)")
    lines.append(f"timeout = {int(notifications.get('timeout', 5))}")
    lines.append("")

    lines.append("[live]")
    lines.append("# Live settings file written for each app's current provider")
    lines.append("# codex also writes config.toml beside auth.json, gemini writes .env")
    lines.append('# Use "" to skip live sync for an app')
    for app, path in config.get("live", {}).items():
        lines.append(f"{app} = {_toml_str(path)}")
    lines.append("")

    with open(config_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))
    logger.debug("save_config: wrote %s", config_path)
