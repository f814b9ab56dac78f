"""Settings loading for SwitchBack."""

import copy
import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from switchback.config.types import DEFAULT_CONFIG, Config

logger = logging.getLogger(__name__)


def get_data_dir() -> Path:
    """Get the SwitchBack data directory.

    Returns:
        $SWITCHBACK_HOME if set, otherwise ~/.switchback
    """
    override = os.environ.get("SWITCHBACK_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".switchback"


def get_settings_path() -> Path:
    """Get path to the user settings file."""
    return get_data_dir() / "settings.toml"


def get_document_path() -> Path:
    """Get path to the persisted multi-app configuration document."""
    return get_data_dir() / "config.json"


def get_backup_dir() -> Path:
    """Get the directory holding safety backups taken before imports."""
    return get_data_dir() / "backups"


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Path | None = None) -> Config:
    """Load settings merged over the hard-coded defaults.

    When no settings file exists at the default location, the merged
    defaults are written there so users have a file to edit.

    Args:
        config_path: Optional override path for testing. Never bootstrapped.

    Returns:
        Settings dictionary with defaults applied.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is not None:
        logger.debug("load_config: explicit path=%s, exists=%s", config_path, config_path.exists())
        if config_path.exists():
            with open(config_path, "rb") as f:
                config = _deep_merge(config, tomllib.load(f))
        return config

    user_path = get_settings_path()
    if user_path.exists():
        try:
            with open(user_path, "rb") as f:
                user_overrides = tomllib.load(f)
            config = _deep_merge(config, user_overrides)
            logger.info("load_config: loaded user settings from %s", user_path)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("load_config: failed to load user settings (using defaults): %s", e)
    else:
        try:
            from switchback.config.saver import save_config

            save_config(config, user_path)
            logger.info("load_config: bootstrapped settings.toml at %s", user_path)
        except OSError as e:
            logger.warning("load_config: bootstrap save failed (non-fatal): %s", e)

    return config
