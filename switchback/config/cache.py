"""Process-wide settings cache for SwitchBack.

Settings are read once per process; the command line entry point and
LocalBackend share the same dict. Tests drop it with clear_config_cache().
"""

import logging
import threading

from switchback.config.types import Config

logger = logging.getLogger(__name__)

_cached_config: Config | None = None
_config_lock = threading.Lock()


def get_config() -> Config:
    """Return the settings, reading settings.toml on first use."""
    global _cached_config
    with _config_lock:
        if _cached_config is None:
            from switchback.config.loader import load_config

            _cached_config = load_config()
            logger.debug("config_cache: loaded, max_backups=%s", _cached_config["backup"]["max_backups"])
        return _cached_config


def clear_config_cache() -> None:
    global _cached_config
    with _config_lock:
        _cached_config = None
