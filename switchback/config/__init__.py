"""Settings loading, saving, and caching for SwitchBack."""

from switchback.config.types import (
    BackupConfig,
    Config,
    DEFAULT_CONFIG,
    ExportConfig,
    LiveConfig,
    NotificationConfig,
)
from switchback.config.loader import (
    _deep_merge,
    get_backup_dir,
    get_data_dir,
    get_document_path,
    get_settings_path,
    load_config,
)
from switchback.config.saver import save_config
from switchback.config.cache import clear_config_cache, get_config

__all__ = [
    # Types
    "BackupConfig",
    "Config",
    "DEFAULT_CONFIG",
    "ExportConfig",
    "LiveConfig",
    "NotificationConfig",
    # Paths
    "get_backup_dir",
    "get_data_dir",
    "get_document_path",
    "get_settings_path",
    # Loading
    "load_config",
    "_deep_merge",
    # Saving
    "save_config",
    # Cache
    "get_config",
    "clear_config_cache",
]
