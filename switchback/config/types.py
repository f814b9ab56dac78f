"""Settings type definitions and defaults for SwitchBack."""

from typing import TypedDict


class BackupConfig(TypedDict):
    """Safety backup settings."""

    max_backups: int  # Oldest backups beyond this count are pruned


class ExportConfig(TypedDict):
    """Export file naming settings."""

    file_prefix: str  # Default file name is "<prefix>-YYYYMMDD_HHMMSS.<ext>"
    extension: str


class NotificationConfig(TypedDict):
    """Toast notification settings."""

    enabled: bool
    timeout: int  # Display duration in seconds


class LiveConfig(TypedDict, total=False):
    """Live settings file per app (empty string disables sync for that app)."""

    claude: str
    codex: str
    gemini: str


class Config(TypedDict, total=False):
    """Full application settings."""

    backup: BackupConfig
    export: ExportConfig
    notifications: NotificationConfig
    live: LiveConfig


DEFAULT_CONFIG: Config = {
    "backup": {
        "max_backups": 10,
    },
    "export": {
        "file_prefix": "switchback-export",
        "extension": "json",
    },
    "notifications": {
        "enabled": True,
        "timeout": 5,
    },
    "live": {
        "claude": "~/.claude/settings.json",
        "codex": "~/.codex/auth.json",
        "gemini": "~/.gemini/settings.json",
    },
}
