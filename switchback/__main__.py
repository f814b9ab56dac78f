"""Entry point for SwitchBack."""

import argparse
import asyncio
import logging
import platform
import sys
from logging.handlers import RotatingFileHandler

from switchback import __version__
from switchback.backend import HeadlessBackend, LocalBackend
from switchback.backup import list_backups
from switchback.config import get_backup_dir, get_config, get_data_dir, get_document_path
from switchback.controller import ImportExportController
from switchback.live_sync import sync_current_providers_live_safe
from switchback.notifications import ToastNotifier
from switchback.session import ImportStatus

logger = logging.getLogger("switchback")

EXIT_CODES = {
    ImportStatus.SUCCESS: 0,
    ImportStatus.PARTIAL_SUCCESS: 2,
}


def _setup_logger(verbose: bool = False) -> logging.Logger:
    """Set up the SwitchBack logger with rotation.

    Args:
        verbose: Also log to stderr.

    Returns:
        Configured logger instance.
    """
    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        try:
            log_dir = get_data_dir()
            log_dir.mkdir(parents=True, exist_ok=True)
            # 10MB max, keep 2 backups
            file_handler = RotatingFileHandler(
                log_dir / "switchback.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=2,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            print(f"Warning: file logging disabled: {e}", file=sys.stderr)

        if verbose:
            stream_handler = logging.StreamHandler(sys.stderr)
            stream_handler.setLevel(logging.INFO)
            stream_handler.setFormatter(formatter)
            logger.addHandler(stream_handler)

    return logger


class ConsoleNotifier(ToastNotifier):
    """Toast notifier that also prints messages and remembers the last outcome."""

    def __init__(self, enabled: bool = True, timeout: int = 5) -> None:
        super().__init__(enabled=enabled, timeout=timeout)
        self.last_ok: bool | None = None

    def success(self, message: str) -> None:
        self.last_ok = True
        print(message)
        super().success(message)

    def warning(self, message: str) -> None:
        print(f"Warning: {message}", file=sys.stderr)
        super().warning(message)

    def error(self, message: str) -> None:
        self.last_ok = False
        print(f"Error: {message}", file=sys.stderr)
        super().error(message)


def _build_controller(backend: LocalBackend, notifier: ConsoleNotifier) -> ImportExportController:
    export = get_config().get("export", {})
    return ImportExportController(
        backend,
        notifier,
        export_prefix=export.get("file_prefix", "switchback-export"),
        export_extension=export.get("extension", "json"),
    )


async def _import(file_path: str | None) -> int:
    backend = HeadlessBackend(open_path=file_path) if file_path else LocalBackend()
    controller = _build_controller(backend, ConsoleNotifier.from_config(get_config()))
    try:
        await controller.select_import_file()
        if not controller.selected_file:
            print("No file selected.", file=sys.stderr)
            return 1

        await controller.import_config()
        state = controller.state
        print(f"Status:    {state.status.value}")
        if state.backup_id:
            print(f"Backup ID: {state.backup_id}")
        return EXIT_CODES.get(state.status, 1)
    finally:
        controller.dispose()


async def _export(destination: str | None) -> int:
    backend = HeadlessBackend(save_path=destination) if destination else LocalBackend()
    notifier = ConsoleNotifier.from_config(get_config())
    controller = _build_controller(backend, notifier)
    try:
        await controller.export_config()
    finally:
        controller.dispose()
    return 0 if notifier.last_ok else 1


def run_import(file_path: str | None = None) -> int:
    """Import a configuration backup.

    Args:
        file_path: Backup to import; a file dialog is shown when omitted.

    Returns:
        Exit code: 0 success, 2 partial success, 1 error.
    """
    return asyncio.run(_import(file_path))


def run_export(destination: str | None = None) -> int:
    """Export the configuration.

    Args:
        destination: Target file or directory; a file dialog is shown when omitted.

    Returns:
        Exit code: 0 for success, 1 for error.
    """
    return asyncio.run(_export(destination))


def run_backups() -> int:
    """List safety backups, newest first."""
    backups = list_backups(get_backup_dir())
    if not backups:
        print("No backups found.")
        return 0
    for backup in backups:
        print(f"{backup.backup_id}  {backup.created_at:%Y-%m-%d %H:%M:%S}  {backup.path}")
    return 0


def run_sync() -> int:
    """Sync the current providers to their live settings files."""
    result = sync_current_providers_live_safe(get_document_path(), get_config().get("live", {}))
    if result.ok:
        print("Live configuration synchronized.")
        return 0
    print(f"Live sync failed: {result.error}", file=sys.stderr)
    return 1


def run_info() -> int:
    """Show version, paths and effective settings."""
    config = get_config()
    print(f"SwitchBack {__version__}")
    print(f"  Python:   {platform.python_version()}")
    print(f"  Platform: {platform.system()} {platform.release()}")
    print()
    print("Paths")
    print("-" * 40)
    print(f"  Data dir: {get_data_dir()}")
    print(f"  Document: {get_document_path()}")
    print(f"  Backups:  {get_backup_dir()}")
    print()
    print("Settings")
    print("-" * 40)
    print(f"  Max backups:   {config['backup']['max_backups']}")
    print(f"  Export prefix: {config['export']['file_prefix']}")
    print(f"  Notifications: {'on' if config['notifications']['enabled'] else 'off'}")
    for app, path in config.get("live", {}).items():
        print(f"  Live {app + ':':<9}{path or '(disabled)'}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for SwitchBack."""
    parser = argparse.ArgumentParser(
        prog="switchback",
        description="Import and export provider configuration backups",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Also log to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command")

    import_parser = subparsers.add_parser(
        "import",
        help="Import a configuration backup",
    )
    import_parser.add_argument(
        "file",
        nargs="?",
        metavar="FILE",
        help="Backup file to import (opens a file dialog when omitted)",
    )

    export_parser = subparsers.add_parser(
        "export",
        help="Export the configuration to a backup file",
    )
    export_parser.add_argument(
        "destination",
        nargs="?",
        metavar="DEST",
        help="Target file or directory (opens a file dialog when omitted)",
    )

    subparsers.add_parser("backups", help="List safety backups taken before imports")
    subparsers.add_parser("sync", help="Sync current providers to live settings files")
    subparsers.add_parser("info", help="Show paths and settings")

    args = parser.parse_args(argv)
    _setup_logger(args.verbose)

    if args.command == "import":
        return run_import(args.file)
    elif args.command == "export":
        return run_export(args.destination)
    elif args.command == "backups":
        return run_backups()
    elif args.command == "sync":
        return run_sync()
    elif args.command == "info" or args.command is None:
        return run_info()
    return 1


if __name__ == "__main__":
    sys.exit(main())
