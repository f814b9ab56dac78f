"""Notification module for SwitchBack.

Toast notifications report import/export outcomes. When the platform has no
notification support the toasts are skipped and a single warning is logged.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)

APP_NAME = "SwitchBack"

# Track if we've already warned about notification issues
_notification_warned = False


class Notifier(Protocol):
    """Point-in-time user feedback channel used by the controller."""

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


def _check_notification_support() -> bool:
    """Check if notification support is available.

    Returns:
        True if notifications are supported, False otherwise.
    """
    global _notification_warned

    try:
        from plyer import notification

        _ = notification.notify
        return True
    except ImportError:
        if not _notification_warned:
            logger.warning("notifications: plyer not available")
            _notification_warned = True
        return False
    except Exception as e:
        if not _notification_warned:
            logger.warning(
                "notifications: initialization failed, error_type=%s",
                type(e).__name__,
            )
            _notification_warned = True
        return False


def _sanitize(message: str, limit: int = 200) -> str:
    return message[:limit].replace("\r", "")


def show_notification(title: str, message: str, timeout: int = 5) -> bool:
    """Show a toast notification.

    Args:
        title: Notification title.
        message: Notification message body.
        timeout: Display duration in seconds.

    Returns:
        True if notification was shown, False otherwise.
    """
    if not _check_notification_support():
        return False

    try:
        from plyer import notification

        notification.notify(
            title=title.replace("\n", " "),
            message=_sanitize(message),
            app_name=APP_NAME,
            timeout=timeout,
        )
        logger.debug("notification: shown, title=%s", title)
        return True
    except Exception as e:
        logger.warning(
            "notification: failed, error_type=%s",
            type(e).__name__,
        )
        return False


class ToastNotifier:
    """Notifier backed by desktop toasts.

    Messages are always logged; toasts are shown only when enabled.
    """

    def __init__(self, enabled: bool = True, timeout: int = 5) -> None:
        self._enabled = enabled
        self._timeout = timeout

    @classmethod
    def from_config(cls, config: dict) -> ToastNotifier:
        settings = config.get("notifications", {})
        return cls(
            enabled=settings.get("enabled", True),
            timeout=settings.get("timeout", 5),
        )

    def _show(self, title: str, message: str) -> None:
        if self._enabled:
            show_notification(title, message, timeout=self._timeout)

    def success(self, message: str) -> None:
        logger.info("notify: success, message=%s", message)
        self._show(APP_NAME, message)

    def warning(self, message: str) -> None:
        logger.warning("notify: warning, message=%s", message)
        self._show(f"{APP_NAME} - Warning", message)

    def error(self, message: str) -> None:
        logger.error("notify: error, message=%s", message)
        self._show(f"{APP_NAME} - Error", message)
