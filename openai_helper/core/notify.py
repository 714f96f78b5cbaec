"""Failure notification side channel."""

import enum
import logging
import subprocess
import sys

logger = logging.getLogger(__name__)

NOTIFY_TIMEOUT_S = 10


class NotificationMethod(str, enum.Enum):
    """Where a failed operation is surfaced to the user."""

    CONSOLE = "console"
    DESKTOP = "desktop"
    NONE = "none"


def _applescript_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _build_notify_cmd(title: str, message: str, command: str = "osascript") -> list[str]:
    """Build the osascript command array for a desktop notification."""
    script = (
        f"display notification {_applescript_string(message)} "
        f"with title {_applescript_string(title)}"
    )
    return [command, "-e", script]


class Notifier:
    """Surface failures through the configured notification method.

    Every failure is also written to the ``openai_helper`` loggers at DEBUG
    level; the method decides what the user sees.
    """

    def __init__(self, method: NotificationMethod = NotificationMethod.CONSOLE, command: str = "osascript"):
        self.method = NotificationMethod(method)
        self.command = command

    def notify_error(self, title: str, message: str) -> None:
        logger.debug("%s: %s", title, message)

        if self.method is NotificationMethod.CONSOLE:
            print(f"[{title}] {message}", file=sys.stderr)
        elif self.method is NotificationMethod.DESKTOP:
            self._notify_desktop(title, message)

    def _notify_desktop(self, title: str, message: str) -> None:
        cmd = _build_notify_cmd(title, message, self.command)
        try:
            result = subprocess.run(cmd, capture_output=True, timeout=NOTIFY_TIMEOUT_S)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Desktop notification failed (%s), falling back to console", e)
            print(f"[{title}] {message}", file=sys.stderr)
            return

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace")[:500]
            logger.warning("%s exited with rc=%d: %s", self.command, result.returncode, stderr)
