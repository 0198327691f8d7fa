"""Desktop and terminal notifications."""

import logging
import shutil
import subprocess
import sys

import click

from ghprs.core.notifier.abc import Notifier

logger = logging.getLogger(__name__)


def escape_applescript(text: str) -> str:
    """Escape text for use inside an AppleScript string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def osc9_sequence(message: str) -> str:
    """Build the OSC 9 escape that terminals such as iTerm2 show as a banner."""
    return f"\033]9;{message}\007"


class RealNotifier(Notifier):
    """Production notifier.

    Desktop banners use osascript on macOS and notify-send elsewhere, when the
    tool is installed. The terminal banner is an OSC 9 escape written to
    stdout, which terminals without support ignore.
    """

    def __init__(self, *, desktop: bool = True, terminal: bool = True) -> None:
        """Initialize RealNotifier.

        Args:
            desktop: Whether to show a desktop banner
            terminal: Whether to emit the terminal banner escape
        """
        self._desktop = desktop
        self._terminal = terminal

    def notify(self, title: str, message: str) -> None:
        if self._desktop:
            self._notify_desktop(title, message)
        if self._terminal:
            self._notify_terminal(message)

    def _notify_terminal(self, message: str) -> None:
        try:
            click.echo(osc9_sequence(message), nl=False)
        except OSError as e:
            logger.debug("Terminal notification failed: %s", e)

    def _desktop_command(self, title: str, message: str) -> list[str] | None:
        if sys.platform == "darwin":
            if shutil.which("osascript") is None:
                return None
            script = (
                f'display notification "{escape_applescript(message)}" '
                f'with title "{escape_applescript(title)}"'
            )
            return ["osascript", "-e", script]

        if shutil.which("notify-send") is None:
            return None
        return ["notify-send", title, message]

    def _notify_desktop(self, title: str, message: str) -> None:
        cmd = self._desktop_command(title, message)
        if cmd is None:
            logger.debug("No desktop notifier available")
            return

        # Notification failures are never fatal
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            logger.debug("Desktop notification failed: %s", e)
            return
        if result.returncode != 0:
            logger.debug("Desktop notification exited %d: %s", result.returncode, result.stderr)
