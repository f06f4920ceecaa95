"""Desktop notifications through the platform's notification command."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from typing import Callable, Optional

from .errors import AlertDependencyError, AlertError


def _applescript_quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


class DesktopNotifier:
    """Raises an OS notification with `notify-send` (Linux) or `osascript` (macOS)."""

    def __init__(
        self,
        *,
        platform: str = sys.platform,
        which: Callable[[str], Optional[str]] = shutil.which,
        logger: Optional[logging.Logger] = None,
    ):
        self._platform = platform
        self._logger = logger or logging.getLogger(__name__)
        if platform == "darwin":
            self._binary = which("osascript")
        else:
            self._binary = which("notify-send")
        if not self._binary:
            raise AlertDependencyError(
                f"No desktop notification command available on {platform}"
            )

    def build_command(self, title: str, body: str) -> list[str]:
        if self._platform == "darwin":
            script = (
                f"display notification {_applescript_quote(body)} "
                f"with title {_applescript_quote(title)}"
            )
            return [self._binary, "-e", script]
        return [self._binary, "--app-name=focus-timer", title, body]

    def notify(self, title: str, body: str) -> None:
        command = self.build_command(title, body)
        try:
            subprocess.Popen(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as error:
            raise AlertError(f"Desktop notification failed: {error}") from error
        self._logger.debug("Desktop notification sent: %s", title)
