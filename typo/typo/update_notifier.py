"""
Update notifier module for displaying update notifications.
Queues the result of a background check and shows it once the session ends.
"""
import sys
import threading
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .constants import APP_NAME
from .update_checker import UpdateResult


class UpdateNotifier:
    """
    Handles update notification display.

    The background check may finish at any time, so queueing is guarded
    by a lock; the notification is printed only on an interactive terminal.
    """

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize the update notifier.

        Args:
            console: Optional Rich Console instance. If not provided,
                     a new Console will be created.
        """
        self.console = console or Console()
        self._pending_notification: Optional[UpdateResult] = None
        self._lock = threading.Lock()

    def queue_notification(self, result: UpdateResult) -> None:
        """
        Queue a notification to be shown later.

        Only queues if an update is actually available.
        """
        if result.update_available and result.latest_version:
            with self._lock:
                self._pending_notification = result

    def show_pending_notification(self) -> bool:
        """
        Display any pending update notification.

        Returns:
            True if a notification was printed
        """
        with self._lock:
            result, self._pending_notification = self._pending_notification, None

        if result is None or not self.should_show_notification():
            return False

        panel = Panel(
            Text(self.format_notification(result)),
            title="[bold yellow]Update Available[/bold yellow]",
            border_style="yellow",
            padding=(0, 1)
        )

        self.console.print()
        self.console.print(panel)
        return True

    def format_notification(self, result: UpdateResult) -> str:
        """
        Format the update notification message.

        Args:
            result: UpdateResult with version information.

        Returns:
            Formatted notification message string.
        """
        if not result.update_available or not result.latest_version:
            return ""

        lines = [
            f"A new version of {APP_NAME} is available!",
            "",
            f"  Current version: {result.current_version}",
            f"  Latest version:  {result.latest_version}",
        ]
        if result.download_url:
            lines.extend(["", f"Download: {result.download_url}"])

        return "\n".join(lines)

    def should_show_notification(self) -> bool:
        """
        Check if notifications should be shown.

        Returns False when stdout or stdin is not a TTY (piped output,
        non-interactive mode).
        """
        if not sys.stdout.isatty():
            return False

        if not sys.stdin.isatty():
            return False

        return True

    def has_pending_notification(self) -> bool:
        """Check if there's a pending notification."""
        with self._lock:
            return self._pending_notification is not None
