"""Notification sinks."""

from rich.console import Console
from rich.markup import escape

from ..domain.interfaces.notification_sink import INotificationSink
from ..utils.logging import get_logger

logger = get_logger(__name__)


class ConsoleNotifier(INotificationSink):
    """Prints notices to a rich console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    def notify(self, message: str) -> None:
        logger.debug("notice", message=message)
        self.console.print(f"[bold cyan]>[/bold cyan] {escape(message)}")
