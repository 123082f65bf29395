"""Interface for user-facing notices."""

from abc import ABC, abstractmethod


class INotificationSink(ABC):
    """Shows short transient messages to the user."""

    @abstractmethod
    def notify(self, message: str) -> None:
        """Display a message."""
