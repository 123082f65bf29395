"""Notification sink that records messages."""

from text_explainer.domain.interfaces.notification_sink import INotificationSink


class RecordingNotifier(INotificationSink):
    def __init__(self):
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)
