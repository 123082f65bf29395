"""Test fixtures package."""

from .memory_storage import InMemoryStorage
from .mock_completion_client import MockCompletionClient
from .recording_notifier import RecordingNotifier

__all__ = [
    "InMemoryStorage",
    "MockCompletionClient",
    "RecordingNotifier",
]
