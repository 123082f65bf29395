"""Capability interfaces the core depends on."""

from .completion_client import ICompletionClient, ProgressCallback
from .document_accessor import IDocumentAccessor
from .notification_sink import INotificationSink
from .settings_store import ISettingsStore
from .storage_backend import IStorageBackend

__all__ = [
    "ICompletionClient",
    "IDocumentAccessor",
    "INotificationSink",
    "ISettingsStore",
    "IStorageBackend",
    "ProgressCallback",
]
