"""Entry point the host talks to: selection capture, sessions, settings."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..config_settings import Settings
from ..domain.entities.selection import SelectionContext, SelectionSpan
from ..domain.interfaces.completion_client import ICompletionClient
from ..domain.interfaces.document_accessor import IDocumentAccessor
from ..domain.interfaces.notification_sink import INotificationSink
from ..domain.interfaces.settings_store import ISettingsStore
from ..domain.interfaces.storage_backend import IStorageBackend
from ..domain.services.context_extractor import extract
from ..utils.logging import get_logger
from .commands import CommandRegistry, rebind_hotkey, register_commands
from .explanation_session import ExplanationSession

logger = get_logger(__name__)

HOTKEY_FIELDS = {"hotkey_modifiers", "hotkey_key"}


class TextExplainer:
    """Wires settings, the completion client and storage for the host.

    ``client_factory`` builds a completion client from the current settings
    so that settings changes apply to the next request.
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: Callable[[Settings], ICompletionClient],
        notifier: INotificationSink,
        storage: IStorageBackend | None = None,
        settings_store: ISettingsStore | None = None,
    ):
        self.settings = settings
        self.client_factory = client_factory
        self.notifier = notifier
        self.storage = storage
        self.settings_store = settings_store
        self.commands = CommandRegistry()
        register_commands(self, self.commands)

    def capture(
        self,
        document: IDocumentAccessor | None,
        selection: SelectionSpan | None,
        source_path: str | None = None,
    ) -> SelectionContext | None:
        return extract(document, selection, source_path)

    def has_selection(
        self, document: IDocumentAccessor | None, selection: SelectionSpan | None
    ) -> bool:
        return self.capture(document, selection) is not None

    def new_session(
        self,
        context: SelectionContext,
        on_update: Callable[[str], None] | None = None,
    ) -> ExplanationSession:
        return ExplanationSession(
            context,
            self.settings,
            self.client_factory(self.settings),
            storage=self.storage,
            notifier=self.notifier,
            on_update=on_update,
        )

    async def explain_selected_text(
        self,
        document: IDocumentAccessor | None,
        selection: SelectionSpan | None,
        source_path: str | None = None,
        on_update: Callable[[str], None] | None = None,
    ) -> ExplanationSession | None:
        """Capture the selection and run an explanation session.

        Returns None after notifying the user when nothing is selected or
        no API key is configured.
        """
        context = self.capture(document, selection, source_path)
        if context is None:
            self.notifier.notify("No text selected")
            return None

        if not self.settings.api_key:
            self.notifier.notify("Please configure your API key in settings")
            return None

        session = self.new_session(context, on_update=on_update)
        await session.run()
        return session

    def update_settings(self, **changes: Any) -> Settings:
        """Apply and persist settings changes; rebinds the hotkey if needed."""
        if self.settings_store is not None:
            self.settings = self.settings_store.update(self.settings, **changes)
        else:
            from ..config_loader import build_settings

            self.settings = build_settings({**self.settings.model_dump(), **changes})

        if HOTKEY_FIELDS & changes.keys():
            rebind_hotkey(self, self.commands)
        logger.debug("settings_changed", fields=sorted(changes))
        return self.settings
