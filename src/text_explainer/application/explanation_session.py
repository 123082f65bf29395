"""One explanation request and what the user does with its result."""

from __future__ import annotations

import time
from collections.abc import Callable
from enum import Enum

from ..config_settings import Settings
from ..domain.entities.note import NoteOutcome
from ..domain.entities.prompt import PromptBundle
from ..domain.entities.selection import SelectionContext
from ..domain.interfaces.completion_client import ICompletionClient
from ..domain.interfaces.notification_sink import INotificationSink
from ..domain.interfaces.storage_backend import IStorageBackend
from ..domain.services import note_materializer
from ..domain.services.prompt_builder import build_prompt
from ..domain.services.response_normalizer import normalize
from ..exceptions import NoteCreationError, TextExplainerError
from ..utils.logging import get_logger
from .link_inserter import LinkInserter

logger = get_logger(__name__)


class SessionState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ExplanationSession:
    """Display-side state for a single explanation.

    Owns its SelectionContext and result; nothing is shared between
    sessions. Completion errors end up in ``error`` and never propagate.
    """

    def __init__(
        self,
        context: SelectionContext,
        settings: Settings,
        client: ICompletionClient,
        storage: IStorageBackend | None = None,
        notifier: INotificationSink | None = None,
        on_update: Callable[[str], None] | None = None,
    ):
        self.context = context
        self.settings = settings
        self.client = client
        self.storage = storage
        self.notifier = notifier
        self.on_update = on_update

        self.state = SessionState.LOADING
        self.prompt: PromptBundle | None = None
        self.raw_text: str | None = None
        self.markup: str | None = None
        self.error: str | None = None
        self.outcome: NoteOutcome | None = None

    def build_prompt(self) -> PromptBundle:
        return build_prompt(
            self.context.selected_text,
            self.context.paragraph_text,
            self.context.text_before,
            self.context.text_after,
            self.settings.language,
        )

    def update_display(self, text: str | None) -> bool:
        """Show normalized text; empty text keeps the previous display."""
        markup = normalize(text)
        if markup is None:
            return False
        self.markup = markup
        self.state = SessionState.READY
        if self.on_update is not None:
            self.on_update(markup)
        return True

    def _on_progress(self, chunk: str, full_text: str) -> None:
        self.update_display(full_text or chunk)

    async def run(self) -> str | None:
        """Request the explanation; returns the display markup or None on error."""
        started = time.monotonic()
        try:
            self.prompt = self.build_prompt()
            logger.info(
                "explanation_started",
                strategy=self.prompt.strategy.value,
                selected_length=len(self.context.selected_text),
                language=self.settings.language,
            )
            response = await self.client.complete(
                self.prompt.prompt,
                self.prompt.system_prompt,
                on_progress=self._on_progress,
            )
            self.raw_text = response
            self.update_display(response)
        except TextExplainerError as e:
            return self._fail(e.message, e.to_dict())
        except Exception as e:
            return self._fail(str(e), {"type": type(e).__name__})
        finally:
            await self._close_client()

        self.state = SessionState.READY
        logger.info(
            "explanation_completed",
            duration_seconds=round(time.monotonic() - started, 2),
            response_length=len(self.raw_text or ""),
        )
        return self.markup

    async def _close_client(self) -> None:
        # One request per session; the client is never reused.
        await self.client.aclose()
        logger.debug("completion_client_closed")

    def _fail(self, message: str, details: dict) -> None:
        logger.error(
            "explanation_failed",
            error=message,
            error_type=details.get("type"),
            error_code=details.get("error_code"),
        )
        self.error = message
        self.state = SessionState.FAILED

    @property
    def error_markup(self) -> str | None:
        """Inline error block shown in place of the explanation."""
        if self.error is None:
            return None
        return f"<strong>Error:</strong> {self.error}"

    @property
    def can_save(self) -> bool:
        return self.markup is not None and self.storage is not None

    async def save_note(self) -> NoteOutcome:
        """Persist the explanation as a note and link it from the selection.

        A session creates at most one note; later calls return the first
        outcome.

        Raises:
            NoteCreationError: If there is nothing to save or storage fails
        """
        if self.outcome is not None:
            return self.outcome
        if self.markup is None:
            msg = "No explanation to save yet"
            raise NoteCreationError(msg)
        if self.storage is None:
            msg = "No storage configured for notes"
            raise NoteCreationError(msg)

        try:
            note = await note_materializer.persist(
                self.storage,
                self.context.selected_text,
                self.markup,
                self.settings.note_directory,
                source_path=self.context.source_path,
            )
        except NoteCreationError as e:
            self._notify(e.message)
            raise

        try:
            outcome = await LinkInserter(self.storage).insert(self.context, note)
        except Exception as e:
            logger.error(
                "link_insertion_failed",
                note=note.path,
                error=str(e),
                error_type=type(e).__name__,
            )
            outcome = NoteOutcome(note=note, linked=False)

        self.outcome = outcome
        if outcome.linked:
            self._notify(f"Created note {note.path} and inserted {outcome.link}")
        else:
            self._notify(f"Created note {note.path} (link not inserted)")
        return outcome

    def _notify(self, message: str) -> None:
        if self.notifier is not None:
            self.notifier.notify(message)
