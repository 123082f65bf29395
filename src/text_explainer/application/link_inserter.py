"""Replace the original selection with a link to a created note."""

from __future__ import annotations

from ..domain.entities.note import NoteOutcome, NoteRecord
from ..domain.entities.selection import Location, LocationConfidence, SelectionContext
from ..domain.interfaces.storage_backend import IStorageBackend
from ..domain.services.selection_relocator import locate_context
from ..exceptions import NotFoundError
from ..utils.logging import get_logger

logger = get_logger(__name__)


def splice(text: str, offset: int, length: int, replacement: str) -> str:
    return text[:offset] + replacement + text[offset + length:]


class LinkInserter:
    """Inserts ``[[note]]`` where the selection was.

    With a live editor the captured span is replaced directly when it still
    holds the selected text; otherwise the selection is relocated in the
    stored document.
    """

    def __init__(self, storage: IStorageBackend | None = None):
        self.storage = storage

    async def insert(self, context: SelectionContext, note: NoteRecord) -> NoteOutcome:
        """Insert the link; a failed relocation yields an unlinked outcome."""
        try:
            if context.can_replace_in_place:
                location = self._replace_in_editor(context, note.link)
            else:
                location = await self._replace_in_storage(context, note.link)
        except NotFoundError as e:
            logger.warning("link_not_inserted", note=note.path, reason=e.message)
            return NoteOutcome(note=note, linked=False)

        if location.is_low_confidence:
            logger.warning("low_confidence_link", note=note.path, offset=location.offset)
        logger.info(
            "link_inserted",
            link=note.link,
            document=context.source_path or "editor",
            confidence=location.confidence.value,
        )
        return NoteOutcome(note=note, linked=True, location=location)

    def _replace_in_editor(self, context: SelectionContext, link: str) -> Location:
        editor = context.editor
        if editor is None or context.span is None:
            msg = "No live editor holds the selection"
            raise NotFoundError(msg)

        text = editor.get_value()
        start, end = context.span
        if text[start:end] == context.selected_text:
            location = Location(start, LocationConfidence.CONTEXT)
        else:
            found = locate_context(text, context)
            if found is None:
                msg = "Selected text no longer exists in the editor"
                raise NotFoundError(msg)
            location = found

        editor.replace_range(
            link,
            editor.offset_to_pos(location.offset),
            editor.offset_to_pos(location.offset + len(context.selected_text)),
        )
        return location

    async def _replace_in_storage(self, context: SelectionContext, link: str) -> Location:
        if self.storage is None or not context.source_path:
            msg = "No document available for link insertion"
            raise NotFoundError(msg)

        text = await self.storage.read(context.source_path)
        location = locate_context(text, context)
        if location is None:
            msg = f"Selected text not found in {context.source_path}"
            raise NotFoundError(msg, context={"path": context.source_path})

        await self.storage.modify(
            context.source_path,
            splice(text, location.offset, len(context.selected_text), link),
        )
        return location
