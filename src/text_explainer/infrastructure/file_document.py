"""Editable document backed by a text file."""

from __future__ import annotations

from pathlib import Path

from ..domain.entities.selection import CursorSelection, Position
from ..domain.interfaces.document_accessor import IDocumentAccessor
from ..utils.io import write_text_atomic
from ..utils.logging import get_logger

logger = get_logger(__name__)


class TextDocument(IDocumentAccessor):
    """In-memory editable text buffer with line/offset addressing."""

    def __init__(self, text: str = ""):
        self._text = text

    def get_value(self) -> str:
        return self._text

    def set_value(self, text: str) -> None:
        self._text = text

    @property
    def line_count(self) -> int:
        return self._text.count("\n") + 1

    def get_line(self, line: int) -> str:
        lines = self._text.split("\n")
        if line < 0 or line >= len(lines):
            msg = f"Line {line} out of range (0-{len(lines) - 1})"
            raise IndexError(msg)
        return lines[line]

    def pos_to_offset(self, pos: Position) -> int:
        lines = self._text.split("\n")
        line = min(max(pos.line, 0), len(lines) - 1)
        offset = sum(len(text) + 1 for text in lines[:line])
        return offset + min(max(pos.ch, 0), len(lines[line]))

    def offset_to_pos(self, offset: int) -> Position:
        offset = min(max(offset, 0), len(self._text))
        before = self._text[:offset]
        line = before.count("\n")
        return Position(line, offset - (before.rfind("\n") + 1))

    def replace_range(self, text: str, start: Position, end: Position) -> None:
        start_offset = self.pos_to_offset(start)
        end_offset = self.pos_to_offset(end)
        self._text = self._text[:start_offset] + text + self._text[end_offset:]

    def find_selection(self, text: str, occurrence: int = 0) -> CursorSelection | None:
        """Selection covering the Nth occurrence of ``text``, if any."""
        index = -1
        for _ in range(occurrence + 1):
            index = self._text.find(text, index + 1)
            if index == -1:
                return None
        return CursorSelection(self.offset_to_pos(index), self.offset_to_pos(index + len(text)))


class FileDocument(TextDocument):
    """Text buffer that writes every range replacement back to its file."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(path.read_text(encoding="utf-8"))

    def replace_range(self, text: str, start: Position, end: Position) -> None:
        super().replace_range(text, start, end)
        write_text_atomic(self.path, self.get_value())
        logger.debug("document_written", path=str(self.path))
