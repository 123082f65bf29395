"""Interface for editable documents."""

from abc import ABC, abstractmethod

from ..entities.selection import Position


class IDocumentAccessor(ABC):
    """Line/offset-addressed access to an editable document."""

    @abstractmethod
    def get_value(self) -> str:
        """Return the whole document text."""

    @abstractmethod
    def get_line(self, line: int) -> str:
        """Return the text of a single line (without the line break)."""

    @abstractmethod
    def pos_to_offset(self, pos: Position) -> int:
        """Convert a line/column position into an absolute offset."""

    @abstractmethod
    def offset_to_pos(self, offset: int) -> Position:
        """Convert an absolute offset into a line/column position."""

    @abstractmethod
    def replace_range(self, text: str, start: Position, end: Position) -> None:
        """Replace the text between two positions as one write."""
