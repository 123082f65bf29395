"""Domain entities for captured selections and relocated offsets."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from ..interfaces.document_accessor import IDocumentAccessor


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line/column position in an editable document."""

    line: int
    ch: int


@dataclass(frozen=True)
class CursorSelection:
    """Selection made in a live editor, as anchor and head positions."""

    anchor: Position
    head: Position

    @property
    def start(self) -> Position:
        return min(self.anchor, self.head)

    @property
    def end(self) -> Position:
        return max(self.anchor, self.head)


@dataclass(frozen=True)
class RangeSelection:
    """Selection made on a read-only rendered surface.

    ``node`` is the text node where the range starts and ``offset`` the
    character offset inside it.
    """

    node: Any
    offset: int
    selected_text: str


SelectionSpan = Union[CursorSelection, RangeSelection]


@dataclass(frozen=True)
class SelectionContext:
    """Selected text plus the context captured around it.

    Created once per invocation and discarded when the explanation closes.
    ``editor`` is None on read-only surfaces, meaning no in-place
    replacement is possible.
    """

    selected_text: str
    text_before: str = ""
    text_after: str = ""
    paragraph_text: str = ""
    editor: IDocumentAccessor | None = field(default=None, compare=False, repr=False)
    span: tuple[int, int] | None = None
    source_path: str | None = None

    def __post_init__(self) -> None:
        if not self.selected_text:
            raise ValueError("Selected text cannot be empty")

    @property
    def can_replace_in_place(self) -> bool:
        return self.editor is not None and self.span is not None


class LocationConfidence(str, Enum):
    """How a relocated offset was found."""

    CONTEXT = "context"
    PARAGRAPH = "paragraph"
    FIRST_OCCURRENCE = "first_occurrence"


@dataclass(frozen=True)
class Location:
    """Offset of a relocated selection inside a document body."""

    offset: int
    confidence: LocationConfidence

    @property
    def is_low_confidence(self) -> bool:
        return self.confidence is LocationConfidence.FIRST_OCCURRENCE
