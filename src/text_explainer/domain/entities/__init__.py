"""Domain entities."""

from .note import NoteOutcome, NoteRecord
from .prompt import PromptBundle, PromptStrategy
from .selection import (
    CursorSelection,
    Location,
    LocationConfidence,
    Position,
    RangeSelection,
    SelectionContext,
    SelectionSpan,
)

__all__ = [
    "CursorSelection",
    "Location",
    "LocationConfidence",
    "NoteOutcome",
    "NoteRecord",
    "Position",
    "PromptBundle",
    "PromptStrategy",
    "RangeSelection",
    "SelectionContext",
    "SelectionSpan",
]
