"""Domain entities for persisted explanation notes."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from .selection import Location


@dataclass(frozen=True)
class NoteRecord:
    """A note created from an explanation. Never mutated after creation."""

    path: str
    content: str

    @property
    def basename(self) -> str:
        """File name without directory or ``.md`` extension."""
        return PurePosixPath(self.path).stem

    @property
    def link(self) -> str:
        """Wiki-link token referencing this note."""
        return f"[[{self.basename}]]"


@dataclass(frozen=True)
class NoteOutcome:
    """Result of saving an explanation as a note."""

    note: NoteRecord
    linked: bool
    location: Location | None = None

    @property
    def link(self) -> str:
        return self.note.link
