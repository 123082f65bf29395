"""Derive safe, unique note paths and compose explanation notes."""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable
from datetime import date
from pathlib import PurePosixPath

import frontmatter
from bs4 import BeautifulSoup

from ...exceptions import NoteCreationError
from ...utils.logging import get_logger
from ..entities.note import NoteRecord
from ..interfaces.storage_backend import IStorageBackend

logger = get_logger(__name__)

MAX_FILENAME_LENGTH = 100
DEFAULT_FILENAME = "Untitled Explanation"
NOTE_EXTENSION = ".md"
NOTE_TAG = "text-explainer"

_TAG_RE = re.compile(r"<[^>]*>")
# Path-unsafe characters plus the ones that change a wiki-link's target.
_INVALID_CHARS_RE = re.compile(r'[<>:"/\\|?*#^\[\]\x00-\x1f\x7f]')
_WHITESPACE_RE = re.compile(r"\s+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")

_BLOCK_TAGS = ["p", "div", "ul", "ol", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre"]

ExistsCheck = Callable[[str], Awaitable[bool]]


def sanitize_filename(text: str) -> str:
    """Make arbitrary selected text usable as a note file name."""
    name = _TAG_RE.sub("", text)
    name = _INVALID_CHARS_RE.sub("", name)
    name = _WHITESPACE_RE.sub(" ", name).strip()
    name = name[:MAX_FILENAME_LENGTH].strip()
    return name or DEFAULT_FILENAME


def markup_to_plain_text(markup: str) -> str:
    """Strip markup from an explanation, keeping line structure."""
    soup = BeautifulSoup(markup, "html5lib")
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for item in soup.find_all("li"):
        item.insert(0, "- ")
        item.append("\n")
    for block in soup.find_all(_BLOCK_TAGS):
        block.append("\n\n")

    text = soup.get_text()
    lines = [line.rstrip() for line in text.split("\n")]
    return _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


def note_content(
    selected_text: str,
    explanation_markup: str,
    created: date | None = None,
    source_path: str | None = None,
) -> str:
    """Compose the persisted note text."""
    created = created or date.today()
    quoted = "\n".join(f"> {line}" if line else ">" for line in selected_text.split("\n"))
    body = (
        "## Selected Text\n"
        "\n"
        f"{quoted}\n"
        "\n"
        "## Explanation\n"
        "\n"
        f"{markup_to_plain_text(explanation_markup)}\n"
    )

    post = frontmatter.Post(body, created=created, tags=[NOTE_TAG])
    if source_path:
        post["source"] = f"[[{PurePosixPath(source_path).stem}]]"
    return frontmatter.dumps(post) + "\n"


def _join(directory: str, name: str) -> str:
    directory = directory.strip().strip("/")
    return f"{directory}/{name}" if directory else name


async def unique_note_path(directory: str, filename: str, exists: ExistsCheck) -> str:
    """First unused ``{directory}/{filename}[-N].md``; probes one path at a time."""
    candidate = _join(directory, f"{filename}{NOTE_EXTENSION}")
    counter = 0
    while await exists(candidate):
        counter += 1
        candidate = _join(directory, f"{filename}-{counter}{NOTE_EXTENSION}")
    return candidate


async def materialize(
    selected_text: str,
    explanation_markup: str,
    directory: str,
    exists: ExistsCheck,
    created: date | None = None,
    source_path: str | None = None,
) -> NoteRecord:
    """Build a NoteRecord at a path not yet taken in ``directory``."""
    filename = sanitize_filename(selected_text)
    path = await unique_note_path(directory, filename, exists)
    content = note_content(selected_text, explanation_markup, created, source_path)
    return NoteRecord(path=path, content=content)


async def ensure_folder(storage: IStorageBackend, directory: str) -> None:
    """Create ``directory`` unless it already exists."""
    directory = directory.strip().strip("/")
    if directory and not await storage.exists(directory):
        await storage.create_folder(directory)
        logger.debug("note_folder_created", directory=directory)


async def persist(
    storage: IStorageBackend,
    selected_text: str,
    explanation_markup: str,
    directory: str,
    created: date | None = None,
    source_path: str | None = None,
) -> NoteRecord:
    """Create the note in storage.

    Raises:
        NoteCreationError: If the storage backend fails
    """
    try:
        await ensure_folder(storage, directory)
        note = await materialize(
            selected_text,
            explanation_markup,
            directory,
            storage.exists,
            created=created,
            source_path=source_path,
        )
        await storage.create(note.path, note.content)
    except NoteCreationError:
        raise
    except Exception as e:
        logger.error(
            "note_creation_failed",
            directory=directory,
            error=str(e),
            error_type=type(e).__name__,
        )
        msg = f"Failed to create note: {e}"
        raise NoteCreationError(msg, context={"directory": directory}) from e

    logger.info("note_created", path=note.path)
    return note
