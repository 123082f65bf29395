"""Capture a selection and the text around it.

Two capture modes produce the same ``SelectionContext``:

- ``CursorSelection`` on an editable document, via ``IDocumentAccessor``.
- ``RangeSelection`` on a read-only rendered surface, where the enclosing
  block is found by walking up the node tree.
"""

from __future__ import annotations

from typing import Any

from ..entities.selection import (
    CursorSelection,
    RangeSelection,
    SelectionContext,
    SelectionSpan,
)
from ..interfaces.document_accessor import IDocumentAccessor

CONTEXT_RANGE = 200

BLOCK_TAGS = frozenset(
    {
        "p",
        "div",
        "li",
        "blockquote",
        "pre",
        "td",
        "th",
        "dd",
        "dt",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "section",
        "article",
        "body",
    }
)


def context_window(text: str, start: int, end: int, size: int = CONTEXT_RANGE) -> tuple[str, str]:
    """Return trimmed text before ``start`` and after ``end``, clamped to bounds."""
    before = text[max(0, start - size):start].strip()
    after = text[end:min(len(text), end + size)].strip()
    return before, after


def extract(
    document: IDocumentAccessor | None,
    selection: SelectionSpan | None,
    source_path: str | None = None,
) -> SelectionContext | None:
    """Build a SelectionContext, or None when nothing is selected."""
    if isinstance(selection, CursorSelection):
        if document is None:
            return None
        return _extract_from_cursor(document, selection, source_path)
    if isinstance(selection, RangeSelection):
        return _extract_from_range(selection, source_path)
    return None


def _extract_from_cursor(
    document: IDocumentAccessor,
    selection: CursorSelection,
    source_path: str | None,
) -> SelectionContext | None:
    start = document.pos_to_offset(selection.start)
    end = document.pos_to_offset(selection.end)
    doc = document.get_value()
    selected_text = doc[start:end]
    if not selected_text:
        return None

    before, after = context_window(doc, start, end)
    return SelectionContext(
        selected_text=selected_text,
        text_before=before,
        text_after=after,
        paragraph_text=document.get_line(selection.start.line),
        editor=document,
        span=(start, end),
        source_path=source_path,
    )


def _extract_from_range(
    selection: RangeSelection, source_path: str | None
) -> SelectionContext | None:
    if not selection.selected_text:
        return None

    root = _root_of(selection.node)
    full_text, start = _flatten_until(root, selection.node)
    start += selection.offset
    end = start + len(selection.selected_text)

    before, after = context_window(full_text, start, end)
    block = nearest_block(selection.node)
    paragraph = block.get_text() if block is not None else str(selection.node)

    return SelectionContext(
        selected_text=selection.selected_text,
        text_before=before,
        text_after=after,
        paragraph_text=paragraph,
        source_path=source_path,
    )


def nearest_block(node: Any) -> Any | None:
    """Walk up from a node to the nearest block-level element."""
    current = node.parent
    while current is not None:
        if getattr(current, "name", None) in BLOCK_TAGS:
            return current
        current = current.parent
    return None


def _root_of(node: Any) -> Any:
    current = node
    while current.parent is not None:
        current = current.parent
    return current


def _flatten_until(root: Any, target: Any) -> tuple[str, int]:
    """Concatenate all text under root, returning it and target's start offset."""
    parts: list[str] = []
    offset = -1
    length = 0
    for string in root.strings:
        if string is target:
            offset = length
        parts.append(str(string))
        length += len(string)
    if offset < 0:
        msg = "Selection node is not part of its document tree"
        raise ValueError(msg)
    return "".join(parts), offset
