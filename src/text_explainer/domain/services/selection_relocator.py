"""Find a previously captured selection again in a possibly changed document.

Matching degrades in three steps: an occurrence whose surrounding text
matches the captured context, then the occurrence inside the captured
paragraph, then the first raw occurrence (flagged low-confidence).
"""

from __future__ import annotations

from ...utils.logging import get_logger
from ..entities.selection import Location, LocationConfidence, SelectionContext

logger = get_logger(__name__)


def _occurrences(document: str, needle: str):
    index = document.find(needle)
    while index != -1:
        yield index
        index = document.find(needle, index + 1)


def _before_matches(document: str, index: int, text_before: str) -> bool:
    if not text_before:
        return True
    window = document[max(0, index - len(text_before) - _slack(document, index)):index]
    return window.rstrip().endswith(text_before)


def _after_matches(document: str, end: int, text_after: str) -> bool:
    if not text_after:
        return True
    window = document[end:end + len(text_after) + _slack_after(document, end)]
    return window.lstrip().startswith(text_after)


def _slack(document: str, index: int) -> int:
    """Whitespace run length ending at index; captured context was trimmed."""
    count = 0
    while index - count - 1 >= 0 and document[index - count - 1].isspace():
        count += 1
    return count


def _slack_after(document: str, end: int) -> int:
    count = 0
    while end + count < len(document) and document[end + count].isspace():
        count += 1
    return count


def locate(
    document_text: str,
    selected_text: str,
    text_before: str = "",
    text_after: str = "",
    paragraph_text: str = "",
) -> Location | None:
    """Return where ``selected_text`` sits in ``document_text``, or None."""
    if not selected_text:
        return None

    first = document_text.find(selected_text)
    if first == -1:
        logger.debug("relocate_not_found", selected_length=len(selected_text))
        return None

    before = text_before.strip()
    after = text_after.strip()
    for index in _occurrences(document_text, selected_text):
        if _before_matches(document_text, index, before) and _after_matches(
            document_text, index + len(selected_text), after
        ):
            return Location(index, LocationConfidence.CONTEXT)

    if paragraph_text:
        paragraph_index = document_text.find(paragraph_text)
        if paragraph_index != -1:
            within = paragraph_text.find(selected_text)
            if within != -1:
                logger.debug("relocate_paragraph_match", offset=paragraph_index + within)
                return Location(paragraph_index + within, LocationConfidence.PARAGRAPH)

    logger.warning("relocate_first_occurrence_fallback", offset=first)
    return Location(first, LocationConfidence.FIRST_OCCURRENCE)


def locate_context(document_text: str, context: SelectionContext) -> Location | None:
    """Relocate a captured SelectionContext."""
    return locate(
        document_text,
        context.selected_text,
        context.text_before,
        context.text_after,
        context.paragraph_text,
    )
