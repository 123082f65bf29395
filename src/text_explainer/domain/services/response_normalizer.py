"""Turn raw model output into display markup."""

from __future__ import annotations

from ...utils.logging import get_logger

logger = get_logger(__name__)

FENCE = "```"


def wrap_plain_text(text: str) -> str:
    """Wrap plain text as one paragraph with explicit line breaks."""
    return "<p>" + text.replace("\n", "<br>") + "</p>"


def strip_code_fence(text: str) -> str:
    """Drop a wrapping code fence.

    The opening line is always removed; the last line only when it is a
    closing fence, so an unterminated fence keeps its body intact.
    """
    if not text.startswith(FENCE):
        return text
    lines = text.split("\n")
    if len(lines) > 1 and lines[-1].strip().startswith(FENCE):
        return "\n".join(lines[1:-1])
    return "\n".join(lines[1:])


def normalize(raw_text: str | None) -> str | None:
    """Normalize model output to markup.

    Returns:
        Markup to display, or None when there is nothing to show and the
        caller should keep its prior state. Never raises.
    """
    if not raw_text:
        return None

    text = raw_text.strip()
    if not text:
        return None

    try:
        text = strip_code_fence(text)
        if not text.startswith("<"):
            text = wrap_plain_text(text)
        return text
    except Exception as e:
        logger.warning("normalize_fallback", error=str(e), error_type=type(e).__name__)
        return wrap_plain_text(text)
