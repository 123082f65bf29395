"""Backoff policy for completion requests.

Only used when ``llm_max_retries`` is set; requests are single-shot otherwise.
"""

import random
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

import httpx

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
MAX_RETRY_DELAY = 60.0


def is_retryable_status(status_code: int) -> bool:
    return status_code in RETRYABLE_STATUS_CODES


def retry_after_seconds(value: str | None, now: datetime | None = None) -> float | None:
    """Seconds to wait from a Retry-After value (delta-seconds or HTTP date).

    Returns None when the value is absent, malformed or not in the future.
    """
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        seconds = (when - (now or datetime.now(timezone.utc))).total_seconds()
    return seconds if seconds > 0 else None


def backoff_delay(
    attempt: int,
    response: httpx.Response | None = None,
    base_delay: float = 1.0,
    max_delay: float = MAX_RETRY_DELAY,
    jitter: bool = True,
) -> float:
    """Delay before retry number ``attempt`` (0-based), capped at ``max_delay``.

    A 429 response carrying Retry-After wins over exponential backoff.
    """
    if response is not None and response.status_code == 429:
        hinted = retry_after_seconds(response.headers.get("Retry-After"))
        if hinted is not None:
            return min(hinted, max_delay)

    delay = base_delay * (2**attempt)
    if jitter:
        delay += delay * random.uniform(0, 0.25)
    return min(delay, max_delay)
