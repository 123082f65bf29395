"""Tests for the completion retry backoff policy."""

from datetime import datetime, timezone

import httpx
import pytest

from text_explainer.providers.retry_utils import (
    MAX_RETRY_DELAY,
    backoff_delay,
    is_retryable_status,
    retry_after_seconds,
)

NOW = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


class TestRetryAfter:
    def test_delta_seconds(self):
        assert retry_after_seconds("2") == 2.0
        assert retry_after_seconds("1.5") == 1.5

    def test_http_date(self):
        assert retry_after_seconds("Mon, 01 Jan 2024 00:00:30 GMT", now=NOW) == 30.0

    def test_past_date_is_ignored(self):
        assert retry_after_seconds("Sun, 31 Dec 2023 23:59:00 GMT", now=NOW) is None

    @pytest.mark.parametrize("value", [None, "", "0", "-3", "soon"])
    def test_unusable_values(self, value):
        assert retry_after_seconds(value, now=NOW) is None


class TestBackoffDelay:
    def test_exponential_growth(self):
        assert backoff_delay(0, jitter=False) == 1.0
        assert backoff_delay(2, jitter=False) == 4.0

    def test_capped(self):
        assert backoff_delay(10, jitter=False) == MAX_RETRY_DELAY
        assert backoff_delay(10) == MAX_RETRY_DELAY

    def test_jitter_stays_within_a_quarter(self):
        for _ in range(20):
            assert 2.0 <= backoff_delay(1) <= 2.5

    def test_rate_limit_honors_retry_after(self):
        response = httpx.Response(429, headers={"Retry-After": "7"})
        assert backoff_delay(0, response) == 7.0

    def test_retry_after_is_capped(self):
        response = httpx.Response(429, headers={"Retry-After": "600"})
        assert backoff_delay(0, response) == MAX_RETRY_DELAY

    def test_retry_after_only_applies_to_rate_limits(self):
        response = httpx.Response(503, headers={"Retry-After": "7"})
        assert backoff_delay(0, response, jitter=False) == 1.0


def test_retryable_statuses():
    assert is_retryable_status(429)
    assert is_retryable_status(503)
    assert not is_retryable_status(400)
    assert not is_retryable_status(401)
