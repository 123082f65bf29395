"""OpenAI-compatible chat completion provider."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any

import httpx

from ..exceptions import (
    AuthError,
    EmptyResponseError,
    ProviderConnectionError,
    RequestError,
)
from ..utils.logging import get_logger
from .base import BaseCompletionProvider
from .retry_utils import backoff_delay, is_retryable_status

if TYPE_CHECKING:
    from ..config_settings import Settings

logger = get_logger(__name__)


class OpenAICompatibleProvider(BaseCompletionProvider):
    """Provider for any endpoint exposing ``POST {base_url}/chat/completions``.

    Configuration:
        api_key: Bearer token; checked before every request
        base_url: API endpoint URL (default: https://api.openai.com/v1)
        model: Model identifier sent with each request
        timeout: Transport timeout in seconds
        max_retries: Extra attempts on 429/5xx and transport errors
    """

    DEFAULT_BASE_URL = "https://api.openai.com/v1"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 120.0,
        max_retries: int = 0,
        **kwargs: Any,
    ):
        super().__init__(
            api_key=api_key,
            model=model,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            **kwargs,
        )

        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries

        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            headers={"Content-Type": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> OpenAICompatibleProvider:
        return cls(
            api_key=settings.api_key,
            model=settings.model,
            base_url=settings.base_url,
            timeout=settings.llm_timeout,
            max_retries=settings.llm_max_retries,
        )

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def build_payload(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    async def _wait_before_retry(
        self,
        attempt: int,
        response: httpx.Response | None = None,
        error: str | None = None,
    ) -> None:
        wait_time = backoff_delay(attempt, response)
        logger.warning(
            "completion_retry",
            attempt=attempt + 1,
            max_retries=self.max_retries,
            status_code=response.status_code if response is not None else None,
            wait_seconds=round(wait_time, 2),
            error=error,
        )
        await asyncio.sleep(wait_time)

    async def _post_with_retries(self, payload: dict[str, Any]) -> httpx.Response:
        attempts = self.max_retries + 1
        for attempt in range(attempts):
            last_attempt = attempt == attempts - 1
            try:
                response = await self.client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers=self._headers(),
                )
            except httpx.RequestError as e:
                if not last_attempt:
                    await self._wait_before_retry(attempt, error=str(e))
                    continue
                logger.error(
                    "completion_transport_error",
                    base_url=self.base_url,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                msg = f"Could not reach {self.base_url}: {e}"
                raise ProviderConnectionError(
                    msg, suggestion="Check base_url and your network connection"
                ) from e

            if response.is_success:
                return response

            status_code = response.status_code
            if is_retryable_status(status_code) and not last_attempt:
                await self._wait_before_retry(attempt, response)
                continue

            logger.error(
                "completion_request_failed",
                status_code=status_code,
                body=response.text[:500],
            )
            raise RequestError(status_code, response.text, response.reason_phrase)

        msg = "All retries failed"
        raise RuntimeError(msg)

    @staticmethod
    def parse_completion(data: Any) -> str:
        """Extract ``choices[0].message.content`` from a response payload.

        Raises:
            EmptyResponseError: If the payload has no completion choice
        """
        if not isinstance(data, dict):
            raise EmptyResponseError()
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise EmptyResponseError()
        first_choice = choices[0]
        if not isinstance(first_choice, dict):
            raise EmptyResponseError()
        message = first_choice.get("message")
        if not isinstance(message, dict) or not message:
            raise EmptyResponseError()
        content = message.get("content")
        return content if isinstance(content, str) else ""

    async def _request(self, messages: list[dict[str, str]]) -> str:
        if not self.api_key:
            raise AuthError()

        payload = self.build_payload(messages)
        request_start_time = time.time()
        logger.info(
            "completion_request",
            model=self.model,
            prompt_length=sum(len(m["content"]) for m in messages),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        response = await self._post_with_retries(payload)

        try:
            data = response.json()
        except ValueError as e:
            logger.error("completion_parse_error", error=str(e), body=response.text[:500])
            raise EmptyResponseError() from e

        text = self.parse_completion(data)
        usage = data.get("usage") or {}
        logger.info(
            "completion_success",
            model=data.get("model", self.model),
            response_length=len(text),
            request_duration=round(time.time() - request_start_time, 2),
            prompt_tokens=usage.get("prompt_tokens", 0),
            completion_tokens=usage.get("completion_tokens", 0),
            finish_reason=data["choices"][0].get("finish_reason"),
        )
        return text

    async def check_connection(self) -> bool:
        """Check if the endpoint answers ``GET /models``."""
        try:
            response = await self.client.get(f"{self.base_url}/models", headers=self._headers())
            return response.status_code == 200
        except httpx.HTTPError as e:
            logger.error("connection_check_failed", base_url=self.base_url, error=str(e))
            return False

    async def list_models(self) -> list[str]:
        try:
            response = await self.client.get(f"{self.base_url}/models", headers=self._headers())
            response.raise_for_status()
            return [model["id"] for model in response.json().get("data", [])]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.error("list_models_failed", error=str(e))
            return []

    async def aclose(self) -> None:
        await self.client.aclose()
