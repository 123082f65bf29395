"""Base completion provider."""

from abc import abstractmethod
from typing import Any

from ..domain.interfaces.completion_client import ICompletionClient, ProgressCallback
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Sampling policy of the explanation core, independent of the transport.
COMPLETION_TEMPERATURE = 0.7
COMPLETION_MAX_TOKENS = 2048


class BaseCompletionProvider(ICompletionClient):
    """Abstract base class for completion providers.

    Subclasses implement ``_request``; ``complete`` applies the request
    policy and the progress notification.
    """

    temperature = COMPLETION_TEMPERATURE
    max_tokens = COMPLETION_MAX_TOKENS

    def __init__(self, **kwargs: Any):
        """Initialize the provider with configuration parameters.

        Args:
            **kwargs: Provider-specific configuration options
        """
        self.config = kwargs
        logger.debug(
            "provider_initialized",
            provider=self.__class__.__name__,
            config=self._safe_config_for_logging(),
        )

    def _safe_config_for_logging(self) -> dict[str, Any]:
        """Return config with sensitive data redacted for logging."""
        safe_config = self.config.copy()
        for key in ["api_key", "token", "password"]:
            if safe_config.get(key):
                safe_config[key] = "***REDACTED***"
        return safe_config

    def build_messages(self, prompt: str, system_prompt: str) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": prompt},
        ]

    async def complete(
        self,
        prompt: str,
        system_prompt: str,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        text = await self._request(self.build_messages(prompt, system_prompt))
        if on_progress is not None:
            on_progress(text, text)
        return text

    @abstractmethod
    async def _request(self, messages: list[dict[str, str]]) -> str:
        """Send messages and return the completion text."""

    async def check_connection(self) -> bool:
        """Check if the provider is reachable. Defaults to True."""
        return True

    async def list_models(self) -> list[str]:
        """List available models. Providers without listing return []."""
        return []

    async def aclose(self) -> None:
        """Release transport resources."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config={self._safe_config_for_logging()})"
