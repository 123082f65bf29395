"""Factory for creating completion providers from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..utils.logging import get_logger
from .base import BaseCompletionProvider
from .openai_compatible import OpenAICompatibleProvider

if TYPE_CHECKING:
    from ..config_settings import Settings

logger = get_logger(__name__)


class ProviderFactory:
    """Builds the completion provider for the current settings.

    Every endpoint is OpenAI-compatible, so ``base_url`` alone selects it.
    """

    @classmethod
    def create_from_settings(cls, settings: Settings) -> BaseCompletionProvider:
        logger.debug("creating_provider", base_url=settings.base_url, model=settings.model)
        return OpenAICompatibleProvider.from_settings(settings)
