"""Completion providers."""

from .base import BaseCompletionProvider
from .factory import ProviderFactory
from .openai_compatible import OpenAICompatibleProvider

__all__ = ["BaseCompletionProvider", "OpenAICompatibleProvider", "ProviderFactory"]
