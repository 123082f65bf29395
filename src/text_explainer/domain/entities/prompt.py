"""Prompt entities."""

from dataclasses import dataclass
from enum import Enum


class PromptStrategy(str, Enum):
    """Prompt strategy chosen from the selection's word count."""

    SUMMARY = "summary"
    TRANSLATION = "translation"
    EXPLAIN = "explain"


@dataclass(frozen=True)
class PromptBundle:
    """User prompt and system directive sent to the completion endpoint."""

    prompt: str
    system_prompt: str
    strategy: PromptStrategy = PromptStrategy.EXPLAIN
