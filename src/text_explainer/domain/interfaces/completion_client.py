"""Interface for obtaining a model response."""

from abc import ABC, abstractmethod
from collections.abc import Callable

# Called with (text_chunk, current_full_text); may fire zero or more times.
ProgressCallback = Callable[[str, str], None]


class ICompletionClient(ABC):
    """Interface for chat-completion style model calls."""

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        system_prompt: str,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        """Obtain the model's response to a prompt.

        Args:
            prompt: User prompt
            system_prompt: System directive
            on_progress: Optional callback for partial/complete text

        Returns:
            The final response text; authoritative over any progress updates

        Raises:
            AuthError: If no API key is configured
            RequestError: If the endpoint returns a non-success status
            EmptyResponseError: If the payload lacks a completion choice
        """

    @abstractmethod
    async def aclose(self) -> None:
        """Release transport resources; the client is not used afterwards."""
