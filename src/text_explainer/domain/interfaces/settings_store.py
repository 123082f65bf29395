"""Interface for settings persistence."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ...config_settings import Settings


class ISettingsStore(ABC):
    """Loads and persists the settings blob."""

    @abstractmethod
    def load(self) -> "Settings":
        """Load settings merged over defaults."""

    @abstractmethod
    def save(self, settings: "Settings") -> None:
        """Persist settings."""

    def update(self, settings: "Settings", **changes: Any) -> "Settings":
        """Apply changes, validate, and persist the result.

        Returns:
            A new settings value; the input is left untouched
        """
        from ...config_loader import build_settings

        updated = build_settings({**settings.model_dump(), **changes})
        self.save(updated)
        return updated
