"""Interface for vault storage."""

from abc import ABC, abstractmethod


class IStorageBackend(ABC):
    """Asynchronous access to files addressed by vault-relative paths."""

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Return True if a file or folder exists at path."""

    @abstractmethod
    async def create_folder(self, path: str) -> None:
        """Create a folder (and missing parents)."""

    @abstractmethod
    async def create(self, path: str, content: str) -> None:
        """Create a new file; fails if it already exists."""

    @abstractmethod
    async def read(self, path: str) -> str:
        """Return the text of an existing file."""

    @abstractmethod
    async def modify(self, path: str, content: str) -> None:
        """Overwrite an existing file as one write."""
