"""Storage backend over a vault directory on disk."""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..domain.interfaces.storage_backend import IStorageBackend
from ..utils.io import write_text_atomic
from ..utils.logging import get_logger

logger = get_logger(__name__)


class VaultStorage(IStorageBackend):
    """Vault-relative file access; blocking I/O runs in a worker thread."""

    def __init__(self, root: Path):
        self.root = root.expanduser()

    def resolve(self, path: str) -> Path:
        """Absolute path for a vault-relative path, confined to the vault."""
        root = self.root.resolve()
        target = (root / path).resolve()
        if target != root and root not in target.parents:
            msg = f"Path escapes vault: {path}"
            raise ValueError(msg)
        return target

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self.resolve(path).exists)

    async def create_folder(self, path: str) -> None:
        target = self.resolve(path)
        await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)

    async def create(self, path: str, content: str) -> None:
        target = self.resolve(path)
        if await asyncio.to_thread(target.exists):
            msg = f"File already exists: {path}"
            raise FileExistsError(msg)
        await asyncio.to_thread(write_text_atomic, target, content)
        logger.debug("vault_file_created", path=path)

    async def read(self, path: str) -> str:
        target = self.resolve(path)
        return await asyncio.to_thread(target.read_text, encoding="utf-8")

    async def modify(self, path: str, content: str) -> None:
        target = self.resolve(path)
        if not await asyncio.to_thread(target.exists):
            msg = f"File not found: {path}"
            raise FileNotFoundError(msg)
        await asyncio.to_thread(write_text_atomic, target, content)
        logger.debug("vault_file_modified", path=path)
