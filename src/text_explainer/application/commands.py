"""Commands exposed to the host, with their hotkey bindings."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..domain.entities.selection import SelectionSpan
from ..domain.interfaces.document_accessor import IDocumentAccessor
from ..utils.logging import get_logger

if TYPE_CHECKING:
    from .explainer import TextExplainer

logger = get_logger(__name__)

EXPLAIN_COMMAND_ID = "explain-selected-text"
HOTKEY_COMMAND_ID = "explain-text-hotkey"


@dataclass(frozen=True)
class Hotkey:
    modifiers: tuple[str, ...]
    key: str

    def __str__(self) -> str:
        return "+".join([*self.modifiers, self.key.upper()])


@dataclass(frozen=True)
class Command:
    """A host command; ``invoke`` is a no-op returning None when unavailable."""

    id: str
    name: str
    run: Callable[[IDocumentAccessor | None, SelectionSpan | None, str | None], Awaitable[Any]]
    is_available: Callable[[IDocumentAccessor | None, SelectionSpan | None], bool]
    hotkeys: tuple[Hotkey, ...] = field(default=())

    def check(self, document: IDocumentAccessor | None, selection: SelectionSpan | None) -> bool:
        return self.is_available(document, selection)

    async def invoke(
        self,
        document: IDocumentAccessor | None,
        selection: SelectionSpan | None,
        source_path: str | None = None,
    ) -> Any:
        if not self.check(document, selection):
            logger.debug("command_unavailable", command=self.id)
            return None
        return await self.run(document, selection, source_path)


class CommandRegistry:
    """Commands registered with the host, keyed by id."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def add(self, command: Command) -> None:
        self._commands[command.id] = command
        logger.debug("command_registered", command=command.id, hotkeys=[str(h) for h in command.hotkeys])

    def remove(self, command_id: str) -> None:
        self._commands.pop(command_id, None)

    def get(self, command_id: str) -> Command | None:
        return self._commands.get(command_id)

    def __iter__(self):
        return iter(list(self._commands.values()))

    def __len__(self) -> int:
        return len(self._commands)


def hotkey_command(explainer: TextExplainer) -> Command:
    settings = explainer.settings
    return Command(
        id=HOTKEY_COMMAND_ID,
        name="Explain text (hotkey)",
        run=explainer.explain_selected_text,
        is_available=explainer.has_selection,
        hotkeys=(Hotkey(tuple(settings.hotkey_modifiers), settings.hotkey_key),),
    )


def register_commands(explainer: TextExplainer, registry: CommandRegistry) -> None:
    registry.add(
        Command(
            id=EXPLAIN_COMMAND_ID,
            name="Explain selected text",
            run=explainer.explain_selected_text,
            is_available=explainer.has_selection,
        )
    )
    registry.add(hotkey_command(explainer))


def rebind_hotkey(explainer: TextExplainer, registry: CommandRegistry) -> None:
    """Re-create the hotkey command after the hotkey settings changed."""
    registry.remove(HOTKEY_COMMAND_ID)
    registry.add(hotkey_command(explainer))
