"""Shared utilities for CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from ..application.container import build_explainer
from ..application.explainer import TextExplainer
from ..domain.entities.selection import SelectionSpan
from ..domain.interfaces.document_accessor import IDocumentAccessor
from ..exceptions import TextExplainerError
from ..infrastructure.file_document import FileDocument
from ..infrastructure.notifiers import ConsoleNotifier
from ..infrastructure.rendered_document import RenderedDocument
from ..utils.logging import configure_logging

# Shared console for all commands
console = Console()


@dataclass
class CapturedSelection:
    """What the CLI selected in a note, in either capture mode."""

    document: IDocumentAccessor | None
    selection: SelectionSpan | None
    source_path: str


def fail(error: TextExplainerError | str) -> typer.Exit:
    """Print an error and return the exit to raise."""
    if isinstance(error, TextExplainerError):
        console.print(f"[bold red]Error:[/bold red] {escape(error.message)}")
        if error.suggestion:
            console.print(f"[yellow]Suggestion:[/yellow] {escape(error.suggestion)}")
    else:
        console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    return typer.Exit(code=1)


def setup(
    config_path: Path | None,
    vault: Path | None,
    log_level: str | None,
    verbose: bool,
) -> TextExplainer:
    """Build the explainer and configure logging.

    Without an explicit level the settings file's ``log_level`` applies.
    """
    try:
        explainer = build_explainer(config_path, vault, notifier=ConsoleNotifier(console))
    except TextExplainerError as e:
        raise fail(e) from e
    configure_logging(log_level or explainer.settings.log_level, verbose=verbose)
    return explainer


def resolve_vault(note: Path, vault: Path | None, configured: Path) -> tuple[Path, str]:
    """Vault root and the note's vault-relative path.

    Falls back to the note's own folder when the note lies outside the vault.
    """
    note = note.resolve()
    root = (vault or configured).expanduser().resolve()
    try:
        return root, note.relative_to(root).as_posix()
    except ValueError:
        return note.parent, note.name


def capture_selection(
    note: Path, text: str, occurrence: int, rendered: bool, source_path: str
) -> CapturedSelection:
    """Select the Nth occurrence of ``text`` in the note's source or rendered view."""
    if rendered:
        view = RenderedDocument(note.read_text(encoding="utf-8"))
        return CapturedSelection(None, view.find_selection(text, occurrence), source_path)

    document = FileDocument(note)
    return CapturedSelection(document, document.find_selection(text, occurrence), source_path)
