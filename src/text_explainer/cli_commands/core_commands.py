"""Explain, prompt, commands and doctor commands."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..application.commands import EXPLAIN_COMMAND_ID, Command
from ..application.explanation_session import ExplanationSession
from ..domain.entities.note import NoteOutcome
from ..domain.services.note_materializer import markup_to_plain_text
from ..domain.services.prompt_builder import build_prompt
from ..exceptions import NoteCreationError, SelectionError
from ..infrastructure.vault_storage import VaultStorage
from ..providers.factory import ProviderFactory
from .shared import CapturedSelection, capture_selection, console, fail, resolve_vault, setup

NoteArg = Annotated[
    Path,
    typer.Argument(help="Markdown note to select from", exists=True, dir_okay=False),
]
SelectOpt = Annotated[str, typer.Option("--select", "-s", help="Text to select")]
OccurrenceOpt = Annotated[
    int, typer.Option("--occurrence", "-n", min=0, help="Which occurrence to select (0-based)")
]
RenderedOpt = Annotated[
    bool,
    typer.Option("--rendered", help="Select on the read-only rendered view"),
]
VaultOpt = Annotated[
    Path | None, typer.Option("--vault", help="Vault root (default: settings vault_path)")
]
ConfigOpt = Annotated[
    Path | None, typer.Option("--config", help="Path to text-explainer.yaml")
]
LogLevelOpt = Annotated[
    str | None,
    typer.Option(
        "--log-level", help="Log level (DEBUG, INFO, WARN, ERROR; default: settings log_level)"
    ),
]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Show all log events")]


async def _explain_and_save(
    command: Command,
    captured: CapturedSelection,
    save_note: bool,
) -> tuple[ExplanationSession | None, NoteOutcome | None]:
    session = await command.invoke(captured.document, captured.selection, captured.source_path)
    outcome: NoteOutcome | None = None
    if session is not None and session.markup is not None and save_note:
        outcome = await session.save_note()
    return session, outcome


def explain(
    note: NoteArg,
    select: SelectOpt,
    occurrence: OccurrenceOpt = 0,
    rendered: RenderedOpt = False,
    save_note: Annotated[
        bool,
        typer.Option("--save-note/--no-save-note", help="Save the explanation as a linked note"),
    ] = False,
    html: Annotated[bool, typer.Option("--html", help="Print the raw markup")] = False,
    vault: VaultOpt = None,
    config_path: ConfigOpt = None,
    log_level: LogLevelOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Explain, translate or summarize selected text in a note."""
    explainer = setup(config_path, vault, log_level, verbose)
    vault_root, source_path = resolve_vault(note, vault, explainer.settings.vault_path)
    explainer.storage = VaultStorage(vault_root)

    captured = capture_selection(note, select, occurrence, rendered, source_path)
    command = explainer.commands.get(EXPLAIN_COMMAND_ID)
    if command is None or not command.check(captured.document, captured.selection):
        raise fail(SelectionError())

    try:
        session, outcome = asyncio.run(_explain_and_save(command, captured, save_note))
    except NoteCreationError as e:
        raise fail(e) from e

    if session is None:
        raise typer.Exit(code=1)
    if session.error:
        raise fail(session.error)

    console.print(Panel(escape(session.context.selected_text), title="Selected", expand=False))
    if session.markup is not None:
        body = session.markup if html else markup_to_plain_text(session.markup)
        console.print(Panel(escape(body), title="Text Explanation"))

    if outcome is not None:
        status = "[green]linked[/green]" if outcome.linked else "[yellow]not linked[/yellow]"
        console.print(f"Note: {outcome.note.path} ({status})")


def prompt(
    note: NoteArg,
    select: SelectOpt,
    occurrence: OccurrenceOpt = 0,
    rendered: RenderedOpt = False,
    config_path: ConfigOpt = None,
    log_level: LogLevelOpt = "WARNING",
) -> None:
    """Print the prompt that would be sent, without calling the model."""
    explainer = setup(config_path, None, log_level, False)
    captured = capture_selection(note, select, occurrence, rendered, note.name)
    context = explainer.capture(captured.document, captured.selection, captured.source_path)
    if context is None:
        raise fail(SelectionError())

    bundle = build_prompt(
        context.selected_text,
        context.paragraph_text,
        context.text_before,
        context.text_after,
        explainer.settings.language,
    )
    console.print(f"[bold]Strategy:[/bold] {bundle.strategy.value}")
    console.print(Panel(escape(bundle.system_prompt), title="System prompt"))
    console.print(Panel(escape(bundle.prompt), title="Prompt"))


def commands(
    config_path: ConfigOpt = None,
) -> None:
    """List the commands registered with the host and their hotkeys."""
    explainer = setup(config_path, None, "WARNING", False)
    table = Table(title="Commands")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Hotkey", style="green")
    for command in explainer.commands:
        table.add_row(command.id, command.name, ", ".join(str(h) for h in command.hotkeys) or "-")
    console.print(table)


def doctor(
    config_path: ConfigOpt = None,
    log_level: LogLevelOpt = "WARNING",
) -> None:
    """Check the API key, endpoint reachability and the configured model."""
    explainer = setup(config_path, None, log_level, False)
    settings = explainer.settings

    if not settings.api_key:
        console.print("[red]FAIL[/red] API key: not configured")
        raise typer.Exit(code=1)
    console.print("[green]PASS[/green] API key: configured")

    async def _check() -> tuple[bool, list[str]]:
        provider = ProviderFactory.create_from_settings(settings)
        try:
            if not await provider.check_connection():
                return False, []
            return True, await provider.list_models()
        finally:
            await provider.aclose()

    reachable, models = asyncio.run(_check())
    if not reachable:
        console.print(f"[red]FAIL[/red] Endpoint: {settings.base_url} unreachable")
        raise typer.Exit(code=1)
    console.print(f"[green]PASS[/green] Endpoint: {settings.base_url}")

    if not models:
        console.print(f"[yellow]SKIP[/yellow] Model: {settings.model} (endpoint lists no models)")
    elif settings.model in models:
        console.print(f"[green]PASS[/green] Model: {settings.model}")
    else:
        console.print(f"[red]FAIL[/red] Model: {settings.model} not offered by the endpoint")
        raise typer.Exit(code=1)


def register(app: typer.Typer) -> None:
    app.command()(explain)
    app.command()(prompt)
    app.command()(commands)
    app.command()(doctor)
