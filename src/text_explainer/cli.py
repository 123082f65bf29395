"""Command-line interface for text-explainer."""

from __future__ import annotations

import typer

from .cli_commands import config_commands, core_commands

app = typer.Typer(
    name="text-explainer",
    help="Explain, translate or summarize selected note text with an LLM.",
    no_args_is_help=True,
)

app.add_typer(
    config_commands.config_app,
    name="config",
    help="Show and change settings",
)

core_commands.register(app)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
