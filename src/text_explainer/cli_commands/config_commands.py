"""Settings panel commands."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.table import Table

from ..config_settings import HOTKEY_MODIFIER_PRESETS, PERSISTED_KEYS, SUPPORTED_LANGUAGES
from ..exceptions import ConfigurationError
from ..utils.logging import get_logger
from .core_commands import ConfigOpt
from .shared import console, fail, setup

config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def show(config_path: ConfigOpt = None) -> None:
    """Show the current settings."""
    explainer = setup(config_path, None, "WARNING", False)
    table = Table(title="Text Explainer Settings")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in explainer.settings.persisted().items():
        if key == "api_key":
            value = "***" if value else "(not set)"
        elif isinstance(value, list):
            value = ",".join(value)
        table.add_row(key, str(value))
    console.print(table)
    console.print(f"Hotkey: [green]{explainer.settings.hotkey}[/green]")


@config_app.command("set")
def set_value(
    key: Annotated[str, typer.Argument(help=f"One of: {', '.join(PERSISTED_KEYS)}")],
    value: Annotated[str, typer.Argument(help="New value")],
    config_path: ConfigOpt = None,
) -> None:
    """Change a setting; persisted immediately."""
    if key not in PERSISTED_KEYS:
        raise fail(f"Unknown setting {key!r}; expected one of {', '.join(PERSISTED_KEYS)}")

    explainer = setup(config_path, None, "WARNING", False)
    try:
        settings = explainer.update_settings(**{key: value})
    except ConfigurationError as e:
        raise fail(e) from e

    if key == "language" and settings.language not in SUPPORTED_LANGUAGES:
        get_logger(__name__).warning("config_warning", language=settings.language)
    if key == "hotkey_modifiers" and ",".join(settings.hotkey_modifiers) not in HOTKEY_MODIFIER_PRESETS:
        get_logger(__name__).warning("config_warning", hotkey_modifiers=settings.hotkey_modifiers)

    shown = "***" if key == "api_key" else value
    console.print(f"[green]Saved[/green] {key} = {shown}")
