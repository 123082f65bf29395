"""Configuration entrypoint (re-exported from split modules)."""

from .config_loader import build_settings, load_config, resolve_config_path
from .config_settings import (
    HOTKEY_MODIFIER_PRESETS,
    HOTKEY_MODIFIERS,
    SUPPORTED_LANGUAGES,
    Settings,
)

__all__ = [
    "HOTKEY_MODIFIERS",
    "HOTKEY_MODIFIER_PRESETS",
    "SUPPORTED_LANGUAGES",
    "Settings",
    "build_settings",
    "load_config",
    "resolve_config_path",
]
