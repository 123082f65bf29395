"""Settings model for text-explainer."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

HOTKEY_MODIFIERS = ("Mod", "Ctrl", "Meta", "Shift", "Alt")

# Display set offered by the settings panel; any free text is accepted.
SUPPORTED_LANGUAGES = ("Chinese", "English", "Spanish", "French", "German", "Japanese")

# Modifier combinations offered by the settings panel.
HOTKEY_MODIFIER_PRESETS: dict[str, str] = {
    "Alt": "Alt only",
    "Ctrl": "Ctrl only",
    "Meta": "Cmd/Win only",
    "Shift": "Shift only",
    "Alt,Shift": "Alt + Shift",
    "Ctrl,Shift": "Ctrl + Shift",
    "Meta,Shift": "Cmd/Win + Shift",
}

# Keys persisted to the settings file.
PERSISTED_KEYS = (
    "model",
    "api_key",
    "base_url",
    "language",
    "hotkey_modifiers",
    "hotkey_key",
    "note_directory",
)


class Settings(BaseSettings):
    """Plugin configuration using pydantic-settings."""

    model_config = SettingsConfigDict(
        env_prefix="TEXT_EXPLAINER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Completion endpoint
    model: str = Field(default="gpt-3.5-turbo", description="LLM model to use")
    api_key: str = Field(
        default="", description="OpenAI or OpenAI-compatible API key", repr=False
    )
    base_url: str = Field(
        default="https://api.openai.com/v1", description="API base URL"
    )
    language: str = Field(
        default="Chinese", description="Language for explanations and translations"
    )

    # Hotkey
    hotkey_modifiers: list[str] = Field(
        default_factory=lambda: ["Alt"], description="Hotkey modifier keys"
    )
    hotkey_key: str = Field(default="d", description="Key pressed with the modifiers")

    # Notes
    note_directory: str = Field(
        default="Explanations",
        description="Vault folder where explanation notes are created",
    )
    vault_path: Path = Field(
        default=Path(), description="Root of the vault holding notes"
    )

    # Runtime
    log_level: str = Field(default="INFO", description="Log level")
    llm_timeout: float = Field(
        default=120.0, gt=0, description="Completion request timeout in seconds"
    )
    llm_max_retries: int = Field(
        default=0,
        ge=0,
        description="Extra attempts on 429/5xx or transport errors",
    )

    @field_validator("hotkey_key", mode="before")
    @classmethod
    def validate_hotkey_key(cls, v: Any) -> str:
        """Require exactly one character, stored lowercase."""
        if not isinstance(v, str) or len(v) != 1:
            msg = f"hotkey_key must be a single character, got {v!r}"
            raise ValueError(msg)
        return v.lower()

    @field_validator("hotkey_modifiers", mode="before")
    @classmethod
    def validate_hotkey_modifiers(cls, v: Any) -> list[str]:
        """Accept a list or comma-separated string of known modifiers."""
        if isinstance(v, str):
            v = [part.strip() for part in v.split(",") if part.strip()]
        if not isinstance(v, (list, tuple)):
            msg = f"hotkey_modifiers must be a list, got {type(v).__name__}"
            raise ValueError(msg)

        modifiers: list[str] = []
        for name in v:
            match = next(
                (m for m in HOTKEY_MODIFIERS if m.lower() == str(name).lower()), None
            )
            if match is None:
                msg = (
                    f"Unknown hotkey modifier {name!r}; "
                    f"expected one of {', '.join(HOTKEY_MODIFIERS)}"
                )
                raise ValueError(msg)
            if match not in modifiers:
                modifiers.append(match)

        if not modifiers:
            msg = "hotkey_modifiers must contain at least one modifier"
            raise ValueError(msg)
        return modifiers

    @field_validator("base_url")
    @classmethod
    def strip_base_url(cls, v: str) -> str:
        """Drop the trailing slash so endpoint paths join cleanly."""
        return v.strip().rstrip("/")

    @field_validator("vault_path", mode="before")
    @classmethod
    def parse_vault_path(cls, v: Any) -> Path:
        if v is None or v == "":
            return Path()
        return Path(str(v)).expanduser()

    @property
    def hotkey(self) -> str:
        """Human-readable hotkey, e.g. ``Alt+Shift+D``."""
        return "+".join([*self.hotkey_modifiers, self.hotkey_key.upper()])

    def persisted(self) -> dict[str, Any]:
        """Return the key-value blob written to the settings file."""
        data = self.model_dump(include=set(PERSISTED_KEYS))
        return {key: data[key] for key in PERSISTED_KEYS}
