"""Settings loader: YAML file merged over defaults and environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .config_settings import Settings
from .error_codes import ErrorCode
from .exceptions import ConfigurationError
from .utils.logging import get_logger

CONFIG_ENV_VAR = "TEXT_EXPLAINER_CONFIG"
DEFAULT_CONFIG_NAME = "text-explainer.yaml"


def resolve_config_path(config_path: Path | None = None) -> Path:
    """Return the settings file to use, whether or not it exists yet.

    Search order: explicit path, ``TEXT_EXPLAINER_CONFIG``, ``./text-explainer.yaml``.
    """
    if config_path:
        return config_path.expanduser()
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.cwd() / DEFAULT_CONFIG_NAME


def read_config_data(path: Path) -> dict[str, Any]:
    """Read the raw key-value blob from a YAML settings file."""
    logger = get_logger(__name__)

    if not path.exists():
        logger.debug("config_file_not_found", config_path=str(path))
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(
            "config_yaml_load_error",
            config_path=str(path),
            error=str(e),
            error_type=type(e).__name__,
        )
        msg = f"Failed to parse config file: {path}"
        suggestion = (
            "Check YAML syntax (indentation, colons, quotes). "
            f"Original error: {e}"
        )
        raise ConfigurationError(
            msg, suggestion=suggestion, error_code=ErrorCode.CFG_PARSE.value
        ) from e

    if not isinstance(data, dict):
        msg = f"Config file must contain a mapping: {path}"
        raise ConfigurationError(msg)
    return data


def build_settings(data: dict[str, Any]) -> Settings:
    """Validate a key-value blob merged over defaults."""
    try:
        return Settings(**data)
    except ValidationError as e:
        msg = "Invalid settings"
        raise ConfigurationError(
            msg,
            suggestion=str(e),
            context={"fields": [".".join(map(str, err["loc"])) for err in e.errors()]},
        ) from e


def load_config(config_path: Path | None = None) -> Settings:
    """Load settings once at startup, merged over defaults."""
    logger = get_logger(__name__)
    path = resolve_config_path(config_path)
    data = read_config_data(path)
    settings = build_settings(data)
    logger.info(
        "config_loaded",
        config_path=str(path),
        model=settings.model,
        language=settings.language,
        has_api_key=bool(settings.api_key),
    )
    return settings


__all__ = [
    "Settings",
    "build_settings",
    "load_config",
    "read_config_data",
    "resolve_config_path",
]
