"""YAML settings store that preserves comments and key order."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

from ruamel.yaml import YAML

from ..config_loader import build_settings, read_config_data
from ..config_settings import Settings
from ..domain.interfaces.settings_store import ISettingsStore
from ..utils.io import write_text_atomic
from ..utils.logging import get_logger

logger = get_logger(__name__)


class YamlSettingsStore(ISettingsStore):
    """Persists the settings blob to a YAML file on every change."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> Settings:
        return build_settings(read_config_data(self.path))

    def save(self, settings: Settings) -> None:
        yaml = YAML()
        yaml.preserve_quotes = True
        yaml.indent(mapping=2, sequence=4, offset=2)

        data = None
        if self.path.exists():
            data = yaml.load(self.path.read_text(encoding="utf-8"))
        if data is None:
            data = {}

        for key, value in settings.persisted().items():
            data[key] = value

        output = StringIO()
        yaml.dump(data, output)
        write_text_atomic(self.path, output.getvalue())
        logger.info("settings_updated", config_path=str(self.path))
