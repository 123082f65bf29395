"""Builds a TextExplainer from a settings file."""

from __future__ import annotations

from pathlib import Path

from ..config_loader import resolve_config_path
from ..domain.interfaces.notification_sink import INotificationSink
from ..infrastructure.notifiers import ConsoleNotifier
from ..infrastructure.settings_store import YamlSettingsStore
from ..infrastructure.vault_storage import VaultStorage
from ..providers.factory import ProviderFactory
from ..utils.logging import get_logger
from .explainer import TextExplainer

logger = get_logger(__name__)


def build_explainer(
    config_path: Path | None = None,
    vault_path: Path | None = None,
    notifier: INotificationSink | None = None,
) -> TextExplainer:
    """Load settings once and wire the default collaborators."""
    store = YamlSettingsStore(resolve_config_path(config_path))
    settings = store.load()
    if vault_path is not None:
        settings = settings.model_copy(update={"vault_path": vault_path})

    explainer = TextExplainer(
        settings=settings,
        client_factory=ProviderFactory.create_from_settings,
        notifier=notifier or ConsoleNotifier(),
        storage=VaultStorage(settings.vault_path),
        settings_store=store,
    )
    logger.debug(
        "explainer_built",
        config_path=str(store.path),
        vault_path=str(settings.vault_path),
    )
    return explainer
