"""SettingsManager - backs index settings up to disk and pushes them back."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from indexsync.domain.index.model.value import SearchConfig
from indexsync.domain.index.port.backend import SearchBackend
from indexsync.domain.shared.error import ConfigurationError

logger = logging.getLogger(__name__)


class SettingsManager:
    """Copies index settings between the backend and JSON files.

    One file per configured index, named ``<index name>-settings.json``
    (index name without prefix) inside ``directory``. Settings are treated
    as opaque blobs.
    """

    def __init__(self, backend: SearchBackend, config: SearchConfig, directory: Path) -> None:
        self._backend = backend
        self._config = config
        self._directory = directory

    def settings_file(self, index_name: str) -> Path:
        return self._directory / f"{index_name}-settings.json"

    async def backup(self, index_names: Iterable[str] | None = None) -> list[str]:
        """Save the settings of the selected indices (all when empty).

        Returns:
            One message per saved index.
        """
        messages = []
        self._directory.mkdir(parents=True, exist_ok=True)

        for name in self._select(index_names):
            full_name = self._config.full_index_name(name)
            settings = await self._backend.get_settings(full_name)
            self.settings_file(name).write_text(json.dumps(settings, indent=4, sort_keys=True))
            messages.append(f"Saved settings for {full_name}")
            logger.info(f"Saved settings for '{full_name}' to {self.settings_file(name)}")

        return messages

    async def push(self, index_names: Iterable[str] | None = None) -> list[str]:
        """Send saved settings of the selected indices (all when empty).

        Indices without a settings file are skipped.

        Returns:
            One message per pushed index.

        Raises:
            ConfigurationError: If a settings file is not valid JSON.
        """
        messages = []

        for name in self._select(index_names):
            path = self.settings_file(name)
            if not path.is_file():
                logger.warning(f"No settings file for index '{name}' at {path}, skipping")
                continue
            try:
                settings = json.loads(path.read_text())
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Settings file {path} is not valid JSON: {e}") from e

            full_name = self._config.full_index_name(name)
            await self._backend.set_settings(full_name, settings)
            messages.append(f"Pushed settings for {full_name}")
            logger.info(f"Pushed settings from {path} to '{full_name}'")

        return messages

    def _select(self, index_names: Iterable[str] | None) -> list[str]:
        configured = [index.name for index in self._config.indices]
        wanted = list(index_names or ())
        if not wanted:
            return configured

        for name in wanted:
            if name not in configured:
                logger.warning(f"Index '{name}' is not configured, ignoring")
        return [name for name in configured if name in wanted]
