"""Index settings backup and restore."""

from indexsync.infrastructure.settings.manager import SettingsManager

__all__ = ["SettingsManager"]
