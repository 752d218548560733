"""Dependency container for the dashboard's file-backed inputs."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ...config import RuntimeConfig
from ..settings import SettingsCache
from .task_loader import AGENT_STATUS_FILE, FEED_ITEMS_FILE


class Container:
    """Wire the task directory, its sidecar files and the settings cache."""
    def __init__(self, tasks_dir: Path, settings: Optional[SettingsCache] = None) -> None:
        """Initialize the Container.

        Args:
            tasks_dir (Path): Directory holding the task JSON files.
            settings (Optional[SettingsCache]): Settings source; defaults to a
                cache that always yields default settings.
        """
        self.tasks_dir = tasks_dir
        self.settings = settings if settings is not None else SettingsCache.for_path(None)

    @classmethod
    def from_config(cls, config: RuntimeConfig) -> "Container":
        return cls(config.tasks_dir, SettingsCache.for_path(config.settings_path))

    @property
    def agent_status_path(self) -> Path:
        return self.tasks_dir / AGENT_STATUS_FILE

    @property
    def feed_items_path(self) -> Path:
        return self.tasks_dir / FEED_ITEMS_FILE
