"""Settings file loading and the short-lived settings cache."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

from .models import DashboardSettings

logger = logging.getLogger(__name__)

SETTINGS_TTL_SECONDS = 5.0


def _parse_settings_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix in {".yaml", ".yml"}:
        return yaml.safe_load(text)
    return json.loads(text)


def load_settings_file(path: Optional[Path]) -> DashboardSettings:
    """Read dashboard settings from ``path``.

    JSON and YAML documents are both accepted, chosen by file suffix. A
    missing or unparseable file yields the defaults.
    """
    if path is None or not path.is_file():
        return DashboardSettings()
    try:
        raw = _parse_settings_document(path)
    except (OSError, UnicodeDecodeError, ValueError, RecursionError, yaml.YAMLError):
        logger.debug("Ignoring unreadable settings file %s", path, exc_info=True)
        return DashboardSettings()
    return DashboardSettings.model_validate(raw if isinstance(raw, dict) else {})


class SettingsCache:
    """Hold the last loaded settings and reload them once they go stale.

    Concurrent callers may both reload after expiry; loading has no side
    effects, so the redundant read is harmless.
    """
    def __init__(
        self,
        loader: Callable[[], DashboardSettings],
        *,
        ttl: float = SETTINGS_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the SettingsCache.

        Args:
            loader (Callable[[], DashboardSettings]): Produces fresh settings.
            ttl (float): Seconds a loaded value stays fresh.
            clock (Callable[[], float]): Monotonic time source in seconds.
        """
        self._loader = loader
        self._ttl = ttl
        self._clock = clock
        self._value: Optional[DashboardSettings] = None
        self._fetched_at = 0.0

    @classmethod
    def for_path(cls, path: Optional[Path], **kwargs: Any) -> "SettingsCache":
        return cls(lambda: load_settings_file(path), **kwargs)

    def get(self) -> DashboardSettings:
        """Return cached settings, reloading when older than the TTL."""
        now = self._clock()
        if self._value is not None and now - self._fetched_at < self._ttl:
            return self._value
        self._value = self._loader()
        self._fetched_at = now
        return self._value
