"""Resolve process configuration from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_TASKS_DIR = "./tasks"
DEFAULT_RATE_LIMIT = 60


@dataclass(frozen=True)
class RuntimeConfig:
    """Fully resolved configuration for one dashboard process.

    Attributes:
        tasks_dir: Directory holding one JSON file per task plus the optional
            ``agents-status.json`` and ``feed-items.json`` sidecars.
        settings_path: Settings document, or ``None`` to always use defaults.
        api_key: Bearer token required by the HTTP surface when set.
        rate_limit: Requests allowed per client in each 60-second window.
    """

    tasks_dir: Path
    settings_path: Optional[Path] = None
    api_key: Optional[str] = None
    rate_limit: int = DEFAULT_RATE_LIMIT


def _default_settings_path(cwd: Path) -> Path:
    json_path = cwd / "settings.json"
    yaml_path = cwd / "settings.yaml"
    if not json_path.exists() and yaml_path.exists():
        return yaml_path
    return json_path


def _rate_limit(value: Optional[str]) -> int:
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return DEFAULT_RATE_LIMIT
    return parsed if parsed >= 1 else DEFAULT_RATE_LIMIT


def load_runtime_config(environ: Optional[Mapping[str, str]] = None, *, cwd: Optional[Path] = None) -> RuntimeConfig:
    """Build a ``RuntimeConfig`` from ``OPENCLAW_*`` environment variables.

    Args:
        environ (Optional[Mapping[str, str]]): Variables to read; defaults to
            ``os.environ``.
        cwd (Optional[Path]): Base directory for the default settings file.

    Returns:
        RuntimeConfig: Resolved configuration.
    """
    env = os.environ if environ is None else environ
    base = cwd if cwd is not None else Path.cwd()
    raw_settings = str(env.get("OPENCLAW_SETTINGS_PATH") or "").strip()
    api_key = str(env.get("OPENCLAW_API_KEY") or "").strip()
    return RuntimeConfig(
        tasks_dir=Path(str(env.get("OPENCLAW_TASKS_DIR") or DEFAULT_TASKS_DIR)).expanduser(),
        settings_path=Path(raw_settings).expanduser() if raw_settings else _default_settings_path(base),
        api_key=api_key or None,
        rate_limit=_rate_limit(env.get("OPENCLAW_RATE_LIMIT")),
    )
