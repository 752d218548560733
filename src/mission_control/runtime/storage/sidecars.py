"""Readers for the optional files that enrich the dashboard.

Both files are best-effort: a missing or malformed file means the enhancement
is dropped, never that the aggregation fails.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..domain.models import FeedItem, now_ms
from ..domain.normalize import parse_epoch_ms

logger = logging.getLogger(__name__)

MAX_FEED_EVENTS = 10


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def load_agent_overlay(path: Path) -> Optional[dict[str, str]]:
    """Load the agent-id to status mapping, or ``None`` when unusable."""
    if not path.is_file():
        return None
    try:
        raw = _read_json(path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, RecursionError):
        logger.debug("Ignoring unreadable agent status file %s", path, exc_info=True)
        return None
    if not isinstance(raw, dict):
        logger.debug("Ignoring agent status file %s: not a JSON object", path)
        return None
    return {str(key): value for key, value in raw.items() if isinstance(value, str)}


def _feed_item(raw: Any, index: int, *, now: int) -> FeedItem:
    if not isinstance(raw, dict):
        raise ValueError(f"feed event {index} is not an object")
    is_memory = raw.get("type") == "memory"
    agent_id = raw.get("agentId")
    return FeedItem(
        id=str(raw.get("id") or f"feed-{index}"),
        type="decision" if is_memory else "comment",
        severity="info",
        title=str(raw.get("title") or ""),
        agent_id=str(agent_id) if agent_id else None,
        timestamp=parse_epoch_ms(raw.get("timestamp"), now=now),
    )


def load_feed_events(path: Path, *, now: Optional[int] = None) -> list[FeedItem]:
    """Map the first ``MAX_FEED_EVENTS`` supplementary events to feed items.

    Events of type ``memory`` become ``decision`` items and everything else
    becomes a ``comment``. If the file or any of the mapped events is
    malformed, the whole file is ignored.
    """
    if not path.is_file():
        return []
    instant = now if now is not None else now_ms()
    try:
        raw = _read_json(path)
        if not isinstance(raw, list):
            raise ValueError("feed file is not a JSON array")
        return [_feed_item(item, index, now=instant) for index, item in enumerate(raw[:MAX_FEED_EVENTS])]
    except (OSError, UnicodeDecodeError, ValueError, RecursionError):
        logger.debug("Ignoring malformed feed file %s", path, exc_info=True)
        return []
