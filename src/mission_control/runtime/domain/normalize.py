"""Normalize loosely-structured task records into ``TaskRecord`` instances.

Task files are written by many different agents and scripts, so the same
concept shows up under several key names and spellings. Each field below has
one named fallback rule; :func:`normalize_task` applies all of them and never
raises for any JSON object it is given.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from .models import Priority, TaskRecord, TaskStatus, TokenUsageEntry, now_ms


_STATUS_SYNONYMS: dict[str, TaskStatus] = {
    "complete": "done",
    "completed": "done",
    "done": "done",
    "approved": "done",
    "in-progress": "in-progress",
    "in_progress": "in-progress",
    "active": "in-progress",
    "working": "in-progress",
    "review": "review",
    "submitted": "review",
    "pending_review": "review",
    "assigned": "assigned",
    "claimed": "assigned",
    "waiting": "waiting",
    "blocked": "waiting",
    "paused": "waiting",
}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_PRIORITY_SYNONYMS: dict[str, Priority] = {
    "urgent": 0,
    "p0": 0,
    "critical": 0,
    "high": 1,
    "p1": 1,
}


def map_status(raw_status: Any) -> TaskStatus:
    """Map a raw status value onto one of the six canonical statuses.

    Matching is case-insensitive; anything unrecognized becomes ``inbox``.
    """
    if raw_status is None:
        return "inbox"
    return _STATUS_SYNONYMS.get(str(raw_status).strip().lower(), "inbox")


def map_priority(raw_priority: Any) -> Priority:
    """Map a raw priority label to its ordinal (0 urgent, 1 high, 2 normal)."""
    if raw_priority is None:
        return 2
    return _PRIORITY_SYNONYMS.get(str(raw_priority).strip().lower(), 2)


def _valid_epoch_ms(value: float) -> Optional[int]:
    if not math.isfinite(value):
        return None
    try:
        datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return int(value)


def coerce_epoch_ms(value: Any) -> Optional[int]:
    """Interpret ``value`` as an instant in epoch milliseconds.

    Numbers and numeric strings are taken as epoch millis. Other strings are
    parsed as ISO-8601; naive values are treated as UTC.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _valid_epoch_ms(float(value))
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return _valid_epoch_ms(float(text))
    except ValueError:
        pass
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return _valid_epoch_ms((parsed - _EPOCH) // timedelta(milliseconds=1))


def parse_epoch_ms(value: Any, *, now: Optional[int] = None) -> int:
    """Parse a date value, falling back to ``now`` when absent or invalid."""
    parsed = coerce_epoch_ms(value) if value else None
    if parsed is None:
        return now if now is not None else now_ms()
    return parsed


def _token_count(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return max(0, value)
    if isinstance(value, float):
        return max(0, int(value)) if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            number = float(value.strip() or 0)
        except ValueError:
            return 0
        return max(0, int(number)) if math.isfinite(number) else 0
    return 0


def _first_present(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _optional_count(data: Mapping[str, Any], *keys: str) -> Optional[int]:
    value = _first_present(data, *keys)
    return _token_count(value) if value is not None else None


def _optional_text(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def parse_usage(raw: Any) -> Optional[list[TokenUsageEntry]]:
    """Parse a raw ``usage`` array into token usage entries.

    Entries reporting zero input and zero output tokens are dropped. Returns
    ``None`` instead of an empty list when nothing usable remains.
    """
    if not isinstance(raw, list):
        return None
    entries: list[TokenUsageEntry] = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        input_tokens = _token_count(_first_present(item, "inputTokens", "input_tokens"))
        output_tokens = _token_count(_first_present(item, "outputTokens", "output_tokens"))
        if input_tokens == 0 and output_tokens == 0:
            continue
        entries.append(
            TokenUsageEntry(
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                cache_read_tokens=_optional_count(item, "cacheReadTokens", "cache_read_tokens"),
                cache_write_tokens=_optional_count(item, "cacheWriteTokens", "cache_write_tokens"),
                model=_optional_text(item.get("model")),
                provider=_optional_text(item.get("provider")),
                timestamp=coerce_epoch_ms(item.get("timestamp")),
            )
        )
    return entries or None


def extract_assignee(raw: Mapping[str, Any]) -> Optional[str]:
    """Find the task owner among the fields different writers use for it."""
    if raw.get("claimed_by"):
        return str(raw["claimed_by"])
    if raw.get("assignee"):
        return str(raw["assignee"])
    deliverables = raw.get("deliverables")
    if isinstance(deliverables, list) and deliverables:
        first = deliverables[0]
        if isinstance(first, Mapping) and first.get("assignee"):
            return str(first["assignee"])
    return None


def extract_tags(raw: Mapping[str, Any]) -> list[str]:
    tags = raw.get("tags")
    if isinstance(tags, list):
        return [str(tag) for tag in tags if tag is not None]
    if raw.get("type"):
        return [str(raw["type"])]
    return []


def normalize_task(raw: Mapping[str, Any], fallback_id: str, *, now: Optional[int] = None) -> TaskRecord:
    """Convert one raw task object into a canonical ``TaskRecord``.

    Args:
        raw (Mapping[str, Any]): Decoded JSON object read from a task file.
        fallback_id (str): Identifier used when the record has no ``id``,
            normally the source file name without its ``.json`` suffix.
        now (Optional[int]): Epoch millis substituted for missing or invalid
            dates. Defaults to the current instant.

    Returns:
        TaskRecord: Fully populated record; every field has a fallback.
    """
    instant = now if now is not None else now_ms()
    return TaskRecord(
        id=str(raw.get("id") or fallback_id),
        title=str(raw.get("title") or "Untitled"),
        description=str(raw.get("description") or ""),
        status=map_status(raw.get("status")),
        priority=map_priority(raw.get("priority")),
        assignee_id=extract_assignee(raw),
        tags=extract_tags(raw),
        created_at=parse_epoch_ms(raw.get("created_at") or raw.get("created"), now=instant),
        updated_at=parse_epoch_ms(
            raw.get("completed_at") or raw.get("completed") or raw.get("updated_at"),
            now=instant,
        ),
        usage=parse_usage(raw.get("usage")),
    )
