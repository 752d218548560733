"""Status counts and token-usage rollups over a task collection."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from ..domain.models import StatusCounts, TaskRecord, TokenCounts, TokenStats

UNKNOWN_KEY = "unknown"

_STATUS_FIELDS = {
    "inbox": "inbox",
    "assigned": "assigned",
    "in-progress": "in_progress",
    "review": "review",
    "waiting": "waiting",
    "done": "done",
}


def get_stats(tasks: Iterable[TaskRecord]) -> StatusCounts:
    """Count tasks per canonical status in a single pass."""
    counts = StatusCounts()
    for task in tasks:
        counts.total += 1
        attr = _STATUS_FIELDS[task.status]
        setattr(counts, attr, getattr(counts, attr) + 1)
    return counts


def utc_day(epoch_ms: int) -> str:
    """Format an epoch-millis instant as its UTC calendar day, ``YYYY-MM-DD``."""
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).date().isoformat()


def get_token_stats(tasks: Sequence[TaskRecord]) -> Optional[TokenStats]:
    """Roll up token usage by agent, model and day.

    Returns ``None`` rather than a zero-valued structure when no task carries
    usage. Entries without their own timestamp are dated by the owning task's
    ``created_at``.
    """
    with_usage = [task for task in tasks if task.usage]
    if not with_usage:
        return None

    stats = TokenStats()
    by_date: dict[str, TokenCounts] = {}
    for task in with_usage:
        agent_bucket = stats.by_agent.setdefault(task.assignee_id or UNKNOWN_KEY, TokenCounts())
        for entry in task.usage or []:
            stats.total_input_tokens += entry.input_tokens
            stats.total_output_tokens += entry.output_tokens
            agent_bucket.add(entry)
            stats.by_model.setdefault(entry.model or UNKNOWN_KEY, TokenCounts()).add(entry)
            day = utc_day(entry.timestamp if entry.timestamp is not None else task.created_at)
            by_date.setdefault(day, TokenCounts()).add(entry)

    # Fixed-width ISO dates sort chronologically as plain strings.
    stats.by_date = sorted(by_date.items(), key=lambda item: item[0])
    return stats
