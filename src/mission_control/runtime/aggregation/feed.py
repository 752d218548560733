"""Activity feed synthesized from recent task transitions."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..domain.models import FeedItem, TaskRecord, now_ms

RECENT_TASK_WINDOW = 20
MAX_FEED_ITEMS = 15
STATUS_ITEM_ID = "status-now"


def _actor(task: TaskRecord) -> str:
    if not task.assignee_id:
        return "Someone"
    return task.assignee_id[:1].upper() + task.assignee_id[1:]


def _task_item(task: TaskRecord) -> Optional[FeedItem]:
    if task.status == "done" and task.updated_at is not None:
        return FeedItem(
            id=f"{task.id}-complete",
            type="task",
            severity="success",
            title=f'{_actor(task)} completed "{task.title}"',
            agent_id=task.assignee_id,
            timestamp=task.updated_at,
        )
    if task.status == "in-progress":
        return FeedItem(
            id=f"{task.id}-progress",
            type="task",
            severity="info",
            title=f'{_actor(task)} started "{task.title}"',
            agent_id=task.assignee_id,
            timestamp=task.created_at,
        )
    if task.status == "review":
        return FeedItem(
            id=f"{task.id}-review",
            type="task",
            severity="info",
            title=f'"{task.title}" submitted for review',
            agent_id=task.assignee_id,
            timestamp=task.updated_at if task.updated_at is not None else task.created_at,
        )
    return None


def status_item(working_agents: int, *, now: int) -> FeedItem:
    noun = "project" if working_agents == 1 else "projects"
    return FeedItem(
        id=STATUS_ITEM_ID,
        type="status",
        severity="success",
        title=f"Squad active: {working_agents} {noun} online",
        timestamp=now,
    )


def generate_feed(
    tasks: Sequence[TaskRecord],
    events: Iterable[FeedItem] = (),
    *,
    working_agents: int = 0,
    now: Optional[int] = None,
) -> list[FeedItem]:
    """Build the activity feed, newest first.

    Args:
        tasks (Sequence[TaskRecord]): Tasks already sorted newest first; only
            the first ``RECENT_TASK_WINDOW`` are considered.
        events (Iterable[FeedItem]): Supplementary items read from the feed
            file.
        working_agents (int): Number of agents currently working, reported by
            the leading status item.
        now (Optional[int]): Timestamp of the status item, epoch millis.

    Returns:
        list[FeedItem]: At most ``MAX_FEED_ITEMS`` items sorted by
        ``timestamp`` descending.
    """
    feed: list[FeedItem] = [status_item(working_agents, now=now if now is not None else now_ms())]
    for task in tasks[:RECENT_TASK_WINDOW]:
        item = _task_item(task)
        if item is not None:
            feed.append(item)
    feed.extend(events)
    feed.sort(key=lambda item: item.timestamp, reverse=True)
    return feed[:MAX_FEED_ITEMS]
