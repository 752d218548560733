from __future__ import annotations

from mission_control.runtime.aggregation.feed import MAX_FEED_ITEMS, generate_feed
from mission_control.runtime.domain.models import FeedItem, TaskRecord

NOW = 1_800_000_000_000
JAN_1 = 1_704_067_200_000
HOUR = 3_600_000


def test_feed_items_per_status() -> None:
    tasks = [
        TaskRecord(id="d", title="Ship it", status="done", assignee_id="spark", created_at=JAN_1, updated_at=JAN_1 + 5 * HOUR),
        TaskRecord(id="p", title="Build", status="in-progress", created_at=JAN_1 + 4 * HOUR),
        TaskRecord(id="r", title="Check", status="review", assignee_id="critic", created_at=JAN_1 + HOUR),
        TaskRecord(id="i", title="Idea", status="inbox", created_at=JAN_1 + 3 * HOUR),
        TaskRecord(id="w", title="Stuck", status="waiting", created_at=JAN_1 + 2 * HOUR),
    ]

    feed = generate_feed(tasks, working_agents=2, now=NOW)

    assert [item.id for item in feed] == ["status-now", "d-complete", "p-progress", "r-review"]
    by_id = {item.id: item for item in feed}
    assert by_id["status-now"].title == "Squad active: 2 projects online"
    assert by_id["status-now"].type == "status"
    assert by_id["status-now"].severity == "success"
    assert by_id["d-complete"].title == 'Spark completed "Ship it"'
    assert by_id["d-complete"].severity == "success"
    assert by_id["d-complete"].timestamp == JAN_1 + 5 * HOUR
    assert by_id["p-progress"].title == 'Someone started "Build"'
    assert by_id["p-progress"].timestamp == JAN_1 + 4 * HOUR
    assert by_id["r-review"].title == '"Check" submitted for review'
    assert by_id["r-review"].agent_id == "critic"
    assert by_id["r-review"].timestamp == JAN_1 + HOUR


def test_done_without_updated_at_contributes_nothing() -> None:
    feed = generate_feed([TaskRecord(id="d", status="done", created_at=JAN_1)], now=NOW)

    assert [item.id for item in feed] == ["status-now"]


def test_singular_status_wording() -> None:
    feed = generate_feed([], working_agents=1, now=NOW)

    assert feed[0].title == "Squad active: 1 project online"


def test_only_twenty_most_recent_tasks_considered() -> None:
    tasks = [
        TaskRecord(id=f"t{idx}", status="in-progress", created_at=JAN_1 - idx * HOUR)
        for idx in range(25)
    ]

    feed = generate_feed(tasks, now=NOW)

    assert len(feed) == MAX_FEED_ITEMS
    assert "t19-progress" not in {item.id for item in feed}
    assert [item.id for item in feed][:3] == ["status-now", "t0-progress", "t1-progress"]


def test_window_ignores_tasks_beyond_twenty() -> None:
    tasks = [TaskRecord(id=f"i{idx}", status="inbox", created_at=JAN_1) for idx in range(20)]
    tasks.append(TaskRecord(id="late", status="in-progress", created_at=JAN_1))

    feed = generate_feed(tasks, now=NOW)

    assert [item.id for item in feed] == ["status-now"]


def test_events_merge_and_sort_with_status_item() -> None:
    events = [
        FeedItem(id="future", type="decision", severity="info", title="Later", timestamp=NOW + HOUR),
        FeedItem(id="old", type="comment", severity="info", title="Earlier", timestamp=JAN_1),
    ]

    feed = generate_feed([], events, now=NOW)

    assert [item.id for item in feed] == ["future", "status-now", "old"]


def test_feed_bounded_and_non_increasing() -> None:
    tasks = [
        TaskRecord(id=f"t{idx}", status="review", created_at=JAN_1 + idx * HOUR, updated_at=JAN_1 + (idx % 7) * HOUR)
        for idx in range(20)
    ]
    events = [
        FeedItem(id=f"e{idx}", type="comment", severity="info", title="x", timestamp=JAN_1 + idx * 3 * HOUR)
        for idx in range(10)
    ]

    feed = generate_feed(tasks, events, now=NOW)
    stamps = [item.timestamp for item in feed]

    assert len(feed) == MAX_FEED_ITEMS
    assert stamps == sorted(stamps, reverse=True)
