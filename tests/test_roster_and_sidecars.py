from __future__ import annotations

import json
from pathlib import Path

from mission_control.runtime.aggregation.roster import DEFAULT_AGENTS, NEUTRAL_GRAY, resolve_agents, sanitize_color
from mission_control.runtime.storage.sidecars import load_agent_overlay, load_feed_events

NOW = 1_700_000_000_000
JAN_1 = 1_704_067_200_000


def test_default_roster_shape() -> None:
    assert [agent.id for agent in DEFAULT_AGENTS] == ["neo", "spark", "pixel", "scout", "critic", "sentinel"]
    assert all(agent.status == "idle" for agent in DEFAULT_AGENTS)
    assert DEFAULT_AGENTS[0].badge == "lead"
    assert "badge" not in DEFAULT_AGENTS[4].to_dict()


def test_sanitize_color() -> None:
    assert sanitize_color("#46a758") == "#46a758"
    assert sanitize_color("#ABCDEF") == "#ABCDEF"
    assert sanitize_color("red") == NEUTRAL_GRAY
    assert sanitize_color("#12345") == NEUTRAL_GRAY
    assert sanitize_color("#1234567") == NEUTRAL_GRAY


def test_overlay_marks_only_listed_working_agent(tmp_path: Path) -> None:
    path = tmp_path / "agents-status.json"
    path.write_text(json.dumps({"spark": "working", "pixel": "busy", "ghost": "working"}), encoding="utf-8")

    agents = resolve_agents(load_agent_overlay(path))

    assert len(agents) == 6
    assert [agent.id for agent in agents if agent.status == "working"] == ["spark"]
    assert all(agent.status == "idle" for agent in agents if agent.id != "spark")


def test_missing_or_malformed_overlay_keeps_defaults(tmp_path: Path) -> None:
    assert load_agent_overlay(tmp_path / "absent.json") is None

    broken = tmp_path / "agents-status.json"
    broken.write_text("{oops", encoding="utf-8")
    assert load_agent_overlay(broken) is None

    broken.write_text("[\"spark\"]", encoding="utf-8")
    assert load_agent_overlay(broken) is None

    assert resolve_agents(None) == list(DEFAULT_AGENTS)


def test_feed_events_map_types_and_limit(tmp_path: Path) -> None:
    path = tmp_path / "feed-items.json"
    events = [
        {"id": "m1", "type": "memory", "title": "Chose Postgres", "agentId": "neo", "timestamp": "2024-01-01T00:00:00Z"},
        {"id": "c1", "type": "file_claim", "title": "Claimed api.py", "timestamp": "2024-01-01T00:00:00Z"},
    ] + [{"id": f"x{idx}", "type": "note", "title": "n", "timestamp": JAN_1} for idx in range(12)]
    path.write_text(json.dumps(events), encoding="utf-8")

    items = load_feed_events(path, now=NOW)

    assert len(items) == 10
    assert items[0].type == "decision"
    assert items[0].severity == "info"
    assert items[0].agent_id == "neo"
    assert items[0].timestamp == JAN_1
    assert items[1].type == "comment"
    assert items[1].agent_id is None
    assert items[-1].id == "x7"


def test_malformed_feed_file_ignored_entirely(tmp_path: Path) -> None:
    path = tmp_path / "feed-items.json"
    assert load_feed_events(path) == []

    path.write_text("[{\"id\": \"a\"", encoding="utf-8")
    assert load_feed_events(path) == []

    path.write_text(json.dumps({"id": "a"}), encoding="utf-8")
    assert load_feed_events(path) == []

    path.write_text(json.dumps([{"id": "a", "title": "ok", "timestamp": JAN_1}, "bad"]), encoding="utf-8")
    assert load_feed_events(path) == []


def test_feed_event_bad_timestamp_uses_now(tmp_path: Path) -> None:
    path = tmp_path / "feed-items.json"
    path.write_text(json.dumps([{"id": "a", "type": "note", "title": "t", "timestamp": "whenever"}]), encoding="utf-8")

    items = load_feed_events(path, now=NOW)

    assert [item.timestamp for item in items] == [NOW]


def test_deeply_nested_overlay_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "agents-status.json"
    path.write_text("[" * 200_000 + "]" * 200_000, encoding="utf-8")

    assert load_agent_overlay(path) is None


def test_deeply_nested_feed_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "feed-items.json"
    path.write_text("[" * 200_000 + "]" * 200_000, encoding="utf-8")

    assert load_feed_events(path, now=NOW) == []
