"""Assemble one dashboard snapshot from the files behind a container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ... import __version__
from ..domain.models import Agent, FeedItem, StatusCounts, TaskRecord, TokenStats, now_ms
from ..settings import DashboardSettings, client_settings, dashboard_config
from ..storage.container import Container
from ..storage.sidecars import load_agent_overlay, load_feed_events
from ..storage.task_loader import SkipDiagnostic, load_tasks
from .feed import generate_feed
from .roster import count_working, resolve_agents
from .stats import get_stats, get_token_stats


@dataclass
class DashboardSnapshot:
    """Everything the dashboard client renders, computed in one pass."""
    agents: list[Agent]
    tasks: list[TaskRecord]
    feed: list[FeedItem]
    stats: StatusCounts
    token_stats: Optional[TokenStats]
    settings: DashboardSettings
    timestamp: int
    skipped: list[SkipDiagnostic] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the payload served to the client.

        ``skipped`` is diagnostic only and is not part of the payload.
        """
        return {
            "agents": [agent.to_dict() for agent in self.agents],
            "tasks": [task.to_dict() for task in self.tasks],
            "feed": [item.to_dict() for item in self.feed],
            "stats": self.stats.to_dict(),
            "tokenStats": self.token_stats.to_dict() if self.token_stats else None,
            "config": dashboard_config(self.settings, __version__),
            "settings": client_settings(self.settings),
            "timestamp": self.timestamp,
        }


def build_snapshot(container: Container, *, now: Optional[int] = None) -> DashboardSnapshot:
    """Load tasks and sidecars and derive every dashboard view.

    Per-file and sidecar problems are absorbed along the way; anything that
    escapes this function is an aggregation failure for the caller to report.

    Args:
        container (Container): Source of the task directory and settings.
        now (Optional[int]): Instant of this aggregation in epoch millis.

    Returns:
        DashboardSnapshot: Freshly computed snapshot; nothing is cached.
    """
    instant = now if now is not None else now_ms()
    loaded = load_tasks(container.tasks_dir, now=instant)
    agents = resolve_agents(load_agent_overlay(container.agent_status_path))
    feed = generate_feed(
        loaded.tasks,
        load_feed_events(container.feed_items_path, now=instant),
        working_agents=count_working(agents),
        now=instant,
    )
    return DashboardSnapshot(
        agents=agents,
        tasks=loaded.tasks,
        feed=feed,
        stats=get_stats(loaded.tasks),
        token_stats=get_token_stats(loaded.tasks),
        settings=container.settings.get(),
        timestamp=instant,
        skipped=loaded.skipped,
    )
