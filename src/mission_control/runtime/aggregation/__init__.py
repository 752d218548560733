"""Derived dashboard views: stats, feed, roster and the combined snapshot."""

from .feed import generate_feed
from .roster import DEFAULT_AGENTS, resolve_agents, sanitize_color
from .service import DashboardSnapshot, build_snapshot
from .stats import get_stats, get_token_stats

__all__ = [
    "DEFAULT_AGENTS",
    "DashboardSnapshot",
    "build_snapshot",
    "generate_feed",
    "get_stats",
    "get_token_stats",
    "resolve_agents",
    "sanitize_color",
]
