"""File-backed inputs for dashboard aggregation."""

from .container import Container
from .sidecars import load_agent_overlay, load_feed_events
from .task_loader import LoadResult, SkipDiagnostic, load_tasks

__all__ = [
    "Container",
    "LoadResult",
    "SkipDiagnostic",
    "load_agent_overlay",
    "load_feed_events",
    "load_tasks",
]
