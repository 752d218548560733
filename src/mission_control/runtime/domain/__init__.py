"""Domain models for dashboard aggregation state."""

from .models import Agent, FeedItem, StatusCounts, TaskRecord, TokenCounts, TokenStats, TokenUsageEntry
from .normalize import normalize_task

__all__ = [
    "TaskRecord",
    "TokenUsageEntry",
    "FeedItem",
    "Agent",
    "StatusCounts",
    "TokenCounts",
    "TokenStats",
    "normalize_task",
]
