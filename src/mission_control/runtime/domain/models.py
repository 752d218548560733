"""Domain model dataclasses for the dashboard aggregation pipeline."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Literal, Optional


TaskStatus = Literal["inbox", "assigned", "in-progress", "review", "waiting", "done"]
Priority = Literal[0, 1, 2]
FeedType = Literal["task", "decision", "comment", "status"]
FeedSeverity = Literal["info", "success"]
AgentStatus = Literal["idle", "working"]
AgentBadge = Literal["lead", "spc"]


def now_ms() -> int:
    """Get the current instant as integer epoch milliseconds."""
    return int(time.time() * 1000)


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class TokenUsageEntry:
    """Token counts reported for one model call attached to a task."""
    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_tokens: Optional[int] = None
    cache_write_tokens: Optional[int] = None
    model: Optional[str] = None
    provider: Optional[str] = None
    timestamp: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry using wire field names, omitting absent fields."""
        return _drop_none(
            {
                "inputTokens": self.input_tokens,
                "outputTokens": self.output_tokens,
                "cacheReadTokens": self.cache_read_tokens,
                "cacheWriteTokens": self.cache_write_tokens,
                "model": self.model,
                "provider": self.provider,
                "timestamp": self.timestamp,
            }
        )


@dataclass
class TaskRecord:
    """Canonical task produced by the record normalizer."""
    id: str
    title: str = "Untitled"
    description: str = ""
    status: TaskStatus = "inbox"
    priority: Priority = 2
    assignee_id: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    created_at: int = field(default_factory=now_ms)
    updated_at: Optional[int] = None
    usage: Optional[list[TokenUsageEntry]] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize a task to the client payload shape.

        ``assigneeId``, ``updatedAt`` and ``usage`` are left out entirely when
        absent rather than emitted as ``null``.
        """
        return _drop_none(
            {
                "id": self.id,
                "title": self.title,
                "description": self.description,
                "status": self.status,
                "priority": self.priority,
                "assigneeId": self.assignee_id,
                "tags": list(self.tags),
                "createdAt": self.created_at,
                "updatedAt": self.updated_at,
                "usage": [entry.to_dict() for entry in self.usage] if self.usage else None,
            }
        )


@dataclass
class FeedItem:
    """One entry of the synthesized activity feed."""
    id: str
    type: FeedType
    severity: FeedSeverity
    title: str
    timestamp: int
    agent_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize a feed item."""
        return _drop_none(
            {
                "id": self.id,
                "type": self.type,
                "severity": self.severity,
                "title": self.title,
                "agentId": self.agent_id,
                "timestamp": self.timestamp,
            }
        )


@dataclass(frozen=True)
class Agent:
    """Roster entry shown on the dashboard."""
    id: str
    name: str
    letter: str
    color: str
    role: str
    status: AgentStatus = "idle"
    badge: Optional[AgentBadge] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize an agent, omitting ``badge`` when unset."""
        return _drop_none(
            {
                "id": self.id,
                "name": self.name,
                "letter": self.letter,
                "color": self.color,
                "role": self.role,
                "status": self.status,
                "badge": self.badge,
            }
        )


@dataclass
class StatusCounts:
    """Number of tasks in each canonical status."""
    total: int = 0
    inbox: int = 0
    assigned: int = 0
    in_progress: int = 0
    review: int = 0
    waiting: int = 0
    done: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "done": self.done,
            "inProgress": self.in_progress,
            "review": self.review,
            "assigned": self.assigned,
            "inbox": self.inbox,
            "waiting": self.waiting,
        }


@dataclass
class TokenCounts:
    """Input/output token pair accumulated for one bucket."""
    input: int = 0
    output: int = 0

    def add(self, entry: TokenUsageEntry) -> None:
        self.input += entry.input_tokens
        self.output += entry.output_tokens

    def to_dict(self) -> dict[str, int]:
        return {"input": self.input, "output": self.output}


@dataclass
class TokenStats:
    """Token usage rollups across all tasks that report usage.

    Attributes:
        total_input_tokens: Sum of input tokens across every usage entry.
        total_output_tokens: Sum of output tokens across every usage entry.
        by_agent: Buckets keyed by assignee id, ``"unknown"`` when unassigned.
        by_model: Buckets keyed by model name, ``"unknown"`` when unreported,
            in first-seen order.
        by_date: ``(YYYY-MM-DD, counts)`` pairs sorted ascending by date.
    """
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    by_agent: dict[str, TokenCounts] = field(default_factory=dict)
    by_model: dict[str, TokenCounts] = field(default_factory=dict)
    by_date: list[tuple[str, TokenCounts]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize token stats to the client payload shape."""
        return {
            "totalInputTokens": self.total_input_tokens,
            "totalOutputTokens": self.total_output_tokens,
            "tokensByAgent": {agent_id: counts.to_dict() for agent_id, counts in self.by_agent.items()},
            "tokensByModel": [
                {"model": model, "input": counts.input, "output": counts.output}
                for model, counts in self.by_model.items()
            ],
            "dailyTokens": [
                {"date": date, "input": counts.input, "output": counts.output}
                for date, counts in self.by_date
            ],
        }
