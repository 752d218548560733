"""Default agent roster and the live status overlay."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Mapping, Optional

from ..domain.models import Agent

NEUTRAL_GRAY = "#697177"
_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def sanitize_color(color: str) -> str:
    """Return ``color`` if it is a ``#rrggbb`` hex string, else neutral gray."""
    return color if isinstance(color, str) and _HEX_COLOR.match(color) else NEUTRAL_GRAY


DEFAULT_AGENTS: tuple[Agent, ...] = (
    Agent(id="neo", name="Neo", letter="N", color=sanitize_color("#46a758"), role="Squad Lead", badge="lead"),
    Agent(id="spark", name="Spark", letter="S", color=sanitize_color("#ffb224"), role="Code & Writing", badge="spc"),
    Agent(id="pixel", name="Pixel", letter="P", color=sanitize_color("#e879a4"), role="Design & UI", badge="spc"),
    Agent(id="scout", name="Scout", letter="R", color=sanitize_color("#3e63dd"), role="Research", badge="spc"),
    Agent(id="critic", name="Critic", letter="C", color=sanitize_color("#8e4ec6"), role="Review & QA"),
    Agent(id="sentinel", name="Sentinel", letter="T", color=sanitize_color("#00a2c7"), role="Security"),
)


def resolve_agents(overlay: Optional[Mapping[str, str]]) -> list[Agent]:
    """Apply the status overlay to the default roster.

    An agent is ``working`` only when the overlay maps its id to the literal
    string ``"working"``; every other agent is ``idle``. Without an overlay
    the defaults are returned unchanged.
    """
    if overlay is None:
        return list(DEFAULT_AGENTS)
    return [
        replace(agent, status="working" if overlay.get(agent.id) == "working" else "idle")
        for agent in DEFAULT_AGENTS
    ]


def count_working(agents: list[Agent]) -> int:
    return sum(1 for agent in agents if agent.status == "working")
