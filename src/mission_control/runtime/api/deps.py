"""Shared dependency context for runtime API route registration."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from ..domain.models import now_ms
from ..storage.container import Container
from .rate_limit import SlidingWindowRateLimiter


@dataclass(frozen=True)
class RouteDeps:
    """Route registration dependency bundle."""

    container: Container
    rate_limiter: SlidingWindowRateLimiter
    api_key: Optional[str] = None
    clock: Callable[[], int] = now_ms
