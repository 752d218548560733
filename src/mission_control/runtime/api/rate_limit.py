"""Per-client sliding-window request limiter."""

from __future__ import annotations

import time
from typing import Callable

WINDOW_SECONDS = 60.0


class SlidingWindowRateLimiter:
    """Allow at most ``max_requests`` per client within a rolling window.

    Every call is recorded, including rejected ones, so a client that keeps
    hammering stays limited until it backs off for a full window. Clients with
    no request inside the window are forgotten, at most once per window.
    """
    def __init__(
        self,
        max_requests: int,
        *,
        window: float = WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_requests = max_requests
        self._window = window
        self._clock = clock
        self._hits: dict[str, list[float]] = {}
        self._last_sweep = clock()

    def __len__(self) -> int:
        """Number of clients currently tracked."""
        return len(self._hits)

    def _sweep(self, now: float) -> None:
        cutoff = now - self._window
        stale = [client for client, stamps in self._hits.items() if not stamps or stamps[-1] <= cutoff]
        for client in stale:
            del self._hits[client]
        self._last_sweep = now

    def is_limited(self, client: str) -> bool:
        """Record a request from ``client`` and report whether it is over the limit."""
        now = self._clock()
        if now - self._last_sweep >= self._window:
            self._sweep(now)
        recent = [stamp for stamp in self._hits.get(client, []) if stamp > now - self._window]
        recent.append(now)
        self._hits[client] = recent
        return len(recent) > self._max_requests
