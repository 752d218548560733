"""HTTP routes exposing dashboard aggregation."""

from .deps import RouteDeps
from .rate_limit import SlidingWindowRateLimiter
from .router import create_router

__all__ = ["RouteDeps", "SlidingWindowRateLimiter", "create_router"]
