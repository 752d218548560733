"""FastAPI app wiring for the mission control dashboard."""

from __future__ import annotations

import time
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import RuntimeConfig, load_runtime_config
from ..runtime.api import RouteDeps, SlidingWindowRateLimiter, create_router
from ..runtime.domain.models import now_ms
from ..runtime.storage import Container


def create_app(
    config: Optional[RuntimeConfig] = None,
    *,
    enable_cors: bool = True,
    clock: Callable[[], int] = now_ms,
    rate_clock: Callable[[], float] = time.monotonic,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config (Optional[RuntimeConfig]): Process configuration; read from the
            environment when omitted.
        enable_cors (bool): Whether to install permissive CORS middleware for
            browser clients.
        clock (Callable[[], int]): Epoch-millis source stamped on snapshots.
        rate_clock (Callable[[], float]): Monotonic seconds source for the rate
            limiter.

    Returns:
        FastAPI: Configured application with the resolved container stored on
        ``app.state``.
    """
    resolved = config if config is not None else load_runtime_config()
    app = FastAPI(
        title="Mission Control",
        description="Read-only task dashboard aggregation",
        version=__version__,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.state.config = resolved
    app.state.container = Container.from_config(resolved)
    deps = RouteDeps(
        container=app.state.container,
        rate_limiter=SlidingWindowRateLimiter(resolved.rate_limit, clock=rate_clock),
        api_key=resolved.api_key,
        clock=clock,
    )
    app.include_router(create_router(deps))

    @app.get("/healthz")
    async def healthz() -> dict[str, object]:
        """Expose liveness status for process-level health checks."""
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
