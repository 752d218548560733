"""Dashboard data route registration for the runtime API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..aggregation.service import build_snapshot
from .deps import RouteDeps

logger = logging.getLogger(__name__)

NO_STORE = {"Cache-Control": "no-store"}


def _client_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for") or ""
    return forwarded.split(",")[0].strip() or "unknown"


def register_data_routes(router: APIRouter, deps: RouteDeps) -> None:
    """Register the aggregated dashboard data route."""
    @router.get("/data")
    async def get_data(request: Request) -> JSONResponse:
        """Return a freshly aggregated dashboard snapshot.

        Args:
            request: Incoming request, used for auth and client identity.

        Returns:
            The snapshot payload, or an ``{"error": ...}`` body with status
            401, 429 or 500.
        """
        if deps.api_key and request.headers.get("authorization") != f"Bearer {deps.api_key}":
            return JSONResponse({"error": "Unauthorized"}, status_code=401)
        if deps.rate_limiter.is_limited(_client_key(request)):
            return JSONResponse({"error": "Too many requests"}, status_code=429)
        try:
            snapshot = build_snapshot(deps.container, now=deps.clock())
        except Exception as exc:
            logger.error("Error loading data: %s", exc, exc_info=exc)
            return JSONResponse({"error": "Failed to load data"}, status_code=500, headers=NO_STORE)
        return JSONResponse(snapshot.to_dict(), headers=NO_STORE)
