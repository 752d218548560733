"""Runtime API router assembly."""

from __future__ import annotations

from fastapi import APIRouter

from .deps import RouteDeps
from .routes_data import register_data_routes


def create_router(deps: RouteDeps) -> APIRouter:
    """Create the ``/api`` router with every dashboard route registered."""
    router = APIRouter(prefix="/api", tags=["dashboard"])
    register_data_routes(router, deps)
    return router
