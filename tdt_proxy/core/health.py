"""Reusable health-check router.

Provides ``/health``, a static readiness probe with no dependency on the
upstream API.
"""

from __future__ import annotations

from fastapi import APIRouter


def create_health_router(message: str) -> APIRouter:
    """Build a health router.

    Args:
        message: Human-readable readiness text returned with ``status: ok``.

    Returns:
        A FastAPI ``APIRouter`` with ``GET /health``.
    """
    router = APIRouter(tags=["health"])

    @router.get("/health", summary="Readiness probe")
    async def health() -> dict[str, str]:
        return {"status": "ok", "message": message}

    return router
