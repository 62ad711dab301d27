"""TDT Proxy — application lifespan (startup / shutdown hooks)."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI

from tdt_proxy.core.config import ProxySettings

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the shared upstream HTTP client for the lifetime of the app."""
    settings: ProxySettings = app.state.settings
    base = f"http://localhost:{settings.service_port}"

    app.state.http_client = httpx.AsyncClient(
        timeout=settings.upstream_timeout,
        follow_redirects=True,
    )
    log.info(
        "tdt_proxy starting up",
        port=settings.service_port,
        proxy_url=f"{base}/api/tdt-search",
        health_url=f"{base}/health",
        upstream=settings.upstream_base_url,
        upstream_timeout=settings.upstream_timeout,
    )

    try:
        yield
    finally:
        log.info("tdt_proxy shutting down")
        await app.state.http_client.aclose()
