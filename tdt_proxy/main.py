"""TDT Proxy — FastAPI application factory.

Forwards browser search queries to the Tianditu API with browser-like
headers and relays the JSON back with open CORS headers.
"""

from __future__ import annotations

from fastapi import FastAPI

from tdt_proxy import __version__
from tdt_proxy.core.config import ProxySettings, settings
from tdt_proxy.core.events import lifespan
from tdt_proxy.core.logging import setup_logging
from tdt_proxy.core.middleware import CORSHeadersMiddleware, RequestContextMiddleware
from tdt_proxy.routers import health
from tdt_proxy.routers.search import router as search_router


def create_app(app_settings: ProxySettings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    setup_logging(
        log_level=app_settings.log_level,
        json_logs=app_settings.json_logs,
        service_name=app_settings.service_name,
    )

    application = FastAPI(
        title="Tianditu Search Proxy",
        version=__version__,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        openapi_url="/openapi.json" if app_settings.debug else None,
        lifespan=lifespan,
    )
    application.state.settings = app_settings

    # Added last runs first: request IDs are bound before the CORS short-circuit
    application.add_middleware(CORSHeadersMiddleware)
    application.add_middleware(RequestContextMiddleware)

    application.include_router(health.router)
    application.include_router(search_router)

    return application


app = create_app()
