"""TDT Proxy — health-check endpoint."""

from __future__ import annotations

from tdt_proxy.core.health import create_health_router

# Stateless proxy: readiness does not depend on the upstream being reachable.
router = create_health_router("Proxy server is running")
