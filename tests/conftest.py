"""Shared fixtures: a proxy app pointed at a stubbed upstream."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import respx
from fastapi.testclient import TestClient

from tdt_proxy.core.config import ProxySettings
from tdt_proxy.main import create_app

UPSTREAM_HOST = "upstream.test"
UPSTREAM_PATH = "/v2/search"
UPSTREAM_URL = f"https://{UPSTREAM_HOST}{UPSTREAM_PATH}"


@pytest.fixture
def proxy_settings() -> ProxySettings:
    return ProxySettings(
        _env_file=None,
        upstream_base_url=UPSTREAM_URL,
        upstream_timeout=5.0,
    )


@pytest.fixture
def upstream() -> Iterator[respx.MockRouter]:
    """Stub upstream; any request it has no route for fails the test."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def search_route(upstream: respx.MockRouter) -> respx.Route:
    return upstream.get(host=UPSTREAM_HOST, path=UPSTREAM_PATH)


@pytest.fixture
def client(
    proxy_settings: ProxySettings, upstream: respx.MockRouter
) -> Iterator[TestClient]:
    with TestClient(create_app(proxy_settings)) as test_client:
        yield test_client
