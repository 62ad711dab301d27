"""A forward waiting on the upstream must not hold up other requests."""

from __future__ import annotations

import asyncio

import httpx
import respx

from tdt_proxy.core.config import ProxySettings
from tdt_proxy.main import create_app

UPSTREAM_HOST = "upstream.test"
UPSTREAM_PATH = "/v2/search"

PARAMS = {"postStr": '{"keyWord":"x"}', "type": "query", "tk": "secret-token"}


async def test_health_answers_while_forward_is_pending(
    proxy_settings: ProxySettings,
) -> None:
    forward_started = asyncio.Event()
    release_upstream = asyncio.Event()

    async def slow_upstream(request: httpx.Request) -> httpx.Response:
        forward_started.set()
        await release_upstream.wait()
        return httpx.Response(200, content=b'{"pois":[]}')

    app = create_app(proxy_settings)

    async with respx.mock(assert_all_called=False) as upstream:
        upstream.get(host=UPSTREAM_HOST, path=UPSTREAM_PATH).mock(
            side_effect=slow_upstream
        )
        async with httpx.AsyncClient() as upstream_client:
            # ASGITransport skips the lifespan, so hand the app its client
            app.state.http_client = upstream_client
            async with httpx.AsyncClient(
                transport=httpx.ASGITransport(app=app), base_url="http://proxy.test"
            ) as caller:
                forward = asyncio.create_task(
                    caller.get("/api/tdt-search", params=PARAMS)
                )
                await asyncio.wait_for(forward_started.wait(), timeout=5)

                health = await asyncio.wait_for(caller.get("/health"), timeout=5)

                assert health.status_code == 200
                assert not forward.done()

                release_upstream.set()
                response = await asyncio.wait_for(forward, timeout=5)

    assert response.status_code == 200
    assert response.content == b'{"pois":[]}'
