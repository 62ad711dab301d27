"""TDT Proxy — Tianditu search API client."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx
import structlog

logger = structlog.get_logger()

# Characters encodeURIComponent leaves alone besides alphanumerics
_COMPONENT_SAFE = "-_.!~*'()"


class UpstreamError(Exception):
    """The search API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"upstream returned {status_code}")
        self.status_code = status_code
        self.body = body


@dataclass(frozen=True)
class SearchPayload:
    """A successful upstream response, kept as the raw JSON bytes.

    ``data`` is the decoded document. Its shape belongs to the upstream and
    is only looked at for ``poi_count``.
    """

    content: bytes
    data: Any

    @property
    def poi_count(self) -> int:
        pois = self.data.get("pois") if isinstance(self.data, dict) else None
        return len(pois) if isinstance(pois, list) else 0


def encode_component(value: str) -> str:
    """Percent-encode ``value`` the way JavaScript's encodeURIComponent does."""
    return quote(value, safe=_COMPONENT_SAFE)


def build_search_url(
    base_url: str,
    *,
    post_str: str,
    query_type: str,
    tk: str,
) -> str:
    """Build the upstream search URL.

    Only ``post_str`` is encoded; ``type`` and ``tk`` go in as given, which
    is the format the API documents.
    """
    return f"{base_url}?postStr={encode_component(post_str)}&type={query_type}&tk={tk}"


async def forward_search(
    http_client: httpx.AsyncClient,
    base_url: str,
    *,
    post_str: str,
    query_type: str,
    tk: str,
    headers: Mapping[str, str],
) -> SearchPayload:
    """Forward one search query to the Tianditu API.

    Raises:
        UpstreamError: the API answered with a non-2xx status.
        ValueError: a 2xx body that is not valid JSON.
        httpx.HTTPError: transport failures and timeouts.
    """
    url = build_search_url(base_url, post_str=post_str, query_type=query_type, tk=tk)
    logger.info("tdt_proxy_request", url=url)

    response = await http_client.get(url, headers=dict(headers))

    if not response.is_success:
        logger.error(
            "tdt_proxy_upstream_error",
            status_code=response.status_code,
            body=response.text,
        )
        raise UpstreamError(response.status_code, response.text)

    return SearchPayload(content=response.content, data=json.loads(response.content))
