"""TDT Proxy — Tianditu search forwarding routes."""

from __future__ import annotations

from collections.abc import Mapping

import structlog
from fastapi import APIRouter, Query, Request, status
from fastapi.responses import JSONResponse, Response

from tdt_proxy.core.config import ProxySettings
from tdt_proxy.core.parsing import read_body_params
from tdt_proxy.services import tdt_client

router = APIRouter(prefix="/api", tags=["Tianditu Search"])
logger = structlog.get_logger()

REQUIRED_PARAMS = ["postStr", "type", "tk"]
JSON_UTF8 = "application/json; charset=utf-8"


def _error(status_code: int, error: str, **fields: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, **fields})


async def _relay(request: Request, params: Mapping[str, str | None]) -> Response:
    """Validate, forward and map the upstream outcome to a response."""
    post_str, query_type, tk = (params.get(name) for name in REQUIRED_PARAMS)
    if not (post_str and query_type and tk):
        logger.warning(
            "tdt_proxy_missing_params",
            missing=[name for name in REQUIRED_PARAMS if not params.get(name)],
        )
        return _error(
            status.HTTP_400_BAD_REQUEST,
            "Missing required parameters",
            required=REQUIRED_PARAMS,
        )

    settings: ProxySettings = request.app.state.settings
    try:
        payload = await tdt_client.forward_search(
            request.app.state.http_client,
            settings.upstream_base_url,
            post_str=post_str,
            query_type=query_type,
            tk=tk,
            headers=settings.spoofed_headers,
        )
    except tdt_client.UpstreamError as exc:
        return _error(
            exc.status_code,
            "Tianditu API request failed",
            status=exc.status_code,
            message=exc.body,
        )
    except Exception as exc:
        logger.exception("tdt_proxy_exception", error=str(exc))
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Proxy request failed",
            message=str(exc) or type(exc).__name__,
        )

    logger.info("tdt_proxy_success", poi_count=payload.poi_count)
    return Response(content=payload.content, media_type=JSON_UTF8)


@router.get("/tdt-search")
async def search(
    request: Request,
    post_str: str | None = Query(None, alias="postStr"),
    query_type: str | None = Query(None, alias="type"),
    tk: str | None = Query(None),
) -> Response:
    """Forward a search query to Tianditu and relay its JSON verbatim."""
    return await _relay(
        request, {"postStr": post_str, "type": query_type, "tk": tk}
    )


@router.post("/tdt-search")
async def search_from_body(request: Request) -> Response:
    """Same as the GET route, reading parameters from a JSON or form body.

    Query-string values fill in whatever the body leaves out.
    """
    params: dict[str, str] = dict(request.query_params)
    body_params = await read_body_params(request)
    params.update({k: v for k, v in body_params.items() if k in REQUIRED_PARAMS})
    return await _relay(request, params)
