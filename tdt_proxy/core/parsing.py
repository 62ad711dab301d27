"""Request body parsing for JSON and form bodies."""

from __future__ import annotations

import json
from typing import Any

import structlog
from starlette.formparsers import MultiPartException
from starlette.requests import Request

logger = structlog.get_logger()

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";")[0].strip().lower()


def _is_blank(value: Any) -> bool:
    """True for the JSON values a browser client treats as "not given"."""
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False


def _as_param(value: Any) -> str:
    """Flatten a JSON value into a query-style string parameter."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


async def read_body_params(request: Request) -> dict[str, str]:
    """Return the top-level parameters of a JSON object or form body.

    Bodies of any other type, malformed bodies and empty bodies yield ``{}``.
    Non-string JSON values are re-serialised compactly, so a JSON body may
    carry ``postStr`` either as a string or as an object. ``null``, ``false``
    and ``0`` are dropped so they fail validation like a missing value.
    Uploaded files in a multipart form are ignored.
    """
    media_type = _media_type(request)
    if not await request.body():
        return {}

    if media_type == "application/json" or media_type.endswith("+json"):
        try:
            data = await request.json()
        except ValueError as exc:
            logger.warning("request_body_invalid_json", error=str(exc))
            return {}
        if not isinstance(data, dict):
            logger.warning("request_body_not_object", body_type=type(data).__name__)
            return {}
        return {
            str(key): _as_param(value)
            for key, value in data.items()
            if not _is_blank(value)
        }

    if media_type in _FORM_TYPES:
        try:
            form = await request.form()
        except MultiPartException as exc:
            logger.warning("request_body_invalid_form", error=exc.message)
            return {}
        return {key: value for key, value in form.items() if isinstance(value, str)}

    return {}
