"""HTTP response constructors.

Every response the service writes is built here so the header set stays
fixed: JSON bodies always carry the three CORS headers, PNG bodies carry
only the origin header, and preflight answers carry no content type.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel
from starlette.responses import Response

from webview_automation.domain.errors import AutomationError

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _serialize(data: Any) -> bytes:
    try:
        if isinstance(data, BaseModel):
            return data.model_dump_json(exclude_none=True).encode("utf-8")
        return json.dumps(data, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as e:
        logger.error("Response serialization failed: %s", e)
        return b"{}"


def json_response(data: Any, status: int = 200) -> Response:
    return Response(
        content=_serialize(data),
        status_code=status,
        headers={"Content-Type": "application/json", **CORS_HEADERS},
    )


def png_response(data: bytes) -> Response:
    return Response(
        content=data,
        status_code=200,
        headers={
            "Content-Type": "image/png",
            "Access-Control-Allow-Origin": "*",
        },
    )


def cors_preflight_response() -> Response:
    return Response(status_code=204, headers=dict(CORS_HEADERS))


def not_found_response() -> Response:
    return json_response({"error": "Not found"}, status=404)


def error_response(error: AutomationError) -> Response:
    return json_response(error.to_body(), status=error.status_code)
