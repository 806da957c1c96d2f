"""FastAPI application serving the automation HTTP API.

    GET     /automation/health      -> {"status": "ok", "port": 9876, "version": "1.0.0"}
    POST    /automation/execute     <- {"command": "click", "args": {"selector": "#go"}}
    GET     /automation/screenshot  -> image/png
    OPTIONS <any path>              -> 204, CORS headers only

Anything else answers 404 ``{"error": "Not found"}``. Requests are handled
one at a time.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import ClientDisconnect
from starlette.responses import Response

from webview_automation import __version__
from webview_automation.config.settings import ServerConfig
from webview_automation.domain.errors import AutomationError, IoReadError
from webview_automation.domain.models import HealthResponse
from webview_automation.host.base import AutomationHost
from webview_automation.server.buffer import CommandOutcomes, ScreenshotBuffer
from webview_automation.server.dispatcher import CommandDispatcher
from webview_automation.server.responses import (
    cors_preflight_response,
    error_response,
    json_response,
    not_found_response,
    png_response,
)
from webview_automation.server.screenshot import ScreenshotPipeline

logger = logging.getLogger(__name__)

_OTHER_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


def create_app(
    host: AutomationHost,
    config: ServerConfig | None = None,
    buffer: ScreenshotBuffer | None = None,
    outcomes: CommandOutcomes | None = None,
    port: int | None = None,
) -> FastAPI:
    """Create the automation API application.

    Args:
        host: Resolves the surface directives are sent to.
        config: Server settings. Defaults to ServerConfig().
        buffer: Screenshot buffer shared with the host's delivery hook.
        outcomes: Outcome registry shared with the host's result hook.
        port: Port reported by the health probe, when it differs from
              ``config.port`` (e.g., the server bound port 0).
    """
    if config is None:
        config = ServerConfig()

    app = FastAPI(
        title="webview-automation",
        description="HTTP control plane for an embedded web view",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.host = host
    app.state.buffer = buffer if buffer is not None else ScreenshotBuffer()
    app.state.outcomes = outcomes if outcomes is not None else CommandOutcomes()
    app.state.port = port if port is not None else config.port
    app.state.dispatcher = CommandDispatcher(
        host,
        app.state.outcomes,
        surface=config.surface,
        bridge=config.bridge_global,
        grace_period=config.command_grace,
        await_results=config.await_results,
        result_timeout=config.result_timeout,
    )
    app.state.screenshots = ScreenshotPipeline(
        host,
        app.state.buffer,
        surface=config.surface,
        bridge=config.bridge_global,
        grace_period=config.screenshot_grace,
    )
    serial = asyncio.Lock()

    @app.middleware("http")
    async def log_and_serialize(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        logger.info("%s %s", request.method, request.url.path)
        async with serial:
            try:
                return await call_next(request)
            except Exception as e:
                logger.exception("Unhandled error serving %s %s", request.method, request.url.path)
                return json_response({"error": f"Internal error: {e}"}, status=500)

    @app.exception_handler(AutomationError)
    async def automation_error_handler(request: Request, exc: AutomationError) -> Response:
        logger.warning("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.kind)
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def routing_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
        # Unmatched method on a known path surfaces as 405 from the router
        if exc.status_code in (404, 405):
            return not_found_response()
        return json_response({"error": str(exc.detail)}, status=exc.status_code)

    @app.api_route("/automation/health", methods=["GET"])
    async def health_check() -> Response:
        return json_response(
            HealthResponse(status="ok", port=app.state.port, version=__version__)
        )

    @app.api_route("/automation/execute", methods=["POST"])
    async def execute_command(request: Request) -> Response:
        try:
            body = await request.body()
        except ClientDisconnect as e:
            raise IoReadError(f"Failed to read body: {e}") from e
        result, status = await app.state.dispatcher.dispatch(body)
        return json_response(result, status=status)

    @app.api_route("/automation/screenshot", methods=["GET"])
    async def take_screenshot() -> Response:
        png = await app.state.screenshots.capture()
        return png_response(png)

    @app.api_route("/{path:path}", methods=["OPTIONS"])
    async def preflight(path: str) -> Response:
        return cors_preflight_response()

    @app.api_route("/{path:path}", methods=_OTHER_METHODS)
    async def not_found(path: str) -> Response:
        return not_found_response()

    return app
