"""Shared test fixtures for the webview_automation test suite.

Provides an in-memory host whose surface records directives, shared state
objects, a zero-grace server config, and a reference PNG payload.
"""

from __future__ import annotations

import base64
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from webview_automation.config.settings import ServerConfig
from webview_automation.host.base import StaticHost, Surface
from webview_automation.server.app import create_app
from webview_automation.server.buffer import CommandOutcomes, ScreenshotBuffer

# 1x1 transparent PNG
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class RecordingSurface(Surface):
    """A Surface that records directives and can react to them."""

    def __init__(
        self,
        label: str = "main",
        on_directive: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(label)
        self.scripts: list[str] = []
        self.on_directive = on_directive

    def send_directive(self, script: str) -> None:
        self.scripts.append(script)
        if self.on_directive is not None:
            self.on_directive(script)


# ---------------------------------------------------------------------------
# Host / state fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def surface_factory() -> type[RecordingSurface]:
    return RecordingSurface


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def host(surface: RecordingSurface) -> StaticHost:
    return StaticHost({"main": surface})


@pytest.fixture
def buffer() -> ScreenshotBuffer:
    return ScreenshotBuffer()


@pytest.fixture
def outcomes() -> CommandOutcomes:
    return CommandOutcomes()


@pytest.fixture
def server_config() -> ServerConfig:
    """Server settings with grace periods disabled."""
    return ServerConfig(command_grace=0, screenshot_grace=0)


@pytest.fixture
def client(
    host: StaticHost,
    server_config: ServerConfig,
    buffer: ScreenshotBuffer,
    outcomes: CommandOutcomes,
) -> TestClient:
    app = create_app(host, server_config, buffer=buffer, outcomes=outcomes)
    return TestClient(app)


# ---------------------------------------------------------------------------
# Payload fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def png_bytes() -> bytes:
    return base64.b64decode(PNG_BASE64)


@pytest.fixture
def png_data_uri() -> str:
    return "data:image/png;base64," + PNG_BASE64
