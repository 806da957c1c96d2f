"""Tests for the AutomationClient against an in-process app."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx
import pytest

from webview_automation.client import AutomationClient, AutomationClientError
from webview_automation.config.settings import ServerConfig
from webview_automation.host.base import StaticHost
from webview_automation.server.app import create_app
from webview_automation.server.buffer import ScreenshotBuffer


@pytest.fixture
def transport(host: StaticHost, server_config: ServerConfig, buffer: ScreenshotBuffer) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=create_app(host, server_config, buffer=buffer))


class TestAutomationClient:
    def test_init_defaults(self) -> None:
        client = AutomationClient()
        assert client._base_url == "http://127.0.0.1:9876"
        assert client._timeout == 10.0

    def test_init_strips_trailing_slash(self) -> None:
        assert AutomationClient("http://localhost:9876/")._base_url == "http://localhost:9876"

    @pytest.mark.asyncio
    async def test_not_connected(self) -> None:
        with pytest.raises(AutomationClientError, match="Not connected"):
            await AutomationClient().health()

    @pytest.mark.asyncio
    async def test_health(self, transport: httpx.ASGITransport) -> None:
        async with AutomationClient("http://testserver", transport=transport) as client:
            data = await client.health()
        assert data["status"] == "ok"

    @pytest.mark.asyncio
    async def test_click_sends_command(self, transport: httpx.ASGITransport, surface: Any) -> None:
        async with AutomationClient("http://testserver", transport=transport) as client:
            data = await client.click("#go")
        assert data == {"success": True, "message": "Command executed", "command": "click"}
        assert 'bridge.execute("click", {"selector": "#go"})' in surface.scripts[0]

    @pytest.mark.asyncio
    async def test_helpers_map_to_bridge_commands(self, transport: httpx.ASGITransport, surface: Any) -> None:
        async with AutomationClient("http://testserver", transport=transport) as client:
            await client.type_text("#q", "hello")
            await client.press_key("Enter")
            await client.wait_for(".results", timeout=100)
        assert 'bridge.execute("type", {"selector": "#q", "text": "hello"})' in surface.scripts[0]
        assert 'bridge.execute("pressKey", {"key": "Enter"})' in surface.scripts[1]
        assert 'bridge.execute("waitFor", {"selector": ".results", "timeout": 100})' in surface.scripts[2]

    @pytest.mark.asyncio
    async def test_screenshot_bytes(
        self,
        transport: httpx.ASGITransport,
        buffer: ScreenshotBuffer,
        png_data_uri: str,
        png_bytes: bytes,
        tmp_path: Path,
    ) -> None:
        buffer.put(png_data_uri)
        async with AutomationClient("http://testserver", transport=transport) as client:
            path = await client.save_screenshot(tmp_path / "shot.png")
        assert path.read_bytes() == png_bytes

    @pytest.mark.asyncio
    async def test_error_carries_status_and_message(self, transport: httpx.ASGITransport) -> None:
        async with AutomationClient("http://testserver", transport=transport) as client:
            with pytest.raises(AutomationClientError, match="unavailable") as exc_info:
                await client.screenshot()
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self) -> None:
        def _fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = httpx.MockTransport(_fail)
        async with AutomationClient("http://testserver", transport=transport) as client:
            with pytest.raises(AutomationClientError, match="failed"):
                await client.health()
