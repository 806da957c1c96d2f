"""Async client for the automation HTTP API.

Used by external automation tools (and the CLI) to drive a running
application::

    async with AutomationClient("http://127.0.0.1:9876") as client:
        await client.navigate("/settings")
        await client.type_text("#name", "Ada")
        await client.click("button[type=submit]")
        png = await client.screenshot()

The helper methods mirror the commands the page bridge implements. Unless
the service runs with ``await_results`` enabled, their return value is only
the acknowledgement, not the command's result.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class AutomationClientError(Exception):
    """Raised when the automation service cannot be reached or refuses a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AutomationClient:
    """Talks to the automation service over HTTP."""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:9876",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def disconnect(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> AutomationClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.disconnect()

    # -------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------

    async def health(self) -> dict[str, Any]:
        resp = await self._request("GET", "/automation/health")
        return resp.json()

    async def execute(self, command: str, **args: Any) -> dict[str, Any]:
        """Run ``command`` in the page with keyword arguments as ``args``."""
        resp = await self._request(
            "POST", "/automation/execute", json={"command": command, "args": args}
        )
        logger.debug("Executed %s %s -> %d", command, args, resp.status_code)
        return resp.json()

    async def screenshot(self) -> bytes:
        resp = await self._request("GET", "/automation/screenshot")
        return resp.content

    async def save_screenshot(self, path: Path | str) -> Path:
        path = Path(path)
        path.write_bytes(await self.screenshot())
        logger.info("Saved screenshot to %s", path)
        return path

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        if self._client is None:
            raise AutomationClientError("Not connected to automation service")
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise AutomationClientError(f"HTTP request to {path} failed: {e}") from e
        if resp.is_error:
            try:
                message = resp.json().get("error", resp.text)
            except (ValueError, AttributeError):
                message = resp.text
            raise AutomationClientError(
                f"{method} {path} returned {resp.status_code}: {message}",
                status_code=resp.status_code,
            )
        return resp

    # -------------------------------------------------------------------
    # Bridge commands
    # -------------------------------------------------------------------

    async def navigate(self, path: str) -> dict[str, Any]:
        return await self.execute("navigate", path=path)

    async def click(self, selector: str) -> dict[str, Any]:
        return await self.execute("click", selector=selector)

    async def type_text(self, selector: str, text: str) -> dict[str, Any]:
        return await self.execute("type", selector=selector, text=text)

    async def clear(self, selector: str) -> dict[str, Any]:
        return await self.execute("clear", selector=selector)

    async def select(self, selector: str, value: str) -> dict[str, Any]:
        return await self.execute("select", selector=selector, value=value)

    async def check(self, selector: str) -> dict[str, Any]:
        return await self.execute("check", selector=selector)

    async def uncheck(self, selector: str) -> dict[str, Any]:
        return await self.execute("uncheck", selector=selector)

    async def press_key(self, key: str, selector: str | None = None) -> dict[str, Any]:
        if selector is None:
            return await self.execute("pressKey", key=key)
        return await self.execute("pressKey", key=key, selector=selector)

    async def submit(self, selector: str) -> dict[str, Any]:
        return await self.execute("submit", selector=selector)

    async def scroll_to(self, selector: str) -> dict[str, Any]:
        return await self.execute("scrollTo", selector=selector)

    async def focus(self, selector: str) -> dict[str, Any]:
        return await self.execute("focus", selector=selector)

    async def blur(self, selector: str) -> dict[str, Any]:
        return await self.execute("blur", selector=selector)

    async def wait(self, ms: int = 1000) -> dict[str, Any]:
        return await self.execute("wait", ms=ms)

    async def wait_for(self, selector: str, timeout: int = 5000) -> dict[str, Any]:
        return await self.execute("waitFor", selector=selector, timeout=timeout)

    async def get_text(self, selector: str) -> dict[str, Any]:
        return await self.execute("getText", selector=selector)

    async def get_value(self, selector: str) -> dict[str, Any]:
        return await self.execute("getValue", selector=selector)

    async def get_attribute(self, selector: str, attribute: str) -> dict[str, Any]:
        return await self.execute("getAttribute", selector=selector, attribute=attribute)

    async def exists(self, selector: str) -> dict[str, Any]:
        return await self.execute("exists", selector=selector)

    async def get_url(self) -> dict[str, Any]:
        return await self.execute("getUrl")

    async def get_title(self) -> dict[str, Any]:
        return await self.execute("getTitle")

    async def get_html(self, selector: str = "body") -> dict[str, Any]:
        return await self.execute("getHtml", selector=selector)

    async def get_elements(self, selector: str) -> dict[str, Any]:
        return await self.execute("getElements", selector=selector)

    async def evaluate(self, script: str) -> dict[str, Any]:
        return await self.execute("eval", script=script)
