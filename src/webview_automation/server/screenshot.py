"""Screenshot retrieval: ask the page to capture, then drain the buffer."""

from __future__ import annotations

import asyncio
import logging

from webview_automation.domain.errors import ScreenshotUnavailable, UnexpectedScreenshotFormat
from webview_automation.host.base import AutomationHost
from webview_automation.server.buffer import ScreenshotBuffer
from webview_automation.server.directives import DEFAULT_BRIDGE, capture_directive
from webview_automation.server.handoff import resolve_surface, send_directive
from webview_automation.utils.encoding import decode_base64

logger = logging.getLogger(__name__)

PNG_DATA_URI_PREFIX = "data:image/png;base64,"


class ScreenshotPipeline:
    """Triggers ``captureAndSend()`` and returns the delivered PNG bytes.

    The page delivers the capture through the host into the shared
    ScreenshotBuffer; the pipeline only waits a fixed grace period before
    looking, it has no completion signal.
    """

    def __init__(
        self,
        host: AutomationHost,
        buffer: ScreenshotBuffer,
        surface: str = "main",
        bridge: str = DEFAULT_BRIDGE,
        grace_period: float = 2.0,
    ) -> None:
        self._host = host
        self._buffer = buffer
        self._surface = surface
        self._bridge = bridge
        self._grace_period = grace_period

    async def capture(self) -> bytes:
        """Capture the surface and return PNG bytes.

        Raises:
            TargetNotFound: If the surface does not exist.
            ScriptDispatchError: If the capture directive was refused.
            ScreenshotUnavailable: If nothing was delivered in time.
            UnexpectedScreenshotFormat: If the delivery is not a PNG data URI.
            Base64DecodeError: If the payload is not valid base64.
        """
        surface = resolve_surface(self._host, self._surface)
        await send_directive(surface, capture_directive(self._bridge), "Screenshot request")
        await asyncio.sleep(self._grace_period)

        data_url = self._buffer.take()
        if data_url is None:
            raise ScreenshotUnavailable(
                "Screenshot unavailable. Make sure the page bridge is initialized "
                "and captureAndSend() can render the page."
            )
        if not data_url.startswith(PNG_DATA_URI_PREFIX):
            raise UnexpectedScreenshotFormat(
                f"Screenshot is not a base64 PNG data URI (starts with {data_url[:30]!r})"
            )

        png = decode_base64(data_url[len(PNG_DATA_URI_PREFIX):])
        logger.info("Screenshot captured (%d bytes)", len(png))
        return png
