"""Page-to-service callback hooks.

Host adapters expose an AutomationApi to the page (pywebview passes it as
``js_api``) so the bridge can deliver screenshots and command outcomes
back into the service's shared state.
"""

from __future__ import annotations

import logging
from typing import Any

from webview_automation.server.buffer import CommandOutcomes, ScreenshotBuffer

logger = logging.getLogger(__name__)


class AutomationApi:
    """Methods exposed to the page as ``window.pywebview.api``.

    Hosts call these on their own worker threads; both targets are
    thread-safe.
    """

    def __init__(self, buffer: ScreenshotBuffer, outcomes: CommandOutcomes) -> None:
        self._buffer = buffer
        self._outcomes = outcomes

    def automation_screenshot_data(self, data: str) -> None:
        self._buffer.put(data)
        logger.debug("Screenshot delivered (%d chars)", len(data))

    def automation_command_result(self, outcome: dict[str, Any]) -> None:
        request_id = outcome.get("id") if isinstance(outcome, dict) else None
        if not request_id:
            logger.warning("Dropping command result without id: %r", outcome)
            return
        self._outcomes.deliver(str(request_id), outcome)
