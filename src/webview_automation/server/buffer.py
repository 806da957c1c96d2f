"""State shared between the HTTP thread and the host's callbacks.

Both objects here are written from whatever thread the host delivers page
callbacks on and read from the server's event loop, so every access goes
through a lock.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Future, InvalidStateError
from typing import Any

from pydantic import ValidationError

from webview_automation.domain.models import CommandOutcome

logger = logging.getLogger(__name__)


class ScreenshotBuffer:
    """Single-slot holder for the most recent undelivered screenshot.

    Writing replaces any value nobody has taken yet; taking returns the
    value and empties the slot, so each capture is served at most once.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: str | None = None

    def put(self, data: str) -> None:
        with self._lock:
            if self._data is not None:
                logger.debug("Overwriting unread screenshot")
            self._data = data

    def take(self) -> str | None:
        with self._lock:
            data, self._data = self._data, None
            return data

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return self._data is not None


class CommandOutcomes:
    """Correlates dispatched commands with the outcomes the page reports.

    Usage::

        outcomes.expect(request_id)
        surface.send_directive(script_carrying(request_id))
        outcome = await outcomes.wait(request_id, timeout=5.0)
        # meanwhile, on a host thread:
        outcomes.deliver(request_id, {"id": request_id, "success": True})
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: dict[str, Future[CommandOutcome]] = {}

    def expect(self, request_id: str) -> None:
        with self._lock:
            self._pending[request_id] = Future()

    def deliver(self, request_id: str, outcome: dict[str, Any]) -> bool:
        """Resolve the command ``request_id``. Returns False if nobody waits."""
        with self._lock:
            future = self._pending.get(request_id)
        if future is None:
            logger.warning("Outcome for unknown or expired command %s ignored", request_id)
            return False

        try:
            parsed = CommandOutcome.model_validate({**outcome, "id": request_id})
        except ValidationError as e:
            logger.warning("Malformed outcome for command %s: %s", request_id, e)
            parsed = CommandOutcome(id=request_id, success=False, error="Malformed outcome reported by page")

        try:
            future.set_result(parsed)
        except InvalidStateError:
            logger.debug("Outcome for command %s arrived after it timed out", request_id)
            return False
        return True

    async def wait(self, request_id: str, timeout: float) -> CommandOutcome | None:
        """Wait up to ``timeout`` seconds for the outcome, None on expiry."""
        with self._lock:
            future = self._pending.get(request_id)
        if future is None:
            raise KeyError(request_id)
        try:
            return await asyncio.wait_for(asyncio.wrap_future(future), timeout)
        except asyncio.TimeoutError:
            return None
        finally:
            self.discard(request_id)

    def discard(self, request_id: str) -> None:
        with self._lock:
            future = self._pending.pop(request_id, None)
        if future is not None:
            future.cancel()

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)
