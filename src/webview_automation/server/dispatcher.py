"""Turns posted command envelopes into directives for the page bridge.

In the default mode the dispatcher is fire-and-forget: it sends the
directive, waits a short grace period and acknowledges, whatever the page
later makes of the command. With ``await_results`` enabled each directive
carries a correlation id and the dispatcher waits, bounded, for the page to
report the outcome through the host.
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from typing import Any

from pydantic import ValidationError

from webview_automation.domain.errors import InvalidPayload, MissingField
from webview_automation.domain.models import CommandEnvelope, ExecuteResponse
from webview_automation.host.base import AutomationHost
from webview_automation.server.buffer import CommandOutcomes
from webview_automation.server.directives import DEFAULT_BRIDGE, execute_directive
from webview_automation.server.handoff import resolve_surface, send_directive

logger = logging.getLogger(__name__)


def parse_envelope(body: bytes) -> CommandEnvelope:
    """Parse a request body into a CommandEnvelope.

    Raises:
        InvalidPayload: If the body is not UTF-8 JSON.
        MissingField: If ``command`` is absent, empty or not a string.
    """
    try:
        payload: Any = json.loads(body.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise InvalidPayload(f"Invalid JSON: body is not UTF-8 ({e})") from e
    except json.JSONDecodeError as e:
        raise InvalidPayload(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise InvalidPayload("Invalid JSON: document nested too deeply") from e

    if not isinstance(payload, dict):
        raise MissingField("command")
    command = payload.get("command")
    if not isinstance(command, str) or not command:
        raise MissingField("command")

    args = payload.get("args")
    if args is None:
        args = {}
    try:
        return CommandEnvelope(command=command, args=args)
    except ValidationError as e:
        raise InvalidPayload(f"Invalid command envelope: {e}") from e


class CommandDispatcher:
    """Dispatches commands to one labelled surface of a host."""

    def __init__(
        self,
        host: AutomationHost,
        outcomes: CommandOutcomes,
        surface: str = "main",
        bridge: str = DEFAULT_BRIDGE,
        grace_period: float = 0.1,
        await_results: bool = False,
        result_timeout: float = 5.0,
    ) -> None:
        self._host = host
        self._outcomes = outcomes
        self._surface = surface
        self._bridge = bridge
        self._grace_period = grace_period
        self._await_results = await_results
        self._result_timeout = result_timeout

    async def dispatch(self, body: bytes) -> tuple[ExecuteResponse, int]:
        """Handle one ``/automation/execute`` body.

        Returns:
            The response body and its HTTP status.
        """
        envelope = parse_envelope(body)
        surface = resolve_surface(self._host, self._surface)

        if not self._await_results:
            script = execute_directive(envelope.command, envelope.args, bridge=self._bridge)
            await send_directive(surface, script, "Script execution")
            await asyncio.sleep(self._grace_period)
            logger.info("Command %s sent", envelope.command)
            return ExecuteResponse(success=True, message="Command executed", command=envelope.command), 200

        request_id = uuid.uuid4().hex
        script = execute_directive(
            envelope.command, envelope.args, request_id=request_id, bridge=self._bridge
        )
        self._outcomes.expect(request_id)
        try:
            await send_directive(surface, script, "Script execution")
        except Exception:
            self._outcomes.discard(request_id)
            raise

        outcome = await self._outcomes.wait(request_id, self._result_timeout)
        if outcome is None:
            logger.info("Command %s (%s) still running after %.1fs", envelope.command, request_id, self._result_timeout)
            return ExecuteResponse(
                message="Command still running",
                command=envelope.command,
                id=request_id,
                pending=True,
            ), 202

        logger.info("Command %s (%s) finished, success=%s", envelope.command, request_id, outcome.success)
        return ExecuteResponse(
            success=outcome.success,
            message="Command completed" if outcome.success else "Command failed",
            command=envelope.command,
            id=request_id,
            result=outcome.result,
            error=outcome.error,
        ), 200
