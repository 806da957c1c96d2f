"""Resolving the target surface and handing it a directive."""

from __future__ import annotations

import asyncio
import logging

from webview_automation.domain.errors import ScriptDispatchError, TargetNotFound
from webview_automation.host.base import AutomationHost, DirectiveDispatchError, Surface

logger = logging.getLogger(__name__)


def resolve_surface(host: AutomationHost, label: str) -> Surface:
    surface = host.get_surface(label)
    if surface is None:
        raise TargetNotFound(label)
    return surface


async def send_directive(surface: Surface, script: str, what: str) -> None:
    """Run ``surface.send_directive`` off the event loop.

    Hosts may block while the GUI thread accepts the script, so the call
    goes through the default executor.
    """
    loop = asyncio.get_running_loop()
    try:
        await loop.run_in_executor(None, surface.send_directive, script)
    except DirectiveDispatchError as e:
        raise ScriptDispatchError(f"{what} failed: {e}") from e
    logger.debug("Directive sent to %s (%s)", surface.label, what)
