"""pywebview-backed automation host.

Wraps pywebview windows as surfaces and provides the ``js_api`` object the
page bridge uses to deliver results back to the service::

    await window.pywebview.api.automation_screenshot_data(dataUrl)
    await window.pywebview.api.automation_command_result(outcome)

Usage::

    host = PyWebviewHost(buffer, outcomes)
    host.create_window("main", "My App", url="http://localhost:5173")
    start_automation(host, settings, buffer=buffer, outcomes=outcomes)
    webview.start()
"""

from __future__ import annotations

import logging
from typing import Any

import webview

from webview_automation.host.api import AutomationApi
from webview_automation.host.base import AutomationHost, DirectiveDispatchError, Surface
from webview_automation.server.buffer import CommandOutcomes, ScreenshotBuffer

logger = logging.getLogger(__name__)


class PyWebviewSurface(Surface):
    """A pywebview window seen as an automation surface."""

    def __init__(self, label: str, window: webview.Window) -> None:
        super().__init__(label)
        self._window = window

    def send_directive(self, script: str) -> None:
        try:
            self._window.evaluate_js(script)
        except Exception as e:
            raise DirectiveDispatchError(f"evaluate_js failed on {self.label!r}: {e}") from e


class PyWebviewHost(AutomationHost):
    """Host that owns pywebview windows, one per surface label."""

    def __init__(self, buffer: ScreenshotBuffer, outcomes: CommandOutcomes) -> None:
        self._windows: dict[str, webview.Window] = {}
        self.api = AutomationApi(buffer, outcomes)

    def create_window(self, label: str, title: str, url: str, **kwargs: Any) -> webview.Window:
        """Create a window with the automation ``js_api`` attached."""
        window = webview.create_window(title, url=url, js_api=self.api, **kwargs)
        if window is None:
            raise RuntimeError(f"pywebview did not create window {label!r}")
        self.add_window(label, window)
        return window

    def add_window(self, label: str, window: webview.Window) -> None:
        self._windows[label] = window

        def _on_closed() -> None:
            self._windows.pop(label, None)
            logger.info("Surface %s closed", label)

        window.events.closed += _on_closed

    def get_surface(self, label: str) -> Surface | None:
        window = self._windows.get(label)
        if window is None:
            return None
        return PyWebviewSurface(label, window)
