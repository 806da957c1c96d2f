"""The automation HTTP service.

Public API:
    create_app -- Build the FastAPI application
    AutomationServer -- Runs the application on a dedicated thread
    start_automation -- Wire buffer, outcomes, app and server in one call
    ScreenshotBuffer -- Single-slot screenshot hand-off
    CommandOutcomes -- Correlation registry for awaited commands
"""

from webview_automation.server.buffer import CommandOutcomes, ScreenshotBuffer

__all__ = [
    "AutomationServer",
    "CommandOutcomes",
    "ScreenshotBuffer",
    "create_app",
    "start_automation",
]


def __getattr__(name: str) -> object:
    """Lazy import so the buffer can be used without the web stack loaded."""
    if name == "create_app":
        from webview_automation.server.app import create_app
        return create_app
    if name in ("AutomationServer", "start_automation"):
        from webview_automation.server import runner
        return getattr(runner, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
