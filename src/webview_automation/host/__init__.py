"""Host capability interface for webview_automation.

The service never talks to a GUI toolkit directly. The embedding
application hands it an AutomationHost, which resolves labelled surfaces
that accept JavaScript directives.

Public API:
    AutomationHost -- Abstract host interface
    Surface -- Abstract web view surface
    StaticHost -- Host over a fixed label -> surface mapping
    PyWebviewHost -- Host backed by pywebview windows (optional extra)
"""

from webview_automation.host.base import (
    AutomationHost,
    DirectiveDispatchError,
    StaticHost,
    Surface,
)

__all__ = [
    "AutomationHost",
    "DirectiveDispatchError",
    "StaticHost",
    "Surface",
    "AutomationApi",
    "PyWebviewHost",
]


def __getattr__(name: str) -> type:
    """Lazy import for host adapters that require external deps."""
    if name == "PyWebviewHost":
        from webview_automation.host.pywebview_host import PyWebviewHost
        return PyWebviewHost
    if name == "AutomationApi":
        from webview_automation.host.api import AutomationApi
        return AutomationApi
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
