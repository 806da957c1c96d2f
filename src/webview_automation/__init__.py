"""webview_automation -- HTTP control plane for an embedded web view.

This package runs a small local HTTP service inside a desktop application
so that an external automation client can drive the application's web
view: it forwards named commands to a JavaScript bridge living in the page
and returns PNG screenshots captured by that bridge.
"""

__version__ = "1.0.0"
