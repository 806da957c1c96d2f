"""Small helpers shared across webview_automation."""
