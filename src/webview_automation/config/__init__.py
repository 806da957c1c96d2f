"""Configuration management for webview_automation.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides.
"""

from webview_automation.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
