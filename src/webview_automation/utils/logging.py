"""Logging setup utilities for webview_automation.

Configures logging for the whole package based on the logging
configuration settings.
"""

from __future__ import annotations

import logging
import sys

from webview_automation.config.settings import LoggingConfig


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure logging for the webview_automation package.

    Sets up the package logger with the specified level, format, and
    optional file handler. Calling it again only updates the level.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output).
    """
    if config is None:
        config = LoggingConfig()

    root_logger = logging.getLogger("webview_automation")
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    if root_logger.handlers:
        # Already configured earlier in this process; only the level changes
        return

    formatter = logging.Formatter(config.format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if config.file:
        file_handler = logging.FileHandler(config.file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.info("Logging initialized at %s level", config.level)
