"""Configuration management for webview_automation.

Loads settings from a YAML configuration file with environment variable
overrides (``WEBVIEW_AUTOMATION_SERVER__PORT=9999`` and so on). Supports
.env files.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/webview-automation.yaml")

DEFAULT_PORT = 9876


class ServerConfig(BaseModel):
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    surface: str = Field(default="main", min_length=1, description="Label of the controlled web view")
    bridge_global: str = Field(
        default="__WEBVIEW_AUTOMATION__",
        pattern=r"^[A-Za-z_$][A-Za-z0-9_$]*$",
        description="Name of the window global the page bridge is installed under",
    )
    command_grace: float = Field(default=0.1, ge=0)
    screenshot_grace: float = Field(default=2.0, ge=0)
    await_results: bool = Field(default=False)
    result_timeout: float = Field(default=5.0, gt=0)


class ClientConfig(BaseModel):
    base_url: str = Field(default=f"http://127.0.0.1:{DEFAULT_PORT}")
    timeout: float = Field(default=10.0, gt=0)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for the automation service.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "WEBVIEW_AUTOMATION_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    server: ServerConfig = Field(default_factory=ServerConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: init values from YAML > env vars > .env file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)
