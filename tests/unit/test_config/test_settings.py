"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from webview_automation.config.settings import (
    ClientConfig,
    ServerConfig,
    Settings,
    load_settings,
)


class TestSettings:
    def test_default_settings(self) -> None:
        settings = Settings()
        assert settings.server.host == "127.0.0.1"
        assert settings.server.port == 9876
        assert settings.server.surface == "main"
        assert settings.client.base_url == "http://127.0.0.1:9876"

    def test_server_config_defaults(self) -> None:
        config = ServerConfig()
        assert config.command_grace == 0.1
        assert config.screenshot_grace == 2.0
        assert config.await_results is False
        assert config.bridge_global == "__WEBVIEW_AUTOMATION__"

    def test_client_config_defaults(self) -> None:
        assert ClientConfig().timeout == 10.0

    def test_invalid_port_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServerConfig(port=70000)

    def test_bridge_global_must_be_identifier(self) -> None:
        with pytest.raises(ValidationError):
            ServerConfig(bridge_global="window.x; alert(1)")

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WEBVIEW_AUTOMATION_SERVER__PORT", "9999")
        assert Settings().server.port == 9999

    def test_load_settings_missing_file(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.server.port == 9876

    def test_load_settings_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "automation.yaml"
        path.write_text(
            "server:\n"
            "  port: 9000\n"
            "  surface: editor\n"
            "  await_results: true\n"
            "logging:\n"
            "  level: DEBUG\n"
        )
        settings = load_settings(path)
        assert settings.server.port == 9000
        assert settings.server.surface == "editor"
        assert settings.server.await_results is True
        assert settings.logging.level == "DEBUG"
