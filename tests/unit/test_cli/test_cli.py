"""Tests for CLI argument parsing and client subcommands."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from webview_automation.cli import main, parse_args


class TestParseArgs:
    def test_exec(self) -> None:
        args = parse_args(["exec", "click", "--args", '{"selector": "#go"}'])
        assert args.command == "exec"
        assert args.name == "click"
        assert args.args == '{"selector": "#go"}'

    def test_exec_default_args(self) -> None:
        assert parse_args(["exec", "getTitle"]).args == "{}"

    def test_screenshot_output(self) -> None:
        args = parse_args(["screenshot", "-o", "out.png"])
        assert args.output == Path("out.png")

    def test_global_options(self) -> None:
        args = parse_args(["-v", "--url", "http://127.0.0.1:1234", "health"])
        assert args.verbose is True
        assert args.url == "http://127.0.0.1:1234"

    def test_open(self) -> None:
        args = parse_args(["open", "http://localhost:5173", "--title", "App"])
        assert args.target == "http://localhost:5173"
        assert args.title == "App"


class TestMain:
    def test_exec_rejects_non_object_args(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(tmp_path / "none.yaml"), "exec", "click", "--args", "[1]"])
        assert exc_info.value.code == 1
        assert "JSON object" in capsys.readouterr().err

    def test_exec_prints_response(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        response = {"success": True, "message": "Command executed", "command": "click"}
        with patch(
            "webview_automation.client.AutomationClient.execute",
            new=AsyncMock(return_value=response),
        ) as mock_execute:
            main(["-c", str(tmp_path / "none.yaml"), "exec", "click", "--args", '{"selector": "#go"}'])
        mock_execute.assert_awaited_once_with("click", selector="#go")
        assert '"command": "click"' in capsys.readouterr().out
