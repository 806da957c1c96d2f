"""Tests for envelope parsing and the CommandDispatcher."""

from __future__ import annotations

from typing import Any

import pytest

from webview_automation.domain.errors import (
    InvalidPayload,
    MissingField,
    ScriptDispatchError,
    TargetNotFound,
)
from webview_automation.host.base import DirectiveDispatchError, StaticHost
from webview_automation.server.buffer import CommandOutcomes
from webview_automation.server.dispatcher import CommandDispatcher, parse_envelope


class TestParseEnvelope:
    def test_command_and_args(self) -> None:
        envelope = parse_envelope(b'{"command": "type", "args": {"selector": "#q", "text": "hi"}}')
        assert envelope.command == "type"
        assert envelope.args == {"selector": "#q", "text": "hi"}

    def test_args_default_to_empty_object(self) -> None:
        assert parse_envelope(b'{"command": "getUrl"}').args == {}

    def test_non_object_args_passed_through(self) -> None:
        assert parse_envelope(b'{"command": "x", "args": [1, 2]}').args == [1, 2]

    def test_extra_fields_ignored(self) -> None:
        assert parse_envelope(b'{"command": "x", "trace": true}').command == "x"

    def test_missing_command(self) -> None:
        with pytest.raises(MissingField) as exc_info:
            parse_envelope(b'{"args": {}}')
        assert exc_info.value.field == "command"
        assert exc_info.value.status_code == 400

    def test_malformed_json(self) -> None:
        with pytest.raises(InvalidPayload):
            parse_envelope(b"{command: click}")

    def test_empty_body(self) -> None:
        with pytest.raises(InvalidPayload):
            parse_envelope(b"")

    def test_deeply_nested_args_rejected(self) -> None:
        depth = 100_000
        body = b'{"command": "x", "args": ' + b"[" * depth + b"]" * depth + b"}"
        with pytest.raises(InvalidPayload, match="nested too deeply") as exc_info:
            parse_envelope(body)
        assert exc_info.value.status_code == 400


class TestCommandDispatcher:
    @pytest.mark.asyncio
    async def test_fire_and_forget(self, host: StaticHost, surface: Any, outcomes: CommandOutcomes) -> None:
        dispatcher = CommandDispatcher(host, outcomes, grace_period=0)
        result, status = await dispatcher.dispatch(b'{"command": "navigate", "args": {"path": "/home"}}')
        assert status == 200
        assert result.success is True
        assert result.message == "Command executed"
        assert result.command == "navigate"
        assert "reportResult" not in surface.scripts[0]

    @pytest.mark.asyncio
    async def test_target_not_found(self, outcomes: CommandOutcomes) -> None:
        dispatcher = CommandDispatcher(StaticHost(), outcomes, surface="main", grace_period=0)
        with pytest.raises(TargetNotFound) as exc_info:
            await dispatcher.dispatch(b'{"command": "click"}')
        assert exc_info.value.label == "main"

    @pytest.mark.asyncio
    async def test_missing_field_checked_before_surface(self, outcomes: CommandOutcomes) -> None:
        dispatcher = CommandDispatcher(StaticHost(), outcomes, grace_period=0)
        with pytest.raises(MissingField):
            await dispatcher.dispatch(b"{}")

    @pytest.mark.asyncio
    async def test_dispatch_error_releases_pending_outcome(
        self, host: StaticHost, surface: Any, outcomes: CommandOutcomes
    ) -> None:
        def _refuse(script: str) -> None:
            raise DirectiveDispatchError("closed")

        surface.on_directive = _refuse
        dispatcher = CommandDispatcher(host, outcomes, grace_period=0, await_results=True)
        with pytest.raises(ScriptDispatchError):
            await dispatcher.dispatch(b'{"command": "click"}')
        assert len(outcomes) == 0
