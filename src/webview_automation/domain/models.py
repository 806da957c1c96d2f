"""Core domain models for the automation service.

These models describe what flows across the HTTP boundary: the command
envelope posted by automation clients, the outcome a page reports back for
an awaited command, and the JSON bodies the service answers with.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CommandEnvelope(BaseModel):
    """A named command and its arguments, as posted to ``/automation/execute``."""

    model_config = ConfigDict(frozen=True)

    command: str = Field(min_length=1, description="Bridge command to invoke (e.g., 'click')")
    args: Any = Field(default_factory=dict, description="Arguments passed verbatim to the command")


class CommandOutcome(BaseModel):
    """Result of one command as reported by the page bridge.

    Only produced when the service runs with ``await_results`` enabled and
    the page defines a ``reportResult`` hook.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(description="Correlation id the directive was sent with")
    success: bool
    result: Any = None
    error: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    port: int
    version: str


class ExecuteResponse(BaseModel):
    """Body returned by ``/automation/execute``.

    ``None`` fields are dropped when rendered, so the default
    fire-and-forget mode answers with just success, message and command.
    """

    success: bool | None = None
    message: str
    command: str
    id: str | None = None
    result: Any = None
    error: str | None = None
    pending: bool | None = None
