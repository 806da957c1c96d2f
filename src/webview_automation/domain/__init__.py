"""Domain models for webview_automation.

Request envelopes, reported command outcomes, and response bodies.
All models use Pydantic v2 for validation and serialization.
"""

from webview_automation.domain.errors import (
    AutomationError,
    Base64DecodeError,
    InvalidPayload,
    IoReadError,
    MissingField,
    ScreenshotUnavailable,
    ScriptDispatchError,
    TargetNotFound,
    UnexpectedScreenshotFormat,
)
from webview_automation.domain.models import (
    CommandEnvelope,
    CommandOutcome,
    ExecuteResponse,
    HealthResponse,
)

__all__ = [
    "AutomationError",
    "Base64DecodeError",
    "CommandEnvelope",
    "CommandOutcome",
    "ExecuteResponse",
    "HealthResponse",
    "InvalidPayload",
    "IoReadError",
    "MissingField",
    "ScreenshotUnavailable",
    "ScriptDispatchError",
    "TargetNotFound",
    "UnexpectedScreenshotFormat",
]
