"""Error kinds raised while serving an automation request.

Every error carries the HTTP status it is rendered with: 400 for caller
input problems, 500 for server or environment problems. The HTTP app turns
them into ``{"error": message}`` bodies.
"""

from __future__ import annotations


class AutomationError(Exception):
    """Base class for all request-level automation failures."""

    kind: str = "AutomationError"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict[str, str]:
        return {"error": self.message}


class IoReadError(AutomationError):
    """The request body stream could not be read."""

    kind = "IoReadError"
    status_code = 400


class InvalidPayload(AutomationError):
    """The request body is not UTF-8 encoded JSON."""

    kind = "InvalidPayload"
    status_code = 400


class MissingField(AutomationError):
    """A required field is absent from the request document."""

    kind = "MissingField"
    status_code = 400

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing '{field}' field")
        self.field = field


class TargetNotFound(AutomationError):
    """The host exposes no surface with the requested label."""

    kind = "TargetNotFound"
    status_code = 500

    def __init__(self, label: str) -> None:
        super().__init__(f"Surface '{label}' not found")
        self.label = label


class ScriptDispatchError(AutomationError):
    """A directive could not be handed to the web view."""

    kind = "ScriptDispatchError"
    status_code = 500


class ScreenshotUnavailable(AutomationError):
    """No screenshot was delivered within the grace period."""

    kind = "ScreenshotUnavailable"
    status_code = 500


class UnexpectedScreenshotFormat(AutomationError):
    """A delivered screenshot is not a base64 PNG data URI."""

    kind = "UnexpectedScreenshotFormat"
    status_code = 500


class Base64DecodeError(AutomationError):
    """Raised by the base64 decoder on a character outside the alphabet."""

    kind = "Base64DecodeError"
    status_code = 500

    def __init__(self, character: str, position: int) -> None:
        super().__init__(
            f"Base64 decode failed: invalid character {character!r} at position {position}"
        )
        self.character = character
        self.position = position
