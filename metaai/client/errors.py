"""Error taxonomy for the Meta AI session client."""
from __future__ import annotations


class MetaAIError(RuntimeError):
    """Base class for errors raised by the Meta AI client."""


class TransportError(MetaAIError):
    """Raised when the transport cannot complete a request (connection, timeout)."""


class ResponseParseError(MetaAIError):
    """Raised when a successful response does not match the expected backend contract."""

    def __init__(self, message: str, *, context: str | None = None) -> None:
        if context:
            message = f"{context}: {message}"
        super().__init__(message)
        self.context = context


class SessionStateError(MetaAIError):
    """Raised when an operation is attempted from a state that cannot support it."""


__all__ = [
    "MetaAIError",
    "ResponseParseError",
    "SessionStateError",
    "TransportError",
]
