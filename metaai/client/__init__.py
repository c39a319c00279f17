"""Session client for the Meta AI web chat backend."""
from __future__ import annotations

from .errors import MetaAIError, ResponseParseError, SessionStateError, TransportError
from .identifiers import generate_conversation_id, generate_threading_id
from .models import Reference, SourceSet
from .session import LandingTokens, Session, SessionState
from .session_client import SessionClient
from .transport import HttpResponse, HttpTransport, Transport

__all__ = [
    "HttpResponse",
    "HttpTransport",
    "LandingTokens",
    "MetaAIError",
    "Reference",
    "ResponseParseError",
    "Session",
    "SessionClient",
    "SessionState",
    "SessionStateError",
    "SourceSet",
    "Transport",
    "TransportError",
    "generate_conversation_id",
    "generate_threading_id",
]
