"""Public package interface for the Meta AI command-line client."""
from __future__ import annotations

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("metaai-cli")
except _metadata.PackageNotFoundError:  # pragma: no cover - fallback when not installed
    __version__ = "0.1.0"

from . import client, utils
from .client import (
    HttpResponse,
    HttpTransport,
    MetaAIError,
    Reference,
    ResponseParseError,
    Session,
    SessionClient,
    SessionState,
    SessionStateError,
    SourceSet,
    Transport,
    TransportError,
    generate_threading_id,
)
from .utils import Settings, configure_logging, get_logger, load_settings

__all__ = [
    "__version__",
    "HttpResponse",
    "HttpTransport",
    "MetaAIError",
    "Reference",
    "ResponseParseError",
    "Session",
    "SessionClient",
    "SessionState",
    "SessionStateError",
    "Settings",
    "SourceSet",
    "Transport",
    "TransportError",
    "client",
    "configure_logging",
    "generate_threading_id",
    "get_logger",
    "load_settings",
    "utils",
]
