"""CLI package exposing the metaai command entry points."""
from __future__ import annotations

from .commands import ask, chat, cli, main
from .utils import build_client, format_sources, get_client
from metaai.utils.config import Settings, load_settings

__all__ = [
    "ask",
    "build_client",
    "chat",
    "cli",
    "format_sources",
    "get_client",
    "load_settings",
    "main",
    "Settings",
]
