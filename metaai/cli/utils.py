"""Helpers shared by CLI commands."""
from __future__ import annotations

from typing import List

import click

from metaai.client import SessionClient, SourceSet
from metaai.utils.config import Settings
from metaai.utils.logger import get_logger, set_correlation_id

LOGGER = get_logger(__name__)

SOURCES_COMMAND = "SOURCES"
EXIT_COMMANDS = frozenset({"exit", "quit"})


def build_client(settings: Settings) -> SessionClient:
    return SessionClient(settings=settings)


def get_client(ctx: click.Context) -> SessionClient:
    """Return the context's client, creating it on first use."""
    client = ctx.obj.get("client")
    if client is None:
        client = ctx.with_resource(build_client(ctx.obj["settings"]))
        ctx.obj["client"] = client
        set_correlation_id(client.conversation_id)
        LOGGER.debug("Conversation %s started", client.conversation_id)
    return client


def format_sources(sources: SourceSet) -> List[str]:
    lines = [f"Search Engine: {sources.search_engine} | Query: {sources.search_query}"]
    lines.extend(f"{reference.title} - {reference.link}" for reference in sources.references)
    return lines


def is_sources_request(text: str) -> bool:
    return text.upper() == SOURCES_COMMAND


__all__ = [
    "EXIT_COMMANDS",
    "SOURCES_COMMAND",
    "build_client",
    "format_sources",
    "get_client",
    "is_sources_request",
]
