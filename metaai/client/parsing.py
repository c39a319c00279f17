"""Response parsing for the Meta AI backend.

Everything that depends on the shape of a backend response lives here. Each
helper either returns fully parsed values or raises
:class:`ResponseParseError`, so format drift surfaces at the point of
parsing instead of leaking half-read values into the session.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from .errors import ResponseParseError
from .models import Reference, SourceSet
from .session import LandingTokens

COMPLETION_MARKER = "OVERALL_DONE"

_LANDING_PATTERNS = {
    "abra_csrf": re.compile(r'abra_csrf":\{"value":"(.*?)"'),
    "js_datr": re.compile(r'_js_datr":\{"value":"(.*?)"'),
    "datr": re.compile(r'"datr":\{"value":"(.*?)"'),
    "lsd": re.compile(r'LSD.*?token":"(.*?)"'),
}


@dataclass(frozen=True)
class BotReply:
    """Reply text and fetch id extracted from a completed chat fragment."""

    text: str
    fetch_id: str


def extract_landing_tokens(body: str) -> LandingTokens:
    values: Dict[str, str] = {}
    missing: List[str] = []
    empty: List[str] = []
    for name, pattern in _LANDING_PATTERNS.items():
        match = pattern.search(body)
        if match is None:
            missing.append(name)
            continue
        if not match.group(1):
            empty.append(name)
            continue
        values[name] = match.group(1)
    if missing:
        raise ResponseParseError(
            f"markers not found: {', '.join(missing)}",
            context="landing page",
        )
    if empty:
        raise ResponseParseError(
            f"empty values for: {', '.join(empty)}",
            context="landing page",
        )
    return LandingTokens(**values)


def decode_json(text: str, context: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"invalid JSON ({exc.msg})", context=context) from exc


def _dig(data: Any, path: Sequence[str], context: str) -> Any:
    current = data
    walked: List[str] = []
    for key in path:
        walked.append(key)
        if not isinstance(current, dict) or key not in current:
            raise ResponseParseError(f"missing field '{'.'.join(walked)}'", context=context)
        current = current[key]
    return current


def _require_str(value: Any, field_name: str, context: str) -> str:
    if not isinstance(value, str):
        raise ResponseParseError(
            f"field '{field_name}' should be a string, got {type(value).__name__}",
            context=context,
        )
    return value


def extract_access_token(body: str) -> str:
    context = "access token response"
    data = decode_json(body, context)
    path = ("data", "xab_abra_accept_terms_of_service", "new_temp_user_auth", "access_token")
    token = _require_str(_dig(data, path, context), path[-1], context)
    if not token:
        raise ResponseParseError("empty access_token", context=context)
    return token


def select_completed_fragment(body: str) -> str:
    """Return the last newline-delimited fragment carrying the completion marker."""
    selected = ""
    for fragment in body.split("\n"):
        if COMPLETION_MARKER in fragment:
            selected = fragment
    if not selected:
        raise ResponseParseError(
            f"no fragment contains {COMPLETION_MARKER!r}",
            context="chat response",
        )
    return selected


def parse_bot_reply(body: str) -> BotReply:
    context = "chat response"
    data = decode_json(select_completed_fragment(body), context)
    message = _dig(data, ("data", "node", "bot_response_message"), context)
    text = _require_str(_dig(message, ("snippet",), context), "snippet", context)
    fetch_id = _require_str(_dig(message, ("fetch_id",), context), "fetch_id", context)
    if not fetch_id:
        raise ResponseParseError("empty fetch_id", context=context)
    return BotReply(text=text, fetch_id=fetch_id)


def parse_sources(body: str) -> SourceSet:
    context = "sources response"
    data = decode_json(body, context)
    results = _dig(data, ("data", "message", "searchResults"), context)
    engine = _require_str(_dig(results, ("search_engine",), context), "search_engine", context)
    query = _require_str(_dig(results, ("search_query",), context), "search_query", context)
    raw_references = _dig(results, ("references",), context)
    if not isinstance(raw_references, list):
        raise ResponseParseError("field 'references' should be a list", context=context)

    references = []
    for index, item in enumerate(raw_references):
        item_context = f"{context} reference[{index}]"
        references.append(
            Reference(
                link=_require_str(_dig(item, ("link",), item_context), "link", item_context),
                title=_require_str(_dig(item, ("title",), item_context), "title", item_context),
            )
        )
    return SourceSet.from_references(engine, query, references)


__all__ = [
    "BotReply",
    "COMPLETION_MARKER",
    "decode_json",
    "extract_access_token",
    "extract_landing_tokens",
    "parse_bot_reply",
    "parse_sources",
    "select_completed_fragment",
]
