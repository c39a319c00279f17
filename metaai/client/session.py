"""Mutable session state held by a single :class:`SessionClient`."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .errors import SessionStateError
from .identifiers import generate_conversation_id


class SessionState(IntEnum):
    """Ordered stages of an anonymous session."""

    UNINITIALIZED = 0
    COOKIES_SET = 1
    TOKEN_SET = 2
    READY = 3


@dataclass(frozen=True)
class LandingTokens:
    """Tokens scraped from the landing page."""

    abra_csrf: str
    js_datr: str
    datr: str
    lsd: str

    def cookie_header(self) -> str:
        return f"_js_datr={self.js_datr}; abra_csrf={self.abra_csrf}; datr={self.datr}; lsd={self.lsd}"


@dataclass
class Session:
    """Credentials and identifiers for one conversation.

    Fields only change through the ``apply_*`` methods, which are called after
    a response has been fully parsed, so a failed exchange never leaves the
    session half-updated.
    """

    cookies: str = ""
    lsd: str = ""
    access_token: str = ""
    last_fetch_id: str = ""
    _conversation_id: str = field(default_factory=generate_conversation_id, repr=False)

    @property
    def conversation_id(self) -> str:
        return self._conversation_id

    @property
    def state(self) -> SessionState:
        if not self.cookies or not self.lsd:
            return SessionState.UNINITIALIZED
        if not self.access_token:
            return SessionState.COOKIES_SET
        if not self.last_fetch_id:
            return SessionState.TOKEN_SET
        return SessionState.READY

    def require(self, minimum: SessionState, operation: str) -> None:
        """Raise :class:`SessionStateError` unless the session reached ``minimum``."""
        current = self.state
        if current < minimum:
            raise SessionStateError(
                f"Cannot {operation}: session is {current.name}, requires {minimum.name}"
            )

    def apply_landing_tokens(self, tokens: LandingTokens) -> None:
        self.cookies = tokens.cookie_header()
        self.lsd = tokens.lsd

    def apply_access_token(self, token: str) -> None:
        self.require(SessionState.COOKIES_SET, "store an access token")
        if not token:
            raise SessionStateError("Refusing to store an empty access token")
        self.access_token = token

    def apply_fetch_id(self, fetch_id: str) -> None:
        self.require(SessionState.TOKEN_SET, "record a fetch id")
        self.last_fetch_id = fetch_id

    def snapshot(self) -> dict:
        return {
            "cookies": self.cookies,
            "lsd": self.lsd,
            "access_token": self.access_token,
            "conversation_id": self.conversation_id,
            "last_fetch_id": self.last_fetch_id,
        }


__all__ = ["LandingTokens", "Session", "SessionState"]
