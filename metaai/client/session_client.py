"""Session client for the Meta AI web chat backend."""
from __future__ import annotations

import random
from typing import Literal

from metaai.utils.config import Settings
from metaai.utils.logger import get_logger

from . import parsing, payloads
from .errors import SessionStateError, TransportError
from .identifiers import generate_threading_id
from .models import SourceSet
from .payloads import RequestSpec
from .session import Session, SessionState
from .transport import HttpResponse, HttpTransport, Transport, send

LOGGER = get_logger(__name__)


class SessionClient:
    """Owns one anonymous session and one conversation against Meta AI.

    The four network operations report transport failures (non-200 status or
    a :class:`TransportError` from the transport) by returning ``False`` and
    leave the session untouched. Responses that arrive successfully but do
    not match the expected shape raise :class:`ResponseParseError`.

    A client holds mutable state and is meant for one caller at a time; use
    separate instances for concurrent conversations.
    """

    def __init__(
        self,
        *,
        transport: Transport | None = None,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.transport: Transport = transport or HttpTransport(timeout=self.settings.timeout)
        self.session = Session()
        self._rng = rng
        LOGGER.debug("Created client for conversation %s", self.session.conversation_id)

    # ------------------------------------------------------------------
    # Session accessors
    # ------------------------------------------------------------------

    @property
    def conversation_id(self) -> str:
        return self.session.conversation_id

    @property
    def last_fetch_id(self) -> str:
        return self.session.last_fetch_id

    @property
    def state(self) -> SessionState:
        return self.session.state

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    def _dispatch(self, spec: RequestSpec, step: str) -> HttpResponse | None:
        try:
            response = send(self.transport, spec)
        except TransportError as exc:
            LOGGER.warning(
                "%s failed: %s", step, exc,
                extra={"extra_fields": {"step": step, "url": spec.url}},
            )
            return None
        if not response.ok:
            LOGGER.warning(
                "%s failed with HTTP status %s", step, response.status_code,
                extra={"extra_fields": {"step": step, "url": spec.url, "status_code": response.status_code}},
            )
            return None
        return response

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def initialize_session(self) -> bool:
        """Fetch the landing page and store the anonymous cookies and ``lsd`` token."""
        spec = payloads.landing_request(
            self.settings.landing_url,
            user_agent=self.settings.user_agent,
            accept_language=self.settings.accept_language,
        )
        response = self._dispatch(spec, "Session initialization")
        if response is None:
            return False

        tokens = parsing.extract_landing_tokens(response.text)
        self.session.apply_landing_tokens(tokens)
        LOGGER.info("Session cookies acquired")
        return True

    def acquire_access_token(self) -> bool:
        """Accept the terms of service as a temporary user and store the access token."""
        self.session.require(SessionState.COOKIES_SET, "acquire an access token")
        spec = payloads.accept_tos_request(
            self.session.lsd,
            self.session.cookies,
            self.settings.graphql_url,
            user_agent=self.settings.user_agent,
            accept_language=self.settings.accept_language,
        )
        response = self._dispatch(spec, "Access token request")
        if response is None:
            return False

        token = parsing.extract_access_token(response.text)
        self.session.apply_access_token(token)
        LOGGER.info("Access token acquired")
        return True

    def _ensure_authenticated(self) -> bool:
        if self.session.state is SessionState.UNINITIALIZED:
            if not self.initialize_session():
                return False
            self.session.require(SessionState.COOKIES_SET, "continue after session initialization")
        if self.session.state is SessionState.COOKIES_SET:
            if not self.acquire_access_token():
                return False
            self.session.require(SessionState.TOKEN_SET, "continue after token exchange")
        return True

    def send_prompt(self, message: str) -> str | Literal[False]:
        """Send ``message`` to the conversation and return the bot's reply text."""
        if not self._ensure_authenticated():
            return False

        threading_id = generate_threading_id(self._rng)
        spec = payloads.send_message_request(
            message,
            access_token=self.session.access_token,
            lsd=self.session.lsd,
            cookies=self.session.cookies,
            conversation_id=self.session.conversation_id,
            threading_id=threading_id,
            url=self.settings.chat_url,
            user_agent=self.settings.user_agent,
            accept_language=self.settings.accept_language,
        )
        LOGGER.debug("Sending prompt (%d chars, threading id %s)", len(message), threading_id)
        response = self._dispatch(spec, "Prompt")
        if response is None:
            return False

        reply = parsing.parse_bot_reply(response.text)
        self.session.apply_fetch_id(reply.fetch_id)
        return reply.text

    def fetch_sources(self, fetch_id: str | None = None) -> SourceSet | Literal[False]:
        """Look up the citations behind a reply, defaulting to the latest one."""
        if fetch_id is None:
            fetch_id = self.session.last_fetch_id
        if not fetch_id:
            raise SessionStateError(
                "No fetch id available: send a prompt first or pass fetch_id explicitly"
            )
        self.session.require(SessionState.TOKEN_SET, "fetch sources")

        spec = payloads.search_plugin_request(
            fetch_id,
            access_token=self.session.access_token,
            lsd=self.session.lsd,
            cookies=self.session.cookies,
            url=self.settings.chat_url,
            user_agent=self.settings.user_agent,
            accept_language=self.settings.accept_language,
        )
        response = self._dispatch(spec, "Sources lookup")
        if response is None:
            return False

        sources = parsing.parse_sources(response.text)
        LOGGER.debug("Fetched %d references for %s", len(sources), fetch_id)
        return sources

    # ------------------------------------------------------------------
    # Resource management
    # ------------------------------------------------------------------

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "SessionClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["SessionClient"]
