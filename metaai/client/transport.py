"""HTTP transport used by the session client."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Protocol

import requests

from .errors import TransportError
from .payloads import RequestSpec

DEFAULT_TIMEOUT = 120.0


@dataclass(frozen=True)
class HttpResponse:
    """Status code and raw body of a completed request."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class Transport(Protocol):
    """Minimal request/response contract the session client relies on."""

    def get(self, url: str, headers: Mapping[str, str]) -> HttpResponse:
        ...

    def post(self, url: str, data: Mapping[str, str], headers: Mapping[str, str]) -> HttpResponse:
        ...


class HttpTransport:
    """``requests`` backed transport sharing one connection pool."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = timeout
        self._session = session or requests.Session()

    def configure_timeout(self, timeout: float) -> None:
        self.timeout = timeout

    def _wrap_transport_error(self, exc: requests.RequestException, url: str) -> TransportError:
        if isinstance(exc, requests.Timeout):
            return TransportError(f"Request to {url} timed out: {exc}")
        if isinstance(exc, requests.ConnectionError):
            return TransportError(f"Connection to {url} failed: {exc}")
        return TransportError(f"Request to {url} failed: {exc}")

    def _request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        data: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        try:
            response = self._session.request(
                method,
                url,
                headers=dict(headers),
                data=dict(data) if data is not None else None,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise self._wrap_transport_error(exc, url) from exc
        return HttpResponse(status_code=response.status_code, text=response.text)

    def get(self, url: str, headers: Mapping[str, str]) -> HttpResponse:
        return self._request("GET", url, headers)

    def post(self, url: str, data: Mapping[str, str], headers: Mapping[str, str]) -> HttpResponse:
        return self._request("POST", url, headers, data)

    def close(self) -> None:
        self._session.close()


def send(transport: Transport, spec: RequestSpec) -> HttpResponse:
    """Dispatch a :class:`RequestSpec` through ``transport``."""
    if spec.method == "GET":
        return transport.get(spec.url, spec.headers)
    if spec.method == "POST":
        data: Dict[str, str] = spec.data or {}
        return transport.post(spec.url, data, spec.headers)
    raise ValueError(f"Unsupported HTTP method: {spec.method}")


__all__ = ["DEFAULT_TIMEOUT", "HttpResponse", "HttpTransport", "Transport", "send"]
