"""
Emarsys HTTP Transport — Pluggable Request Transmission.

The dispatcher only needs something that turns (method, url, headers,
body) into raw response bytes. HttpxTransport is the default; tests and
callers with their own HTTP stack can pass any object with a matching
`send_request` method.

HTTP status codes are not interpreted here: the API reports failures in
the reply envelope, so the body is always returned.
"""
from __future__ import annotations
from typing import Protocol
import logging

import httpx

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """The request could not be completed (network, TLS, timeout, ...)."""
    pass


class TransportClientError(TransportError):
    """The request was rejected client-side before or while being sent."""
    pass


class HttpTransport(Protocol):
    def send_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str,
    ) -> bytes: ...


# httpx failures attributable to the request itself rather than the network
CLIENT_PROTOCOL_ERRORS = (
    httpx.LocalProtocolError,
    httpx.UnsupportedProtocol,
    httpx.InvalidURL,
)


class HttpxTransport:
    """Synchronous transport over an httpx.Client."""

    def __init__(
        self,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def send_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str,
    ) -> bytes:
        try:
            response = self._client.request(
                method=method,
                url=url,
                headers=headers,
                content=body.encode("utf-8"),
            )
        except CLIENT_PROTOCOL_ERRORS as exc:
            raise TransportClientError(str(exc)) from exc
        except (httpx.HTTPError, httpx.StreamError, httpx.CookieConflict) as exc:
            raise TransportError(str(exc)) from exc
        except ValueError as exc:
            # header values that cannot be encoded, malformed request arguments
            raise TransportClientError(str(exc)) from exc

        logger.debug(f"HTTP {response.status_code} from {method}")
        return response.content

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
