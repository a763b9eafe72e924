"""
Emarsys SDK Transport — Signed Requests and Reply Envelopes.

Provides:
- WsseSigner: X-WSSE UsernameToken signature per request
- Dispatcher: sign → send → decode → envelope pipeline
- ResponseEnvelope: replyCode / replyText / data value object
- HttpxTransport: default httpx-based transport
"""
from emarsys_sdk.transport.dispatcher import (
    Dispatcher,
    RequestEnvelope,
    decode_response,
    json_depth,
)
from emarsys_sdk.transport.envelope import ResponseEnvelope
from emarsys_sdk.transport.http import (
    HttpTransport,
    HttpxTransport,
    TransportClientError,
    TransportError,
)
from emarsys_sdk.transport.signer import (
    WSSE_HEADER,
    WsseSigner,
    build_wsse_header,
    make_digest,
    make_nonce,
    next_friday,
)

__all__ = [
    # Dispatcher
    "Dispatcher",
    "RequestEnvelope",
    "decode_response",
    "json_depth",
    # Envelope
    "ResponseEnvelope",
    # HTTP
    "HttpTransport",
    "HttpxTransport",
    "TransportClientError",
    "TransportError",
    # Signer
    "WSSE_HEADER",
    "WsseSigner",
    "build_wsse_header",
    "make_digest",
    "make_nonce",
    "next_friday",
]
