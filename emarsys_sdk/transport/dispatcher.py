"""
Emarsys Dispatcher — Signed Request / Envelope Pipeline.

Every API call goes through the same pipeline:
    URL join → Content-Type + X-WSSE headers → JSON body → Transport
    → JSON decode (depth-checked) → ResponseEnvelope

Failures are classified into exactly one of ClientError / ServerError.
A non-zero replyCode is NOT an error at this level; the envelope is
returned for the caller to inspect. No retries are attempted.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Mapping
import json
import logging
import time

from opentelemetry import trace

from emarsys_sdk.config import DEFAULT_MAX_JSON_DEPTH
from emarsys_sdk.constants import LIVE_BASE_URL
from emarsys_sdk.errors import ClientError, EmarsysError, ServerError
from emarsys_sdk.transport.envelope import ResponseEnvelope
from emarsys_sdk.transport.http import HttpTransport, TransportClientError, TransportError
from emarsys_sdk.transport.signer import WSSE_HEADER, WsseSigner

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


# ---------------------------------------------------------------------------
# Request envelope
# ---------------------------------------------------------------------------

@dataclass
class RequestEnvelope:
    """Standardized outbound request."""
    method: str  # GET, POST, PUT, DELETE
    path: str    # relative to the base URL
    body: Mapping[Any, Any] = field(default_factory=dict)
    operation: str = ""  # endpoint name, used for logs and spans

    @property
    def label(self) -> str:
        """Operation name, or the first path segment for ad-hoc requests."""
        return self.operation or self.path.split("/", 1)[0]

    def serialize_body(self) -> str:
        return json.dumps(dict(self.body or {}))


# ---------------------------------------------------------------------------
# JSON decoding
# ---------------------------------------------------------------------------

def json_depth(value: Any) -> int:
    """Nesting depth of arrays/objects in a decoded document (scalars are 0)."""
    depth = 0
    stack = [(value, 1)]
    while stack:
        node, level = stack.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in children)
    return depth


def decode_response(raw: bytes, max_depth: int = DEFAULT_MAX_JSON_DEPTH) -> Any:
    """
    Decode a raw response body into a JSON structure.

    Raises:
        ClientError: nesting deeper than `max_depth`
        ServerError: undecodable body, `null` document, or a bare scalar
    """
    try:
        decoded = json.loads(raw)
    except RecursionError:
        raise ClientError.json_maximum_depth()
    except ValueError as exc:
        logger.error(f"Undecodable response body | error={exc}")
        raise ServerError.json_decoding(str(exc)) from exc

    if decoded is None:
        raise ServerError.json_decoding("response body decoded to null")

    if json_depth(decoded) > max_depth:
        raise ClientError.json_maximum_depth()

    if not isinstance(decoded, (dict, list)):
        raise ServerError.json_response_not_structure(decoded)

    return decoded


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

class Dispatcher:
    """Signs, sends and decodes requests against one API endpoint."""

    def __init__(
        self,
        signer: WsseSigner,
        transport: HttpTransport,
        base_url: str = LIVE_BASE_URL,
        max_json_depth: int = DEFAULT_MAX_JSON_DEPTH,
    ):
        self.signer = signer
        self.transport = transport
        self.base_url = base_url
        self.max_json_depth = max_json_depth

    def build_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            WSSE_HEADER: self.signer.sign(),
        }

    def send(
        self,
        method: str,
        path: str,
        body: Mapping[Any, Any] | None = None,
        operation: str = "",
    ) -> ResponseEnvelope:
        """Send one request and return its parsed envelope."""
        return self.dispatch(
            RequestEnvelope(method=method, path=path, body=body or {}, operation=operation)
        )

    def dispatch(self, req: RequestEnvelope) -> ResponseEnvelope:
        """
        Execute a request through the full pipeline:
        Sign → Transport → Decode → Envelope

        Logs and span attributes carry the operation name, never the
        rendered path, which may embed contact data.
        """
        url = f"{self.base_url}{req.path}"
        label = req.label
        try:
            payload = req.serialize_body()
        except (TypeError, ValueError) as exc:
            raise ClientError.protocol_violation(f"Request body is not JSON serializable: {exc}") from exc
        headers = self.build_headers()

        with tracer.start_as_current_span(
            "emarsys.request",
            attributes={"http.method": req.method, "emarsys.operation": label},
        ) as span:
            start = time.time()
            try:
                raw = self.transport.send_request(req.method, url, headers, payload)
            except TransportClientError as exc:
                logger.error(f"Request rejected client-side | {req.method} {label} | error={exc}")
                raise ClientError.protocol_violation(str(exc)) from exc
            except TransportError as exc:
                logger.error(f"Transport failure | {req.method} {label} | error={exc}")
                raise ServerError.transport(str(exc)) from exc
            except EmarsysError:
                raise
            except Exception as exc:
                logger.error(f"Transport failure | {req.method} {label} | error={exc!r}")
                raise ServerError.transport(str(exc) or type(exc).__name__) from exc
            latency = (time.time() - start) * 1000

            envelope = ResponseEnvelope.parse(decode_response(raw, self.max_json_depth))
            span.set_attribute("emarsys.reply_code", envelope.reply_code)

        logger.debug(
            f"{req.method} {label} | replyCode={envelope.reply_code} | latency_ms={latency:.1f}"
        )
        if not envelope.ok:
            logger.warning(
                f"Non-zero reply | {req.method} {label} | "
                f"replyCode={envelope.reply_code} | replyText={envelope.reply_text}"
            )
        return envelope
