"""
Emarsys SDK — Python client for the Emarsys v2 REST API.

Provides:
- EmarsysClient: endpoint methods over a signed request pipeline
- MappingTable: field/choice name ↔ id resolution
- ResponseEnvelope: replyCode / replyText / data
- ClientError / ServerError: the two failure kinds
"""
from emarsys_sdk.client import EmarsysClient
from emarsys_sdk.config import EmarsysConfig
from emarsys_sdk.constants import (
    LIVE_BASE_URL,
    SYSTEM_FIELDS,
    ApplicationType,
    CampaignType,
    EmailStatus,
    ReplyCode,
)
from emarsys_sdk.endpoints import ENDPOINTS, Endpoint, get_endpoint
from emarsys_sdk.errors import (
    ClientError,
    ClientErrorKind,
    EmarsysError,
    ServerError,
    ServerErrorKind,
)
from emarsys_sdk.mapping import MappingTable, NumericFieldId, SymbolicFieldId, field_ref
from emarsys_sdk.transport import (
    Dispatcher,
    HttpTransport,
    HttpxTransport,
    ResponseEnvelope,
    TransportClientError,
    TransportError,
    WsseSigner,
    build_wsse_header,
)

__all__ = [
    # Client
    "EmarsysClient",
    "EmarsysConfig",
    # Constants
    "LIVE_BASE_URL",
    "SYSTEM_FIELDS",
    "ApplicationType",
    "CampaignType",
    "EmailStatus",
    "ReplyCode",
    # Endpoints
    "ENDPOINTS",
    "Endpoint",
    "get_endpoint",
    # Errors
    "ClientError",
    "ClientErrorKind",
    "EmarsysError",
    "ServerError",
    "ServerErrorKind",
    # Mapping
    "MappingTable",
    "NumericFieldId",
    "SymbolicFieldId",
    "field_ref",
    # Transport
    "Dispatcher",
    "HttpTransport",
    "HttpxTransport",
    "ResponseEnvelope",
    "TransportClientError",
    "TransportError",
    "WsseSigner",
    "build_wsse_header",
]
