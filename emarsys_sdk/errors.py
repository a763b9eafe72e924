"""
Emarsys SDK Errors — Client vs Server Failure Taxonomy.

Every SDK operation either returns a ResponseEnvelope or raises exactly
one of two error kinds:
- ClientError: caller-attributable (unknown field/choice, malformed
  envelope, JSON depth overflow, client-side protocol violation)
- ServerError: service/transport-attributable (network failure,
  undecodable body, body that is not a JSON structure)

Each kind carries a closed `kind` enum so callers can branch on the
variant without subclass checks.
"""
from __future__ import annotations
from enum import Enum
from typing import Any


class ClientErrorKind(str, Enum):
    FIELD_NOT_FOUND = "field_not_found"
    CHOICE_NOT_FOUND = "choice_not_found"
    INVALID_ENVELOPE = "invalid_envelope"
    DEPTH_EXCEEDED = "depth_exceeded"
    PROTOCOL = "protocol"
    REPLY = "reply"
    FIELD_TYPE_NOT_CREATABLE = "field_type_not_creatable"


class ServerErrorKind(str, Enum):
    TRANSPORT = "transport"
    DECODE = "decode"
    NOT_A_STRUCTURE = "not_a_structure"


class EmarsysError(Exception):
    """Base class for every error raised by the SDK."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------------
# Client errors
# ---------------------------------------------------------------------------

class ClientError(EmarsysError):
    """Failure caused by the caller's input or by a malformed reply."""

    INVALID_RESPONSE_STRUCTURE = "Unexpected response structure, no replyCode or replyText"
    JSON_MAXIMUM_DEPTH = "JSON response could not be decoded, maximum depth reached."
    UNRECOGNIZED_FIELD_NAME = 'Unrecognized field name "{field}"'
    UNRECOGNIZED_FIELD_FOR_CHOICE = 'Unrecognized field "{field}" for choice "{choice}"'
    UNRECOGNIZED_CHOICE_FOR_FIELD = 'Unrecognized choice "{choice}" for field "{field}"'
    SYSTEM_TYPE_NOT_CREATABLE = "Can't create this type of field, system type."
    TYPE_NOT_CREATABLE_VIA_API = "This type of field cannot be created via API. {type}"

    def __init__(
        self,
        kind: ClientErrorKind,
        message: str,
        reply_code: int | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.reply_code = reply_code

    def __repr__(self) -> str:
        return f"ClientError(kind={self.kind.value!r}, message={self.message!r}, reply_code={self.reply_code!r})"

    @classmethod
    def invalid_response_structure(cls) -> ClientError:
        return cls(ClientErrorKind.INVALID_ENVELOPE, cls.INVALID_RESPONSE_STRUCTURE)

    @classmethod
    def json_maximum_depth(cls) -> ClientError:
        return cls(ClientErrorKind.DEPTH_EXCEEDED, cls.JSON_MAXIMUM_DEPTH)

    @classmethod
    def unrecognized_field_name(cls, field_name: str) -> ClientError:
        return cls(
            ClientErrorKind.FIELD_NOT_FOUND,
            cls.UNRECOGNIZED_FIELD_NAME.format(field=field_name),
        )

    @classmethod
    def unrecognized_field_for_choice(cls, field: Any, choice: Any) -> ClientError:
        return cls(
            ClientErrorKind.CHOICE_NOT_FOUND,
            cls.UNRECOGNIZED_FIELD_FOR_CHOICE.format(field=field, choice=choice),
        )

    @classmethod
    def unrecognized_choice_for_field(cls, choice: Any, field: Any) -> ClientError:
        return cls(
            ClientErrorKind.CHOICE_NOT_FOUND,
            cls.UNRECOGNIZED_CHOICE_FOR_FIELD.format(choice=choice, field=field),
        )

    @classmethod
    def protocol_violation(cls, message: str) -> ClientError:
        return cls(ClientErrorKind.PROTOCOL, message)

    @classmethod
    def from_reply(cls, reply_text: str, reply_code: int) -> ClientError:
        """Escalate a non-successful envelope into an exception."""
        return cls(ClientErrorKind.REPLY, reply_text, reply_code=reply_code)

    @classmethod
    def system_type_not_creatable(cls) -> ClientError:
        return cls(ClientErrorKind.FIELD_TYPE_NOT_CREATABLE, cls.SYSTEM_TYPE_NOT_CREATABLE)

    @classmethod
    def type_not_creatable_via_api(cls, application_type: str) -> ClientError:
        return cls(
            ClientErrorKind.FIELD_TYPE_NOT_CREATABLE,
            cls.TYPE_NOT_CREATABLE_VIA_API.format(type=application_type),
        )


# ---------------------------------------------------------------------------
# Server errors
# ---------------------------------------------------------------------------

class ServerError(EmarsysError):
    """Failure on the service or network side of the exchange."""

    JSON_DECODING = "JSON response could not be decoded:\n{detail}"
    JSON_RESPONSE_NOT_STRUCTURE = "JSON response is not an array or object:\n{response}"

    def __init__(self, kind: ServerErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

    def __repr__(self) -> str:
        return f"ServerError(kind={self.kind.value!r}, message={self.message!r})"

    @classmethod
    def transport(cls, message: str) -> ServerError:
        return cls(ServerErrorKind.TRANSPORT, message)

    @classmethod
    def json_decoding(cls, detail: str) -> ServerError:
        return cls(ServerErrorKind.DECODE, cls.JSON_DECODING.format(detail=detail))

    @classmethod
    def json_response_not_structure(cls, response: Any) -> ServerError:
        return cls(
            ServerErrorKind.NOT_A_STRUCTURE,
            cls.JSON_RESPONSE_NOT_STRUCTURE.format(response=response),
        )
