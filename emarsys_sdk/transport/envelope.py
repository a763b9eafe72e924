"""
Emarsys Response Envelope.

All endpoints reply with the same JSON schema:

    {"replyCode": 0, "replyText": "OK", "data": {...}}

`replyCode` 0 means success. The payload under `data` is opaque and
endpoint specific.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from emarsys_sdk.constants import ReplyCode
from emarsys_sdk.errors import ClientError


@dataclass(frozen=True)
class ResponseEnvelope:
    """Standardized inbound response."""
    reply_code: int
    reply_text: str
    data: Any = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.reply_code == ReplyCode.OK

    @classmethod
    def parse(cls, decoded: Any) -> ResponseEnvelope:
        """Build an envelope from a decoded JSON document."""
        if not isinstance(decoded, dict):
            raise ClientError.invalid_response_structure()
        if decoded.get("replyCode") is None or decoded.get("replyText") is None:
            raise ClientError.invalid_response_structure()

        try:
            reply_code = int(decoded["replyCode"])
        except (TypeError, ValueError):
            raise ClientError.invalid_response_structure()

        data = decoded.get("data")
        return cls(
            reply_code=reply_code,
            reply_text=str(decoded["replyText"]),
            data=data if data is not None else {},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "replyCode": self.reply_code,
            "replyText": self.reply_text,
            "data": self.data,
        }
