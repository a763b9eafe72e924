"""Dataclass-based client configuration.

Credentials, the API base URL, the HTTP timeout and the JSON depth limit
are fixed once per client. Values come from keyword arguments or from
`EMARSYS_*` environment variables; anything left unset falls back to the
live endpoint and a nesting limit of 512.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from emarsys_sdk.constants import LIVE_BASE_URL


DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_JSON_DEPTH = 512


@dataclass(frozen=True)
class EmarsysConfig:
    """Complete configuration for an EmarsysClient.

    Usage::

        config = EmarsysConfig.from_env()
        client = EmarsysClient.from_config(config)
    """

    username: str
    secret: str
    base_url: str = LIVE_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_json_depth: int = DEFAULT_MAX_JSON_DEPTH

    # Reference datasets; None means the files bundled with the package
    fields_path: str | None = None
    choices_path: str | None = None

    def __repr__(self) -> str:
        return (
            f"EmarsysConfig(username={self.username!r}, secret='[REDACTED]', "
            f"base_url={self.base_url!r}, timeout={self.timeout!r}, "
            f"max_json_depth={self.max_json_depth!r})"
        )

    @classmethod
    def default(cls, username: str, secret: str) -> "EmarsysConfig":
        """Create config for the live endpoint with all defaults."""
        return cls(username=username, secret=secret)

    @classmethod
    def from_env(cls, prefix: str = "EMARSYS_") -> "EmarsysConfig":
        """Create config from environment variables.

        Example: EMARSYS_USERNAME=acme001 EMARSYS_SECRET=... EMARSYS_TIMEOUT=10
        """
        username = os.getenv(f"{prefix}USERNAME")
        secret = os.getenv(f"{prefix}SECRET")

        missing = [
            name for name, value in (
                (f"{prefix}USERNAME", username),
                (f"{prefix}SECRET", secret),
            )
            if not value
        ]
        if missing:
            raise ValueError(
                f"Missing Emarsys API credentials. "
                f"Required environment variables not set: {', '.join(missing)}"
            )

        overrides = {}
        base_url = os.getenv(f"{prefix}BASE_URL")
        if base_url:
            overrides["base_url"] = base_url
        timeout = os.getenv(f"{prefix}TIMEOUT")
        if timeout:
            overrides["timeout"] = float(timeout)
        max_depth = os.getenv(f"{prefix}MAX_JSON_DEPTH")
        if max_depth:
            overrides["max_json_depth"] = int(max_depth)
        fields_path = os.getenv(f"{prefix}FIELDS_PATH")
        if fields_path:
            overrides["fields_path"] = fields_path
        choices_path = os.getenv(f"{prefix}CHOICES_PATH")
        if choices_path:
            overrides["choices_path"] = choices_path

        return cls(username=username, secret=secret, **overrides)
