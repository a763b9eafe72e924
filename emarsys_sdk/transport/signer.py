"""
Emarsys WSSE Signer — UsernameToken Authentication.

Every request carries an X-WSSE header computed from a nonce, a
creation timestamp and the account secret:

    created = now, ISO-8601 with UTC offset (second precision)
    nonce   = md5(epoch of `created` moved to the next Friday)
    digest  = base64(sha1(nonce + created + secret))

The Friday shift of the nonce is reproduced as the service's reference
client computes it.
"""
from __future__ import annotations
from datetime import datetime, timedelta
import base64
import hashlib
import logging

logger = logging.getLogger(__name__)

WSSE_HEADER = "X-WSSE"
FRIDAY = 4  # datetime.weekday()

SIGNATURE_FORMAT = (
    'UsernameToken Username="{username}", PasswordDigest="{digest}", '
    'Nonce="{nonce}", Created="{created}"'
)


def next_friday(moment: datetime) -> datetime:
    """Same time of day on the coming Friday (unchanged on a Friday)."""
    return moment + timedelta(days=(FRIDAY - moment.weekday()) % 7)


def make_nonce(moment: datetime) -> str:
    """MD5 hex of the integer epoch of the next Friday."""
    epoch = int(next_friday(moment).timestamp())
    return hashlib.md5(str(epoch).encode("utf-8")).hexdigest()


def make_digest(nonce: str, created: str, secret: str, raw_digest: bool = False) -> str:
    """
    base64 of the SHA-1 of `nonce + created + secret`.

    The service expects the hex form of the SHA-1 to be base64-encoded;
    `raw_digest=True` encodes the raw 20 digest bytes instead.
    """
    sha1 = hashlib.sha1(f"{nonce}{created}{secret}".encode("utf-8"))
    payload = sha1.digest() if raw_digest else sha1.hexdigest().encode("ascii")
    return base64.b64encode(payload).decode("ascii")


def build_wsse_header(
    username: str,
    secret: str,
    now: datetime | None = None,
    raw_digest: bool = False,
) -> str:
    """Build the X-WSSE header value for the given credentials and instant."""
    if now is None:
        now = datetime.now().astimezone()
    elif now.tzinfo is None:
        now = now.astimezone()
    now = now.replace(microsecond=0)

    created = now.isoformat()
    nonce = make_nonce(now)
    digest = make_digest(nonce, created, secret, raw_digest=raw_digest)

    return SIGNATURE_FORMAT.format(
        username=username,
        digest=digest,
        nonce=nonce,
        created=created,
    )


class WsseSigner:
    """
    Holds the immutable credentials of one client and signs its requests.

    Example Usage:
        signer = WsseSigner("acme001", "s3cr3t")
        headers = {WSSE_HEADER: signer.sign()}
    """

    def __init__(self, username: str, secret: str, raw_digest: bool = False):
        self._username = username
        self._secret = secret
        self.raw_digest = raw_digest

    @property
    def username(self) -> str:
        return self._username

    def __repr__(self) -> str:
        return f"WsseSigner(username={self._username!r}, secret='[REDACTED]')"

    def sign(self, now: datetime | None = None) -> str:
        """Return a fresh X-WSSE header value."""
        signature = build_wsse_header(self._username, self._secret, now, self.raw_digest)
        logger.debug(f"Request signed | username={self._username} | digest=[REDACTED]")
        return signature
