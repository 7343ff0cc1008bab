"""HMAC-SHA256 request signing for the Bybit V5 API.

Bybit signs the concatenation, with no separators, of::

    timestamp + api_key + recv_window + payload

where ``payload`` is the exact JSON body of a POST or the exact query string
of a GET. The signature is the lowercase hex HMAC-SHA256 of that message keyed
with the API secret.

Nothing in this module logs. The secret is never part of any output.
"""

import hmac
from dataclasses import dataclass, field
from hashlib import sha256

from bybit_v5.errors import MissingCredential


@dataclass(frozen=True)
class Credentials:
    """API key and secret. Either may be None for a public-only client."""

    api_key: str | None = None
    api_secret: str | None = field(default=None, repr=False)


def build_sign_message(
    api_key: str, timestamp: int, receive_window: str, payload: bytes
) -> bytes:
    """Build the byte string Bybit expects to be signed.

    Args:
        api_key: The API key sent in ``X-BAPI-API-KEY``.
        timestamp: Milliseconds since epoch, as sent in ``X-BAPI-TIMESTAMP``.
        receive_window: The value sent in ``X-BAPI-RECV-WINDOW``.
        payload: The canonical payload, byte-identical to what is transmitted.

    Returns:
        The message to feed to HMAC.

    """
    return f"{timestamp}{api_key}{receive_window}".encode() + payload


def compute_signature(api_secret: str, message: bytes) -> str:
    """Return the lowercase hex HMAC-SHA256 of ``message`` keyed with ``api_secret``."""
    return hmac.new(api_secret.encode(), message, sha256).hexdigest()


def sign(
    api_key: str | None,
    api_secret: str | None,
    timestamp: int,
    receive_window: str,
    payload: bytes,
) -> str:
    """Sign a canonical payload.

    Raises:
        MissingCredential: If the API key or the API secret is missing.

    """
    if not api_key:
        raise MissingCredential("API key")
    if not api_secret:
        raise MissingCredential("API secret")
    message = build_sign_message(api_key, timestamp, receive_window, payload)
    return compute_signature(api_secret, message)


class Signer:
    """Signs canonical payloads with a fixed set of credentials.

    A Signer holds no per-request state and may be shared between threads.

    Examples:
        .. code-block:: python

            signer = Signer(Credentials("key", "secret"), receive_window="5000")
            signature = signer.sign(current_timestamp_ms(), b'{"category":"linear"}')
    """

    def __init__(self, credentials: Credentials, receive_window: str):
        """Initialize a Signer.

        Args:
            credentials: API key and secret. A Signer without them can be
                constructed, but refuses to sign.
            receive_window: The receive window included in every signature.

        """
        self._credentials = credentials
        self._receive_window = receive_window

    @property
    def api_key(self) -> str:
        """The API key to send alongside signatures.

        Raises:
            MissingCredential: If no API key is configured.

        """
        if not self._credentials.api_key:
            raise MissingCredential("API key")
        return self._credentials.api_key

    @property
    def receive_window(self) -> str:
        return self._receive_window

    @property
    def can_sign(self) -> bool:
        return bool(self._credentials.api_key and self._credentials.api_secret)

    def sign(self, timestamp: int, payload: bytes) -> str:
        """Sign ``payload`` for a request stamped with ``timestamp``.

        Raises:
            MissingCredential: If the API key or the API secret is missing.

        """
        return sign(
            self._credentials.api_key,
            self._credentials.api_secret,
            timestamp,
            self._receive_window,
            payload,
        )

    def __repr__(self) -> str:
        return (
            f"Signer(api_key={self._credentials.api_key!r}, "
            f"receive_window={self._receive_window!r})"
        )
