"""Assembly of transport-level request descriptors.

The canonical payload is produced once, signed once, and then placed unchanged
either in the body (writes) or after the ``?`` of the URL (reads).
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from bybit_v5.canonical import canonicalize
from bybit_v5.config import BybitConfig
from bybit_v5.helpers import current_timestamp_ms
from bybit_v5.signer import Signer
from bybit_v5.types import RequestKind

HEADER_API_KEY = "X-BAPI-API-KEY"
HEADER_TIMESTAMP = "X-BAPI-TIMESTAMP"
HEADER_RECV_WINDOW = "X-BAPI-RECV-WINDOW"
HEADER_SIGN = "X-BAPI-SIGN"
HEADER_CONTENT_TYPE = "Content-Type"
CONTENT_TYPE_JSON = "application/json"

_METHODS = {RequestKind.WRITE: "POST", RequestKind.READ: "GET"}


@dataclass(frozen=True)
class SignedRequest:
    """Everything a transport needs to send one request.

    Attributes:
        method: ``POST`` for writes, ``GET`` for reads.
        url: Full URL. For reads it ends with the canonical query string.
        headers: Authentication headers, plus ``Content-Type`` for writes.
        body: The canonical payload for writes, None for reads.
        payload: The canonical payload that was signed.
        timestamp: Milliseconds since epoch used in the signature and header.
        signature: Hex signature, None for unsigned public requests.

    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    payload: bytes = b""
    timestamp: int | None = None
    signature: str | None = None


def _url(config: BybitConfig, path: str, query: bytes) -> str:
    if not query:
        return f"{config.api_url}{path}"
    return f"{config.api_url}{path}?{query.decode()}"


def assemble_request(
    config: BybitConfig,
    signer: Signer,
    path: str,
    kind: RequestKind,
    params: Mapping[str, Any],
    timestamp: int | None = None,
) -> SignedRequest:
    """Build a signed request.

    Args:
        config: Client configuration supplying the host and receive window.
        signer: Signer holding the credentials.
        path: Endpoint path, e.g. ``/v5/order/create``.
        kind: Write (JSON body, POST) or read (query string, GET).
        params: Request parameters in wire order.
        timestamp: Milliseconds since epoch. Defaults to now. The same value is
            used for the signature and the ``X-BAPI-TIMESTAMP`` header.

    Returns:
        SignedRequest ready to hand to an HttpExecutor.

    Raises:
        MissingCredential: If the signer has no API key or secret.
        MalformedParameters: If the parameters cannot be canonicalized.

    """
    payload = canonicalize(params, kind)
    if timestamp is None:
        timestamp = current_timestamp_ms()
    signature = signer.sign(timestamp, payload)

    headers = {
        HEADER_API_KEY: signer.api_key,
        HEADER_TIMESTAMP: str(timestamp),
        HEADER_RECV_WINDOW: signer.receive_window,
        HEADER_SIGN: signature,
    }

    if kind is RequestKind.WRITE:
        headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON
        return SignedRequest(
            method=_METHODS[kind],
            url=_url(config, path, b""),
            headers=headers,
            body=payload,
            payload=payload,
            timestamp=timestamp,
            signature=signature,
        )

    return SignedRequest(
        method=_METHODS[kind],
        url=_url(config, path, payload),
        headers=headers,
        body=None,
        payload=payload,
        timestamp=timestamp,
        signature=signature,
    )


def assemble_public_request(
    config: BybitConfig, path: str, params: Mapping[str, Any]
) -> SignedRequest:
    """Build an unsigned GET request for a public market endpoint."""
    payload = canonicalize(params, RequestKind.READ)
    return SignedRequest(
        method="GET",
        url=_url(config, path, payload),
        payload=payload,
    )
