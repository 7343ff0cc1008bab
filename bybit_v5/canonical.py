"""Canonical payloads: the exact bytes that are both signed and transmitted.

Write requests carry their parameters as a compact JSON body. Read requests
carry them as ``key=value`` pairs joined with ``&``, in the iteration order of
the mapping and without any percent-encoding. Bybit verifies the signature
against the literal query string it receives, so the string built here must
reach the wire unchanged. Text that an HTTP client would percent-encode is
rejected rather than sent.
"""

import re
import string
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from bybit_v5.errors import MalformedParameters
from bybit_v5.helpers import serialize_request
from bybit_v5.types import RequestKind

# Characters both httpx and requests leave untouched inside a query component.
# '&', '=' and '#' are query delimiters and are never safe inside a value.
QUERY_SAFE_CHARS = frozenset(
    string.ascii_letters + string.digits + "-._~!$'()*+,/:;?@[]"
)
PERCENT_ESCAPE = re.compile(r"%[0-9A-Fa-f]{2}")


def check_query_text(key: str, text: str) -> None:
    """Reject text that an HTTP client would rewrite before sending.

    Existing ``%XX`` escapes are kept as they are, a bare ``%`` is not.

    Raises:
        MalformedParameters: If ``text`` holds a character outside the safe set.

    """
    for char in PERCENT_ESCAPE.sub("", text):
        if char not in QUERY_SAFE_CHARS:
            raise MalformedParameters(
                key, f"{char!r} would be percent-encoded in transit, escape it first"
            )


def render_query_value(key: str, value: Any) -> str:
    """Render a scalar parameter value the way it appears in a query string.

    Raises:
        MalformedParameters: If the value is not a plain scalar.

    """
    if isinstance(value, Enum):
        value = value.value
    # bool first, it is also an int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise MalformedParameters(key, f"non-finite number {value}")
        return repr(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise MalformedParameters(key, f"non-finite number {value}")
        return format(value, "f")
    if value is None:
        raise MalformedParameters(key, "value is None, omit the parameter instead")
    raise MalformedParameters(
        key, f"{type(value).__name__} cannot be rendered as a plain string"
    )


def build_query_string(params: Mapping[str, Any]) -> str:
    """Join parameters as ``k1=v1&k2=v2`` in mapping order, without escaping.

    Raises:
        MalformedParameters: If a key is not a string, a value is not a scalar,
            or either holds a character the transport would percent-encode.

    """
    parts = []
    for key, value in params.items():
        if not isinstance(key, str):
            raise MalformedParameters(key, "parameter names must be strings")
        check_query_text(key, key)
        rendered = render_query_value(key, value)
        check_query_text(key, rendered)
        parts.append(f"{key}={rendered}")
    return "&".join(parts)


def canonicalize(params: Mapping[str, Any], kind: RequestKind) -> bytes:
    """Produce the canonical payload of a request.

    Args:
        params: Request parameters, in the order they must be sent.
        kind: ``RequestKind.WRITE`` for a JSON body, ``RequestKind.READ`` for a
            query string.

    Returns:
        The canonical payload. For writes this is the request body itself.

    Raises:
        MalformedParameters: If the parameters cannot be rendered.

    """
    if kind is RequestKind.WRITE:
        return serialize_request(dict(params))
    if kind is RequestKind.READ:
        return build_query_string(params).encode()
    raise ValueError(f"Unknown request kind {kind!r}")
