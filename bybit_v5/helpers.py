"""Helper utilities for the Bybit V5 Python SDK.

This module contains utility functions for client identification, request
serialization, time and rounding, and display formatting.
"""

import logging
import math
from dataclasses import asdict, is_dataclass
from decimal import Decimal
from functools import lru_cache
from time import time_ns
from typing import Any

import orjson
from prettyprinter import cpprint

from bybit_v5.errors import MalformedParameters
from bybit_v5.types import Params

log = logging.getLogger(__name__)


# ============================================================================
# CLIENT IDENTIFICATION
# ============================================================================


@lru_cache(maxsize=1)
def get_bybit_client() -> str:
    """Get the client identification string sent as ``User-Agent``."""
    import bybit_v5

    return f"BybitV5PythonSDK/{bybit_v5.__version__}"


# ============================================================================
# SERIALIZATION
# ============================================================================


def decimal_as_str(obj: object) -> str:
    """Serialize Decimal objects to JSON strings.

    Converts Decimal to its fixed-point string to preserve precision, which is
    also how Bybit expects quantities and prices.
    """
    if isinstance(obj, Decimal):
        return format(obj, "f")

    raise TypeError


def ensure_finite(key: str, value: Any) -> None:
    """Reject NaN and infinite numbers anywhere inside ``value``.

    orjson writes such floats as ``null`` instead of failing, so they are
    caught here before a body is built.

    Raises:
        MalformedParameters: If a float or Decimal is not finite.

    """
    if isinstance(value, float):
        if not math.isfinite(value):
            raise MalformedParameters(key, f"non-finite number {value}")
    elif isinstance(value, Decimal):
        if not value.is_finite():
            raise MalformedParameters(key, f"non-finite number {value}")
    elif isinstance(value, dict):
        for inner_key, inner in value.items():
            ensure_finite(f"{key}.{inner_key}", inner)
    elif isinstance(value, (list, tuple)):
        for index, inner in enumerate(value):
            ensure_finite(f"{key}[{index}]", inner)


def serialize_request(request: Params) -> bytes:
    """Serialize request parameters to the exact JSON bytes that are signed and sent.

    Keys keep their insertion order and the output is compact, so the same
    mapping always yields the same bytes.

    Args:
        request: Request parameters to serialize

    Returns:
        JSON bytes

    Raises:
        MalformedParameters: If a key is not a string, a number is not finite,
            or a value is not JSON serializable

    """
    for key, value in request.items():
        if not isinstance(key, str):
            raise MalformedParameters(key, "parameter names must be strings")
        ensure_finite(key, value)
    try:
        return orjson.dumps(request, default=decimal_as_str)
    except orjson.JSONEncodeError as e:
        raise MalformedParameters("<body>", f"not JSON serializable: {e}") from e


# ============================================================================
# TIME UTILITIES
# ============================================================================


def current_timestamp_ms() -> int:
    """Milliseconds since epoch, as used in ``X-BAPI-TIMESTAMP``.

    Note: This is wall time. Bybit rejects requests whose timestamp is outside
    ``[server_time - recv_window, server_time + 1000)``, so a drifting clock shows
    up as retCode 10002.
    """
    return time_ns() // 1_000_000


# ============================================================================
# ROUNDING UTILITIES
# ============================================================================


def floor_to_decimals(x: float, decimals: int) -> float:
    """Truncate ``x`` towards negative infinity at ``decimals`` decimal places.

    Useful to bring a computed quantity down to a contract's ``qty_step``
    without ever rounding up past the available balance.
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    scale = 10**decimals
    return math.floor(x * scale) / scale


# ============================================================================
# DISPLAY UTILITIES
# ============================================================================


def print_data(response: Any) -> None:
    """Pretty-print response data, handling dataclasses specially.

    Dataclass instances are converted to dictionaries before printing
    for better formatting.

    Args:
        response: Data to print

    """
    if is_dataclass(response) and not isinstance(response, type):
        cpprint(asdict(response))
    elif isinstance(response, list):
        cpprint(
            [
                asdict(item)
                if is_dataclass(item) and not isinstance(item, type)
                else item
                for item in response
            ]
        )
    else:
        cpprint(response)
