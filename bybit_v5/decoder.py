"""Response decoding for the Bybit V5 API.

Every response is an envelope::

    {"retCode": 0, "retMsg": "OK", "result": {...}, "retExtInfo": {}, "time": 1722030653718}

Decoding happens in three steps:

1. Parse the envelope, rejecting anything without ``retCode``/``retMsg``/``result``.
2. Raise :class:`~bybit_v5.errors.ExchangeRejected` if ``retCode`` is not 0,
   leaving ``result`` untouched.
3. Map ``result`` (or ``result.list`` / ``result.list[0]``) onto a record type
   from :mod:`bybit_v5.types`.

Bybit is not consistent about quoting numbers: the same logical field may
arrive as ``"3000.21"``, ``3000.21`` or ``null`` depending on the endpoint.
Every field annotated ``float`` therefore goes through :func:`tolerant_float`.
Note that ``null`` decodes to ``0.0``, so a caller cannot tell a missing value
from a genuine zero on such fields.
"""

import re
from dataclasses import MISSING, fields, is_dataclass
from enum import Enum
from functools import lru_cache
from types import NoneType, UnionType
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

import orjson

from bybit_v5.errors import (
    EmptyList,
    InvalidEnvelope,
    InvalidFieldType,
    InvalidNumericString,
    MissingListField,
    SchemaMismatch,
    UnknownEnumVariant,
)
from bybit_v5.types import Envelope, JsonValue

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

NUMERIC_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

ENVELOPE_REQUIRED_KEYS = ("retCode", "retMsg", "result")


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


# ============================================================================
# ENVELOPE
# ============================================================================


def decode_envelope(raw: bytes | str) -> Envelope:
    """Parse a raw response body as a Bybit envelope.

    Does not look at ``retCode``; see :func:`decode_checked`.

    Raises:
        InvalidEnvelope: If the body is not JSON or not an envelope.

    """
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise InvalidEnvelope(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidEnvelope(f"Expected a JSON object, got {_json_type(data)}")

    missing = [key for key in ENVELOPE_REQUIRED_KEYS if key not in data]
    if missing:
        raise InvalidEnvelope(f"Envelope is missing {', '.join(missing)}")

    ret_code = data["retCode"]
    if isinstance(ret_code, bool) or not isinstance(ret_code, int):
        raise InvalidEnvelope(f"retCode must be an integer, got {ret_code!r}")

    ret_msg = data["retMsg"]
    if not isinstance(ret_msg, str):
        raise InvalidEnvelope(f"retMsg must be a string, got {ret_msg!r}")

    time = data.get("time")
    if time is not None and (isinstance(time, bool) or not isinstance(time, int)):
        raise InvalidEnvelope(f"time must be an integer, got {time!r}")

    return Envelope(
        ret_code=ret_code,
        ret_msg=ret_msg,
        result=data["result"],
        ret_ext_info=data.get("retExtInfo", {}),
        time=time,
    )


def check_envelope(envelope: Envelope) -> Envelope:
    """Raise ExchangeRejected unless ``retCode`` is 0. ``result`` is not inspected."""
    envelope.raise_for_code()
    return envelope


def decode_checked(raw: bytes | str) -> Envelope:
    """Parse an envelope and require ``retCode == 0``.

    Raises:
        InvalidEnvelope: If the body is not an envelope.
        ExchangeRejected: If Bybit rejected the request.

    """
    return check_envelope(decode_envelope(raw))


# ============================================================================
# SCALARS
# ============================================================================


def tolerant_float(value: JsonValue, field: str = "value") -> float:
    """Decode a numeric field that may be quoted, unquoted or null.

    Args:
        value: The JSON value.
        field: Field path used in error messages.

    Returns:
        The number as float; ``null`` becomes ``0.0``.

    Raises:
        InvalidNumericString: If a string does not hold a decimal number.
        InvalidFieldType: If the value is a boolean, array or object.

    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise InvalidFieldType(field, value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        if not NUMERIC_PATTERN.match(value):
            raise InvalidNumericString(field, value)
        return float(value)
    raise InvalidFieldType(field, value)


def decode_enum(enum_cls: type[E], value: JsonValue, field: str = "value") -> E:
    """Map a wire literal onto its enum member.

    Raises:
        UnknownEnumVariant: If the literal is not one of the enum's values.

    """
    if not isinstance(value, str):
        raise UnknownEnumVariant(field, value)
    try:
        return enum_cls(value)
    except ValueError:
        raise UnknownEnumVariant(field, value) from None


# ============================================================================
# RECORDS
# ============================================================================


@lru_cache(maxsize=None)
def _record_hints(record_cls: type) -> dict[str, Any]:
    return get_type_hints(record_cls)


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Split ``X | None`` into ``(X, True)``, anything else into ``(X, False)``."""
    origin, args = get_origin(annotation), get_args(annotation)
    if origin in (Union, UnionType) and NoneType in args:
        rest = [arg for arg in args if arg is not NoneType]
        if len(rest) == 1:
            return rest[0], True
    return annotation, False


def _decode_value(
    annotation: Any, value: JsonValue, path: str, optional: bool
) -> Any:
    if annotation is float:
        return tolerant_float(value, path)

    if value is None and optional:
        return None

    if isinstance(annotation, type) and issubclass(annotation, Enum):
        # Bybit sends "" for the side of an empty position
        if optional and value == "":
            return None
        return decode_enum(annotation, value, path)

    if isinstance(annotation, type) and is_dataclass(annotation):
        return decode_record(annotation, value, path)

    if get_origin(annotation) is list:
        (item_annotation,) = get_args(annotation)
        if not isinstance(value, list):
            raise SchemaMismatch(path, f"expected an array, got {_json_type(value)}")
        return [
            _decode_value(item_annotation, item, f"{path}[{i}]", False)
            for i, item in enumerate(value)
        ]

    if annotation is bool:
        if not isinstance(value, bool):
            raise SchemaMismatch(path, f"expected a boolean, got {_json_type(value)}")
        return value

    if annotation is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SchemaMismatch(path, f"expected an integer, got {_json_type(value)}")
        return value

    if annotation is str:
        if not isinstance(value, str):
            raise SchemaMismatch(path, f"expected a string, got {_json_type(value)}")
        return value

    raise TypeError(f"Unsupported record field type {annotation!r} at {path}")


def decode_record(record_cls: type[T], data: JsonValue, path: str = "result") -> T:
    """Build a record from a JSON object.

    Each dataclass field is read from its declared wire name and decoded
    according to its annotation. Keys the record does not declare are ignored,
    so new fields added by Bybit do not break decoding.

    Args:
        record_cls: A record dataclass from :mod:`bybit_v5.types`.
        data: The JSON object.
        path: Location of ``data`` in the response, used in error messages.

    Returns:
        The decoded record.

    Raises:
        SchemaMismatch: If a required field is missing or has the wrong shape.
        InvalidNumericString: If a numeric field holds a non-numeric string.
        InvalidFieldType: If a numeric field holds a boolean, array or object.
        UnknownEnumVariant: If an enumerated field holds an unknown literal.

    """
    if not isinstance(data, dict):
        raise SchemaMismatch(path, f"expected an object, got {_json_type(data)}")

    hints = _record_hints(record_cls)
    kwargs: dict[str, Any] = {}
    for f in fields(record_cls):  # type: ignore[arg-type]
        wire_name = f.metadata.get("wire", f.name)
        field_path = f"{path}.{wire_name}"
        if wire_name not in data:
            if f.default is not MISSING or f.default_factory is not MISSING:
                continue
            raise SchemaMismatch(field_path, "missing")
        annotation, optional = _unwrap_optional(hints[f.name])
        kwargs[f.name] = _decode_value(
            annotation, data[wire_name], field_path, optional
        )

    return record_cls(**kwargs)


# ============================================================================
# RESULT SHAPES
# ============================================================================


def decode_result(raw: bytes | str, record_cls: type[T]) -> T:
    """Decode a response whose ``result`` object is the record itself.

    Raises:
        InvalidEnvelope: If the body is not an envelope.
        ExchangeRejected: If Bybit rejected the request.
        SchemaMismatch: If ``result`` does not match ``record_cls``.

    """
    envelope = decode_checked(raw)
    return decode_record(record_cls, envelope.result, "result")


def _result_list(envelope: Envelope, field: str) -> list[JsonValue]:
    result = envelope.result
    if not isinstance(result, dict):
        raise MissingListField(f"result.{field}")
    items = result.get(field)
    if not isinstance(items, list):
        raise MissingListField(f"result.{field}")
    return items


def decode_list(raw: bytes | str, record_cls: type[T], field: str = "list") -> list[T]:
    """Decode a response whose records are in ``result.<field>``.

    An empty list is a valid answer, e.g. when there are no open orders.

    Raises:
        InvalidEnvelope: If the body is not an envelope.
        ExchangeRejected: If Bybit rejected the request.
        MissingListField: If ``result.<field>`` is absent or not an array.
        SchemaMismatch: If an entry does not match ``record_cls``.

    """
    envelope = decode_checked(raw)
    items = _result_list(envelope, field)
    return [
        decode_record(record_cls, item, f"result.{field}[{i}]")
        for i, item in enumerate(items)
    ]


def decode_first(raw: bytes | str, record_cls: type[T], field: str = "list") -> T:
    """Decode the first entry of ``result.<field>``.

    Used for endpoints that wrap a single record in a list, such as the wallet
    balance of one account type or the ticker of one symbol.

    Raises:
        InvalidEnvelope: If the body is not an envelope.
        ExchangeRejected: If Bybit rejected the request.
        MissingListField: If ``result.<field>`` is absent or not an array.
        EmptyList: If ``result.<field>`` is empty.
        SchemaMismatch: If the entry does not match ``record_cls``.

    """
    envelope = decode_checked(raw)
    items = _result_list(envelope, field)
    if not items:
        raise EmptyList(f"result.{field}")
    return decode_record(record_cls, items[0], f"result.{field}[0]")
