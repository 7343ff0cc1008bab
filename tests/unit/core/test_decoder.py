"""Tests for envelope and record decoding."""

from dataclasses import dataclass

import orjson
import pytest

from bybit_v5.decoder import (
    decode_checked,
    decode_envelope,
    decode_first,
    decode_list,
    decode_record,
    decode_result,
    tolerant_float,
)
from bybit_v5.errors import (
    DeserializationError,
    EmptyList,
    ExchangeError,
    ExchangeRejected,
    InvalidEnvelope,
    InvalidFieldType,
    InvalidNumericString,
    MissingListField,
    SchemaMismatch,
    TransportError,
    UnknownEnumVariant,
)
from bybit_v5.types import CreateOrderResponse, OrderType, PositionInfo, Side, wire

SUCCESS = (
    b'{"retCode":0,"retMsg":"OK","result":{"orderId":"abc","orderLinkId":""},'
    b'"retExtInfo":{},"time":1722030653718}'
)
UNMATCHED_IP = (
    b'{"retCode":10010,"retMsg":"Unmatched IP, please check your API key\'s bound IP '
    b'addresses.","result":{},"retExtInfo":{},"time":1722154324869}'
)


@dataclass
class Quote:
    price: float = wire("price")
    side: Side = wire("side")
    order_type: OrderType | None = wire("orderType", default=None)


def envelope(result) -> bytes:
    return orjson.dumps({"retCode": 0, "retMsg": "OK", "result": result})


def test_decode_success():
    response = decode_result(SUCCESS, CreateOrderResponse)

    assert response == CreateOrderResponse(order_id="abc", order_link_id="")


def test_decode_exchange_rejection():
    with pytest.raises(ExchangeRejected) as exc_info:
        decode_result(UNMATCHED_IP, CreateOrderResponse)

    assert exc_info.value.code == 10010
    assert exc_info.value.message.startswith("Unmatched IP")
    assert isinstance(exc_info.value, ExchangeError)
    assert not isinstance(exc_info.value, TransportError)


def test_rejection_does_not_look_at_result():
    """A nonzero retCode wins even when result would not decode."""
    raw = orjson.dumps({"retCode": 10001, "retMsg": "params error", "result": None})

    with pytest.raises(ExchangeRejected):
        decode_list(raw, CreateOrderResponse)


def test_envelope_fields():
    parsed = decode_envelope(SUCCESS)

    assert parsed.ok
    assert parsed.ret_code == 0
    assert parsed.ret_msg == "OK"
    assert parsed.ret_ext_info == {}
    assert parsed.time == 1722030653718


def test_envelope_optional_fields_default():
    parsed = decode_checked(b'{"retCode":0,"retMsg":"OK","result":{}}')

    assert parsed.ret_ext_info == {}
    assert parsed.time is None


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"<html>502 Bad Gateway</html>",
        b"[]",
        b'"OK"',
        b'{"retMsg":"OK","result":{}}',
        b'{"retCode":0,"result":{}}',
        b'{"retCode":0,"retMsg":"OK"}',
        b'{"retCode":"0","retMsg":"OK","result":{}}',
        b'{"retCode":true,"retMsg":"OK","result":{}}',
        b'{"retCode":0,"retMsg":null,"result":{}}',
        b'{"retCode":0,"retMsg":"OK","result":{},"time":"soon"}',
    ],
)
def test_invalid_envelope(raw):
    with pytest.raises(InvalidEnvelope) as exc_info:
        decode_envelope(raw)

    assert isinstance(exc_info.value, DeserializationError)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("3000.21", 3000.21),
        (3000.21, 3000.21),
        (None, 0.0),
        (7, 7.0),
        ("-1e-3", -0.001),
    ],
)
def test_tolerant_float(value, expected):
    assert tolerant_float(value) == expected


@pytest.mark.parametrize("value", [True, False, [1], {"v": 1}])
def test_tolerant_float_invalid_type(value):
    with pytest.raises(InvalidFieldType):
        tolerant_float(value, "price")


@pytest.mark.parametrize("value", ["", "abc", "1,5", "nan", "inf", " 1"])
def test_tolerant_float_invalid_string(value):
    with pytest.raises(InvalidNumericString) as exc_info:
        tolerant_float(value, "price")

    assert exc_info.value.field == "price"
    assert exc_info.value.value == value


@pytest.mark.parametrize("price", ["3000.21", 3000.21])
def test_record_numeric_field_accepts_string_and_number(price):
    quote = decode_record(Quote, {"price": price, "side": "Buy"})

    assert quote.price == 3000.21
    assert quote.side is Side.BUY
    assert quote.order_type is None


def test_record_numeric_field_null_is_zero():
    quote = decode_record(Quote, {"price": None, "side": "Sell"})

    assert quote.price == 0.0


@pytest.mark.parametrize("price", [True, [3000.21]])
def test_record_numeric_field_rejects_bool_and_array(price):
    with pytest.raises(InvalidFieldType) as exc_info:
        decode_record(Quote, {"price": price, "side": "Buy"})

    assert exc_info.value.field == "result.price"


@pytest.mark.parametrize(
    "data,field",
    [
        ({"price": "1", "side": "buy"}, "result.side"),
        ({"price": "1", "side": "Buy", "orderType": "StopLimit"}, "result.orderType"),
        ({"price": "1", "side": 1}, "result.side"),
    ],
)
def test_unknown_enum_variant(data, field):
    with pytest.raises(UnknownEnumVariant) as exc_info:
        decode_record(Quote, data)

    assert exc_info.value.field == field


def test_missing_required_field():
    with pytest.raises(SchemaMismatch) as exc_info:
        decode_record(Quote, {"side": "Buy"})

    assert exc_info.value.field == "result.price"
    assert exc_info.value.reason == "missing"


def test_wrong_shape_for_string_field():
    with pytest.raises(SchemaMismatch) as exc_info:
        decode_result(
            envelope({"orderId": 123, "orderLinkId": ""}), CreateOrderResponse
        )

    assert exc_info.value.field == "result.orderId"


def test_result_must_be_object():
    with pytest.raises(SchemaMismatch):
        decode_result(envelope([]), CreateOrderResponse)


def test_extra_fields_are_ignored():
    raw = envelope({"orderId": "abc", "orderLinkId": "x", "newField": [1, 2]})

    assert decode_result(raw, CreateOrderResponse).order_link_id == "x"


def test_decode_list():
    raw = envelope({"list": [{"orderId": "a", "orderLinkId": ""}] * 3})

    orders = decode_list(raw, CreateOrderResponse)

    assert [order.order_id for order in orders] == ["a", "a", "a"]


def test_decode_list_empty_is_valid():
    assert decode_list(envelope({"list": []}), CreateOrderResponse) == []


@pytest.mark.parametrize("result", [{}, {"list": None}, {"list": {}}, [], "list"])
def test_missing_list_field(result):
    with pytest.raises(MissingListField) as exc_info:
        decode_list(envelope(result), CreateOrderResponse)

    assert exc_info.value.field == "result.list"


def test_decode_first():
    raw = envelope({"list": [{"orderId": "a", "orderLinkId": ""}, {}]})

    assert decode_first(raw, CreateOrderResponse).order_id == "a"


def test_decode_first_empty_list():
    with pytest.raises(EmptyList):
        decode_first(envelope({"list": []}), CreateOrderResponse)


def test_list_entry_error_reports_index():
    raw = envelope({"list": [{"orderId": "a", "orderLinkId": ""}, {"orderId": "b"}]})

    with pytest.raises(SchemaMismatch) as exc_info:
        decode_list(raw, CreateOrderResponse)

    assert exc_info.value.field == "result.list[1].orderLinkId"


def test_empty_position_side_is_none():
    position = {
        "positionIdx": 0,
        "riskId": 1,
        "riskLimitValue": "2000000",
        "symbol": "ETHUSDT",
        "side": "",
        "size": "0",
        "avgPrice": "0",
        "positionValue": "0",
        "tradeMode": 0,
        "autoAddMargin": 0,
        "positionStatus": "Normal",
        "leverage": "10",
        "markPrice": "3180.15",
        "positionIM": "0",
        "positionMM": "0",
        "takeProfit": "0",
        "stopLoss": "0",
        "trailingStop": "0",
        "unrealisedPnl": "0",
        "curRealisedPnl": "0",
        "cumRealisedPnl": "0",
        "adlRankIndicator": 0,
        "tpslMode": "Full",
        "createdTime": "1676538056258",
        "updatedTime": "1697673600012",
    }

    assert decode_record(PositionInfo, position).side is None

    position["side"] = "Flat"
    with pytest.raises(UnknownEnumVariant):
        decode_record(PositionInfo, position)
