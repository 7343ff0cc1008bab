import orjson
import pytest

from bybit_v5.errors import ExchangeRejected
from bybit_v5.types import Category, OrderIdVariant
from tests.mock_executors import MockSuccessfulOutput, json_response
from tests.unit.conftest import (
    TEST_API_URL,
    load_json,
    load_json_all_cases,
    signature_matches,
)


@pytest.mark.parametrize("test_data", load_json_all_cases("response.cancel_order"))
def test_cancel_order_by_order_id(mock_http_client, test_data):
    payload, path = test_data
    client, mock_http = mock_http_client
    order_id = payload["result"]["orderId"]

    mock_http.stage_output(
        MockSuccessfulOutput(
            output=json_response(payload),
            call_validation=lambda call: call.function_name == "send"
            and call.arg_pack[0:2] == ("POST", f"{TEST_API_URL}/v5/order/cancel")
            and signature_matches(call.arg_pack[2], call.arg_pack[3]),
        )
    )

    response = client.cancel_order(
        Category.LINEAR, "ETHUSDT", OrderIdVariant.from_order_id(order_id)
    )

    assert response.order_id == order_id
    assert response.order_link_id == payload["result"]["orderLinkId"]

    _, _, _, body = mock_http.call_log[0].arg_pack
    assert body == (
        b'{"category":"linear","symbol":"ETHUSDT","orderId":"' + order_id.encode() + b'"}'
    )


def test_cancel_order_by_order_link_id(mock_http_client):
    client, mock_http = mock_http_client

    mock_http.stage_output(
        MockSuccessfulOutput(
            output=json_response(load_json("response.cancel_order", 0)),
        )
    )

    client.cancel_order(
        Category.LINEAR, "ETHUSDT", OrderIdVariant.from_order_link_id("linear-004")
    )

    _, _, _, body = mock_http.call_log[0].arg_pack
    assert orjson.loads(body) == {
        "category": "linear",
        "symbol": "ETHUSDT",
        "orderLinkId": "linear-004",
    }
    assert b"orderId" not in body


def test_order_id_variant_rejects_empty():
    with pytest.raises(ValueError):
        OrderIdVariant.from_order_id("")

    with pytest.raises(ValueError):
        OrderIdVariant.from_order_link_id("")

    with pytest.raises(ValueError):
        OrderIdVariant(order_id=None, order_link_id=None).to_dict()


def test_cancel_order_not_found(mock_http_client):
    client, mock_http = mock_http_client

    mock_http.stage_output(
        MockSuccessfulOutput(
            output=json_response(
                {
                    "retCode": 110001,
                    "retMsg": "order not exists or too late to cancel",
                    "result": {},
                    "retExtInfo": {},
                    "time": 1722029716378,
                }
            )
        )
    )

    with pytest.raises(ExchangeRejected) as exc_info:
        client.cancel_order(
            Category.LINEAR, "ETHUSDT", OrderIdVariant.from_order_id("xxxx")
        )

    assert exc_info.value.code == 110001
    assert str(exc_info.value) == "[110001] order not exists or too late to cancel"
