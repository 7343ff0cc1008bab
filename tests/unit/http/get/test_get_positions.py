import pytest

from bybit_v5.types import Category, Side
from tests.mock_executors import MockSuccessfulOutput, json_response
from tests.unit.conftest import TEST_API_URL, load_json_all_cases, signature_matches


@pytest.mark.parametrize("test_data", load_json_all_cases("response.get_positions"))
def test_get_positions(mock_http_client, test_data):
    payload, path = test_data
    client, mock_http = mock_http_client

    mock_http.stage_output(
        MockSuccessfulOutput(
            output=json_response(payload),
            call_validation=lambda call: call.arg_pack[0:2]
            == ("GET", f"{TEST_API_URL}/v5/position/list?category=inverse&symbol=BTCUSD")
            and signature_matches(call.arg_pack[2], b"category=inverse&symbol=BTCUSD"),
        )
    )

    positions = client.get_positions(Category.INVERSE, "BTCUSD")

    assert len(positions) == 2

    short, flat = positions
    assert short.symbol == "BTCUSD"
    assert short.side is Side.SELL
    assert short.size == 300.0
    assert short.avg_price == 27464.50441675
    assert short.leverage == 10.0
    assert short.adl_rank_indicator == 2

    # empty position: no side, null margins
    assert flat.side is None
    assert flat.size == 0.0
    assert flat.mark_price == 3180.15
    assert flat.position_im == 0.0
    assert flat.position_mm == 0.0


def test_get_positions_without_symbol(mock_http_client):
    client, mock_http = mock_http_client

    mock_http.stage_output(
        MockSuccessfulOutput(
            output=json_response(
                {"retCode": 0, "retMsg": "OK", "result": {"list": []}, "time": 1}
            ),
            call_validation=lambda call: call.arg_pack[1]
            == f"{TEST_API_URL}/v5/position/list?category=linear&settleCoin=USDT",
        )
    )

    assert client.get_positions(Category.LINEAR) == []
