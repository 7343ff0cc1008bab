"""Tests for validation exceptions in the API client."""

import pytest

from bybit_v5 import BybitApiClient, BybitConfig
from bybit_v5.errors import MissingCredential, ValidationError
from bybit_v5.signer import Signer
from bybit_v5.types import Category, OrderIdVariant
from tests.mock_executors import MockHttpExecutor


def test_signed_endpoint_without_api_key():
    """Test that a signed endpoint without an API key raises MissingCredential."""
    mock_http = MockHttpExecutor()
    client = BybitApiClient(executor=mock_http)

    with pytest.raises(MissingCredential) as exc_info:
        client.get_account_info()

    assert "API key is not set" in str(exc_info.value)
    assert mock_http.call_log == []


def test_signed_endpoint_without_api_secret():
    """Test that a signed endpoint without an API secret raises MissingCredential."""
    mock_http = MockHttpExecutor()
    client = BybitApiClient(api_key="XXXXXXXXXX", executor=mock_http)

    with pytest.raises(MissingCredential) as exc_info:
        client.cancel_order(
            Category.LINEAR, "ETHUSDT", OrderIdVariant.from_order_id("abc")
        )

    assert "API secret is not set" in str(exc_info.value)
    assert mock_http.call_log == []


def test_invalid_receive_window():
    """Test that a non-numeric receive window raises ValidationError."""
    with pytest.raises(ValidationError) as exc_info:
        BybitApiClient(receive_window="5s", executor=MockHttpExecutor())

    assert "receive_window" in str(exc_info.value)


def test_api_url_trailing_slash():
    """Test that a host ending with '/' raises ValidationError."""
    with pytest.raises(ValidationError):
        BybitApiClient(api_url="https://api.bybit.com/", executor=MockHttpExecutor())


def test_config_takes_precedence():
    """Test that an explicit config overrides the individual arguments."""
    config = BybitConfig(api_key="KEY", api_secret="SECRET", receive_window="8000")
    client = BybitApiClient(
        api_key="OTHER",
        receive_window="5000",
        config=config,
        executor=MockHttpExecutor(),
    )

    assert client.config is config
    assert client.config.receive_window == "8000"
    assert client.config.is_authenticated


def test_config_repr_hides_secret():
    config = BybitConfig(api_key="KEY", api_secret="SECRET")

    assert "SECRET" not in repr(config)
    assert "KEY" in repr(config)


@pytest.mark.parametrize(
    "api_key,api_secret",
    [("", "SECRET"), ("KEY", ""), (None, "SECRET"), ("KEY", None)],
)
def test_empty_credentials_are_not_authenticated(api_key, api_secret):
    config = BybitConfig(api_key=api_key, api_secret=api_secret)

    assert not config.is_authenticated
    assert not Signer(config.credentials, config.receive_window).can_sign
