import hashlib
import hmac
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Generator

import orjson
import pytest

from bybit_v5.api import BybitApiClient
from bybit_v5.config import BybitConfig
from tests.mock_executors import MockHttpExecutor, MockOutputNotExhausted

DATA_DIR = Path(__file__).parent.joinpath("data")

# these don't matter as they will not be used with the mock in place
TEST_API_URL = "https://api.gaierror.bybit"
TEST_API_KEY = "XXXXXXXXXX"
TEST_API_SECRET = "YYYYYYYYYYYYYYYYYYYY"

log = logging.getLogger(__name__)


@pytest.fixture
def test_config() -> BybitConfig:
    return BybitConfig(
        api_key=TEST_API_KEY,
        api_secret=TEST_API_SECRET,
        receive_window="5000",
        api_url=TEST_API_URL,
    )


@pytest.fixture
def mock_http_client(
    test_config: BybitConfig,
) -> Generator[tuple[BybitApiClient, MockHttpExecutor], None, None]:
    mock_http = MockHttpExecutor()
    # replace real network requests with our mock
    client = BybitApiClient(config=test_config, executor=mock_http)

    yield (client, mock_http)

    if len(mock_http.staged_outputs) > 0:
        raise MockOutputNotExhausted(mock_http.staged_outputs)


@lru_cache(maxsize=1)
def data_files() -> list[Path]:
    return list(DATA_DIR.iterdir())


@lru_cache(maxsize=None)
def json_data_files(name: str) -> list[Path]:
    return list(
        sorted(
            path
            for path in data_files()
            if path.match(f"*/{name}.*.json", case_sensitive=True)
        )
    )


def load_json(name: str, case: int | None = None) -> dict[str, Any]:
    case_part = f"case{case}." if case is not None else ""
    path = DATA_DIR / f"{name}.{case_part}json"
    with open(path, "rb") as fh:
        return orjson.loads(fh.read())


def load_json_all_cases(name: str) -> list[tuple[dict[str, Any], Path]]:
    """Load all json payloads for a given base name (case0, case1, ...)."""
    results = []
    for path in json_data_files(name):
        with open(path, "rb") as fh:
            payload = orjson.loads(fh.read())
            results.append((payload, path))
    return results


def signature_matches(headers: dict[str, str], payload: bytes) -> bool:
    """Recompute X-BAPI-SIGN from the other headers and compare."""
    message = (
        headers["X-BAPI-TIMESTAMP"].encode()
        + headers["X-BAPI-API-KEY"].encode()
        + headers["X-BAPI-RECV-WINDOW"].encode()
        + payload
    )
    expected = hmac.new(
        TEST_API_SECRET.encode(), message, hashlib.sha256
    ).hexdigest()
    return headers["X-BAPI-SIGN"] == expected
