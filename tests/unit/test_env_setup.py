import os

import pytest

from bybit_v5.config import MAINNET_API_URL, TESTNET_API_URL
from bybit_v5.env_setup import setup_environment
from bybit_v5.errors import ValidationError

ENV_VARS = ("BYBIT_API_KEY", "BYBIT_API_SECRET", "BYBIT_API_URL", "BYBIT_RECV_WINDOW")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # isolate from any .env next to the project
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
    # load_dotenv writes to os.environ directly
    for name in ENV_VARS:
        os.environ.pop(name, None)


def test_setup_environment_from_variables(clean_env):
    clean_env.setenv("BYBIT_API_KEY", "KEY")
    clean_env.setenv("BYBIT_API_SECRET", "SECRET")
    clean_env.setenv("BYBIT_API_URL", TESTNET_API_URL)
    clean_env.setenv("BYBIT_RECV_WINDOW", "10000")

    config = setup_environment()

    assert config.api_key == "KEY"
    assert config.api_secret == "SECRET"
    assert config.api_url == TESTNET_API_URL
    assert config.receive_window == "10000"
    assert config.is_authenticated


def test_setup_environment_defaults(clean_env):
    config = setup_environment()

    assert config.api_key is None
    assert config.api_secret is None
    assert config.api_url == MAINNET_API_URL
    assert config.receive_window == "5000"
    assert not config.is_authenticated


def test_setup_environment_reads_dotenv(clean_env, tmp_path):
    tmp_path.joinpath(".env").write_text(
        "BYBIT_API_KEY=FROMFILE\nBYBIT_API_SECRET=FILESECRET\n"
    )

    config = setup_environment()

    assert config.api_key == "FROMFILE"
    assert config.api_secret == "FILESECRET"


def test_setup_environment_bad_window(clean_env):
    clean_env.setenv("BYBIT_RECV_WINDOW", "five seconds")

    with pytest.raises(ValidationError):
        setup_environment()
