"""Environment configuration setup utilities.

This module provides functions for loading environment variables from .env files
and configuring the SDK for local development.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from bybit_v5.config import DEFAULT_RECV_WINDOW, MAINNET_API_URL, BybitConfig

log = logging.getLogger(__name__)


def setup_environment() -> BybitConfig:
    """Load Bybit credentials and host from the environment.

    Loads environment variables from a .env file if present, otherwise falls
    back to system environment variables.

    Variables:
        - BYBIT_API_KEY: The API key
        - BYBIT_API_SECRET: The API secret
        - BYBIT_API_URL: REST host (default: mainnet)
        - BYBIT_RECV_WINDOW: Receive window in milliseconds (default: 5000)

    Returns:
        BybitConfig: Configuration for :class:`~bybit_v5.BybitApiClient`

    Raises:
        ValidationError: If BYBIT_RECV_WINDOW is not a number or BYBIT_API_URL
            ends with '/'

    """
    # Load the .env file if it exists
    env_file_path = Path(".env")
    if env_file_path.exists():
        log.info("Loading environment variables from .env file")
        load_dotenv(env_file_path)
    else:
        log.info(".env file not found. Falling back to Bash Environment variables.")

    api_url = os.environ.get("BYBIT_API_URL", MAINNET_API_URL)
    log.info("Using %s", api_url)

    api_key = os.environ.get("BYBIT_API_KEY") or None
    api_secret = os.environ.get("BYBIT_API_SECRET") or None
    if api_key is None or api_secret is None:
        log.info("BYBIT_API_KEY or BYBIT_API_SECRET not set, public endpoints only")

    return BybitConfig(
        api_key=api_key,
        api_secret=api_secret,
        receive_window=os.environ.get("BYBIT_RECV_WINDOW", DEFAULT_RECV_WINDOW),
        api_url=api_url,
    )
