"""Default executor configuration.

This module defines the HTTP executor implementation used by the Bybit SDK
when no custom executor is provided.
"""

from typing import Type

from bybit_v5.executors.httpx import HttpxHttpExecutor
from bybit_v5.executors.interface import HttpExecutor

DEFAULT_HTTP_EXECUTOR: Type[HttpExecutor] = HttpxHttpExecutor
