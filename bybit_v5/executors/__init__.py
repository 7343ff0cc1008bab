from bybit_v5.executors.defaults import DEFAULT_HTTP_EXECUTOR
from bybit_v5.executors.httpx import HttpxHttpExecutor
from bybit_v5.executors.interface import HttpExecutor, HttpResponse
from bybit_v5.executors.requests import RequestsHttpExecutor

__all__ = [
    "HttpExecutor",
    "HttpResponse",
    "HttpxHttpExecutor",
    "RequestsHttpExecutor",
    "DEFAULT_HTTP_EXECUTOR",
]
