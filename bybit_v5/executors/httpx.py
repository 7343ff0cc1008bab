"""HTTP executor implementation using httpx.

This module provides HTTP request handling using the httpx library, serving as
the default HTTP executor for the Bybit SDK.
"""

from typing import override

import httpx

from bybit_v5.errors import (
    BaseError,
    HttpConnectionError,
    TransportError,
    TransportTimeoutError,
)
from bybit_v5.executors.interface import HttpExecutor, HttpResponse
from bybit_v5.helpers import get_bybit_client

DEFAULT_TIMEOUT_SECONDS: float = 10.0


class HttpxHttpExecutor(HttpExecutor):
    """HTTP executor implementation using httpx.

    Keeps one pooled ``httpx.Client`` for the executor's lifetime.
    """

    def __init__(
        self,
        proxy: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """Initialize the HTTPX HTTP executor.

        Args:
            proxy: Optional proxy URL applied to all requests, e.g.
                ``http://127.0.0.1:8080`` or ``socks5://host:1080``.
            timeout: Request timeout in seconds.

        """
        self.timeout = timeout
        self.client = httpx.Client(proxy=proxy, timeout=timeout)

    @override
    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> HttpResponse:
        """Send a request and return the raw response.

        Raises:
            TransportTimeoutError: If the request times out.
            HttpConnectionError: If there is a connection or network error.
            TransportError: If any other transport-level error occurs.

        """
        try:
            response = self.client.request(
                method,
                url,
                headers={"User-Agent": get_bybit_client(), **headers},
                content=body,
            )
        except BaseError:
            raise
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(
                f"{method} request to {url} timed out", timeout_seconds=self.timeout
            ) from e
        except httpx.NetworkError as e:
            raise HttpConnectionError(
                f"Network error during {method} request to {url}", url=url
            ) from e
        except Exception as e:
            raise TransportError(f"{method} request to {url} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    @override
    def close(self) -> None:
        """Close the underlying httpx client."""
        self.client.close()

    def __del__(self) -> None:
        """Cleanup the httpx client when the executor is destroyed."""
        client = getattr(self, "client", None)
        if client is not None:
            client.close()
