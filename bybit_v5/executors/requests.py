"""HTTP executor implementation using requests.

This module provides HTTP request handling using the requests library, as an
alternative to the default httpx executor.
"""

from typing import override

import requests

from bybit_v5.errors import (
    BaseError,
    HttpConnectionError,
    TransportError,
    TransportTimeoutError,
)
from bybit_v5.executors.interface import HttpExecutor, HttpResponse
from bybit_v5.helpers import get_bybit_client

DEFAULT_TIMEOUT_SECONDS: float = 10.0


class RequestsHttpExecutor(HttpExecutor):
    """HTTP executor implementation using requests."""

    def __init__(
        self,
        proxy: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """Initialize the RequestsHttpExecutor.

        Args:
            proxy: Optional proxy URL used for both http and https.
            timeout: Request timeout in seconds.

        """
        self.timeout = timeout
        self.session = requests.Session()
        if proxy is not None:
            self.session.proxies = {"http": proxy, "https": proxy}

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
            HttpConnectionError: If the connection to the server fails.
            TransportError: If any other transport-level error occurs.

        """
        try:
            response = self.session.request(
                method,
                url,
                headers={"User-Agent": get_bybit_client(), **headers},
                data=body,
                timeout=self.timeout,
            )
        except BaseError:
            raise
        except requests.Timeout as e:
            raise TransportTimeoutError(
                f"{method} request to {url} timed out", timeout_seconds=self.timeout
            ) from e
        except requests.ConnectionError as e:
            raise HttpConnectionError(f"Failed to connect to {url}", url=url) from e
        except Exception as e:
            raise TransportError(f"{method} request to {url} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    @override
    def close(self) -> None:
        """Close the underlying requests session."""
        self.session.close()
