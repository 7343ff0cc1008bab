"""Abstract interface for HTTP executors.

This module defines the abstract base class that all HTTP executor
implementations must follow, enabling pluggable transport layers. The SDK hands
an executor fully assembled requests; the executor only moves bytes.
"""

from abc import ABC, abstractmethod


class HttpResponse:
    """Container for HTTP response data.

    Encapsulates the status code, raw body, and headers from an HTTP response.
    The body is left undecoded; :mod:`bybit_v5.decoder` parses it.
    """

    status: int
    body: bytes
    headers: dict[str, str] | None

    __slots__ = ("status", "body", "headers")

    def __init__(
        self,
        *,
        status: int,
        body: bytes = b"",
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize an HTTP response object.

        Args:
            status: The HTTP status code of the response.
            body: The raw response body.
            headers: Optional HTTP response headers as key-value pairs.

        """
        self.status = status
        self.body = body
        self.headers = headers


class HttpExecutor(ABC):
    """Abstract base class for HTTP request executors."""

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> HttpResponse:
        """Send one HTTP request.

        The URL must be sent as given. Bybit checks signatures against the
        literal query string, so implementations must not re-encode it.

        Args:
            method: The HTTP method (``GET`` or ``POST``).
            url: The full URL, including any query string.
            headers: Headers to send.
            body: Optional raw request body.

        Returns:
            An HttpResponse object containing the status, body, and headers.

        """
        ...

    def close(self) -> None:
        """Release any pooled connections."""
        return None
