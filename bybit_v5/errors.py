"""Exception hierarchy for the Bybit V5 SDK.

This module defines the public exception hierarchy for the entire SDK. All exceptions
raised by this library inherit from BaseError.

Exception Hierarchy
-------------------
BaseError
├── ExchangeError - Bybit answered, and the answer is a rejection
│   ├── ExchangeRejected - envelope carried a nonzero retCode
│   └── BadHttpStatus - HTTP status was not 2XX
├── TransportError - Network/protocol-level errors, including unparseable responses
│   └── DeserializationError
│       ├── InvalidEnvelope
│       └── SchemaMismatch (MissingListField, EmptyList, InvalidNumericString,
│           InvalidFieldType, UnknownEnumVariant)
└── ValidationError - Client-side input validation failures
    ├── MissingCredential
    └── MalformedParameters
"""

from typing import Any


class BaseError(Exception):
    """Base exception for all Bybit SDK errors.

    All exceptions raised by this library inherit from this class, allowing users
    to catch all SDK-related errors with a single except clause.

    This exception should not be raised directly. Use one of the specific subclasses
    instead (ExchangeError, TransportError, ValidationError).
    """

    pass


# ============================================================================
# EXCHANGE ERROR
# ============================================================================


class ExchangeError(BaseError):
    """Exception raised when the API server returns an error response.

    ExchangeError indicates that:
    - The network connection succeeded
    - The request was properly formatted and transmitted
    - Bybit processed the request and returned an error response
    """

    pass


class ExchangeRejected(ExchangeError):
    """Raised when the response envelope carries a nonzero ``retCode``.

    The code and message are Bybit's own, unmodified. Typical examples are
    10010 (unmatched IP), 10004 (bad signature) or 110007 (insufficient balance).
    """

    code: int
    message: str

    def __init__(self, code: int, message: str):
        """Initialize an ExchangeRejected error.

        Args:
            code: The ``retCode`` returned by Bybit.
            message: The ``retMsg`` returned by Bybit.

        """
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class BadHttpStatus(ExchangeError):
    """Raised when response status from exchange is not 2XX."""

    status_code: int
    message: str

    def __init__(self, status_code: int, message: str):
        """Initialize a BadHttpStatus error.

        Args:
            status_code: The HTTP status code returned by the server.
            message: Description of the HTTP error.

        """
        self.status_code = status_code
        self.message = message
        super().__init__(message)


## 5xx status errors


class InternalServerError(BadHttpStatus):
    """Raised when the server returns a 500 Internal Server Error."""

    pass


class BadGateway(BadHttpStatus):
    """Raised when the server returns a 502 Bad Gateway error."""

    pass


class ServiceUnavailable(BadHttpStatus):
    """Raised when the server returns a 503 Service Unavailable error."""

    pass


class GatewayTimeout(BadHttpStatus):
    """Raised when the server returns a 504 Gateway Timeout error."""

    pass


## 4xx status errors


class BadRequest(BadHttpStatus):
    """Raised when the server returns a 400 Bad Request error."""

    pass


class NotFound(BadHttpStatus):
    """Raised when the server returns a 404 Not Found error."""

    pass


class RateLimited(BadHttpStatus):
    """Raised when the server returns a 429 Rate Limited error."""

    pass


class Unauthorized(BadHttpStatus):
    """Raised when the server returns a 401 Unauthorized error."""

    pass


class Forbidden(BadHttpStatus):
    """Raised when the server returns a 403 Forbidden error.

    Bybit answers 403 when the caller's IP is rate limited or blocked by the CDN.
    """

    pass


# ============================================================================
# TRANSPORT ERROR
# ============================================================================


class TransportError(BaseError):
    """Exception raised for errors in the process of transporting data to/from the API server.

    TransportError indicates that valid application-level data was not
    successfully exchanged. Common causes include:

    - DNS resolution, TLS and proxy failures
    - Connection timeouts, refused or dropped connections
    - Malformed or unexpected response bodies
    """

    pass


class HttpConnectionError(TransportError):
    """Raised when a connection cannot be established or is lost."""

    def __init__(self, message: str, url: str | None = None):
        """Initialize an HttpConnectionError.

        Args:
            message: Description of the connection error.
            url: The URL that failed to connect, if available.

        """
        self.message = message
        self.url = url
        if url:
            super().__init__(f"{message} (url: {url})")
        else:
            super().__init__(message)


class TransportTimeoutError(TransportError):
    """Raised when a request or connection times out."""

    def __init__(self, message: str, timeout_seconds: float | None = None):
        """Initialize a TransportTimeoutError.

        Args:
            message: Description of the timeout error.
            timeout_seconds: The timeout duration in seconds, if available.

        """
        self.message = message
        self.timeout_seconds = timeout_seconds
        if timeout_seconds:
            super().__init__(f"{message} (timeout: {timeout_seconds}s)")
        else:
            super().__init__(message)


class DeserializationError(TransportError):
    """Raised when response data cannot be deserialized/decoded."""

    def __init__(self, message: str):
        """Initialize a DeserializationError.

        Args:
            message: Description of the deserialization error.

        """
        self.message = message
        super().__init__(message)


class InvalidEnvelope(DeserializationError):
    """Raised when the body is not a ``{retCode, retMsg, result, ...}`` object."""

    pass


class SchemaMismatch(DeserializationError):
    """Raised when ``result`` does not have the shape of the requested record.

    Attributes:
        field: Dotted path of the offending field, e.g. ``list[0].coin[2].equity``.
        reason: Short human readable reason.

    """

    field: str
    reason: str

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class MissingListField(SchemaMismatch):
    """Raised when an expected array wrapper (usually ``result.list``) is absent."""

    def __init__(self, field: str):
        super().__init__(field, "expected a list")


class EmptyList(SchemaMismatch):
    """Raised when an array wrapper that must hold a record is empty."""

    def __init__(self, field: str):
        super().__init__(field, "list is empty")


class InvalidNumericString(SchemaMismatch):
    """Raised when a numeric field holds a string that is not a decimal number."""

    value: str

    def __init__(self, field: str, value: str):
        self.value = value
        super().__init__(field, f"invalid numeric string {value!r}")


class InvalidFieldType(SchemaMismatch):
    """Raised when a numeric field holds something other than string, number or null."""

    value: Any

    def __init__(self, field: str, value: Any):
        self.value = value
        super().__init__(
            field, f"expected string, number or null, got {type(value).__name__}"
        )


class UnknownEnumVariant(SchemaMismatch):
    """Raised when an enumerated field holds a literal outside its closed set."""

    value: Any

    def __init__(self, field: str, value: Any):
        self.value = value
        super().__init__(field, f"unknown variant {value!r}")


# ============================================================================
# VALIDATION ERROR
# ============================================================================


class ValidationError(BaseError):
    """Exception raised for client-side input validation failures.

    ValidationError indicates that:
    - No network request was attempted
    - The error is due to invalid input from the caller
    - The error can be fixed by correcting the input parameters
    """

    pass


class MissingCredential(ValidationError):
    """Raised when a request must be signed but a credential is missing."""

    def __init__(self, credential_type: str = "API key"):
        """Initialize a MissingCredential error.

        Args:
            credential_type: The type of credential that is missing (default: "API key").

        """
        self.credential_type = credential_type
        super().__init__(f"{credential_type} is not set")


class MalformedParameters(ValidationError):
    """Raised when request parameters cannot be canonicalized."""

    def __init__(self, key: Any, reason: str):
        """Initialize a MalformedParameters error.

        Args:
            key: The parameter name that could not be rendered.
            reason: Why it could not be rendered.

        """
        self.key = key
        self.reason = reason
        super().__init__(f"Cannot render parameter {key!r}: {reason}")
