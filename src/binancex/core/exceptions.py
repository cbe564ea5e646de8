"""
Custom exceptions for binancex.

Exception hierarchy:
    BinanceError (base)
    ├── QuerySerializationError   structured parameter could not be encoded
    ├── AuthenticationError       credentials missing for a keyed/signed call
    ├── TransportError            connect/timeout/network failure
    ├── HeaderParseError          a present rate-limit header is not an integer
    ├── BodyParseError            body matches neither success nor error schema
    └── RemoteError               body decoded as the exchange error object

Nothing in this package retries. Every error reaches the caller.
"""

from typing import Any

from binancex.constants import BINANCE_ERROR_CODES


class BinanceError(Exception):
    """Base exception for all binancex errors."""

    default_message = "Binance client error occurred"

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.default_message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.code:
            parts.append(f"[{self.code}]")
        if self.details:
            parts.append(f"Details: {self.details}")
        return " ".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"details={self.details!r})"
        )


class QuerySerializationError(BinanceError):
    """A query parameter could not be encoded. Raised before any network I/O."""

    default_message = "Failed to serialize query parameters"


class AuthenticationError(BinanceError):
    """API key or secret required for this request is not configured."""

    default_message = "Authentication credentials missing"


class TransportError(BinanceError):
    """Connection, timeout or other network failure."""

    default_message = "HTTP transport failed"


class HeaderParseError(BinanceError):
    """A rate-limit telemetry header is present but not a valid integer."""

    default_message = "Failed to parse response header"

    def __init__(
        self,
        message: str | None = None,
        header: str | None = None,
        value: str | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)
        self.header = header
        self.value = value


class BodyParseError(BinanceError):
    """Response body matches neither the success nor the error schema."""

    default_message = "Failed to parse response body"

    def __init__(
        self,
        message: str | None = None,
        status: int | None = None,
        body: bytes | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)
        self.status = status
        self.body = body


class RemoteError(BinanceError):
    """
    The exchange answered with its error object.

    This is an ordinary outcome, not a local failure: ``response`` holds the
    decoded error payload together with the HTTP status and the rate-limit
    headers, so the caller can apply its own backoff policy.
    """

    default_message = "Exchange returned an error"

    def __init__(self, response: Any, message: str | None = None):
        payload = response.payload
        remote_code = getattr(payload, "code", None)
        remote_msg = getattr(payload, "msg", None)
        if message is None and remote_msg is not None:
            message = f"HTTP {response.status}: {remote_msg}"
        super().__init__(
            message,
            code=str(remote_code) if remote_code is not None else None,
        )
        self.response = response

    @property
    def status(self) -> int:
        return self.response.status

    @property
    def headers(self) -> Any:
        return self.response.headers

    @property
    def payload(self) -> Any:
        return self.response.payload

    @property
    def retry_after(self) -> int | None:
        return self.response.headers.retry_after

    @property
    def error_name(self) -> str | None:
        """Symbolic name of the exchange code, e.g. ``TOO_MANY_REQUESTS`` for -1003."""
        remote_code = getattr(self.payload, "code", None)
        return BINANCE_ERROR_CODES.get(remote_code)
