"""
Client Configuration Model.

Everything a RequestAuthority needs is fixed here at construction time:
host, credentials, the default recvWindow and both HTTP timeouts.
"""

from pydantic import Field, field_validator

from binancex.constants import (
    HTTP_CONNECT_TIMEOUT_MS_DEFAULT,
    HTTP_REQUEST_TIMEOUT_MS_DEFAULT,
    RECV_WINDOW_MS_DEFAULT,
    RECV_WINDOW_MS_MAX,
    SPOT_API,
)

from .base import BaseConfig


class ClientConfig(BaseConfig):
    """
    Binance REST client configuration.

    Example:
        >>> config = ClientConfig(
        ...     api_key="${BINANCE_API_KEY}",
        ...     secret_key="${BINANCE_SECRET_KEY}",
        ...     recv_window=10000,
        ... )
    """

    host: str = Field(
        default=SPOT_API,
        description="Scheme and host, without trailing slash",
    )
    api_key: str = Field(
        default="",
        description="API key sent as X-MBX-APIKEY",
    )
    secret_key: str = Field(
        default="",
        description="HMAC-SHA256 signing key",
    )
    recv_window: int = Field(
        default=RECV_WINDOW_MS_DEFAULT,
        ge=0,
        le=RECV_WINDOW_MS_MAX,
        description="Receive window in milliseconds for signed requests",
    )
    connect_timeout_ms: int = Field(
        default=HTTP_CONNECT_TIMEOUT_MS_DEFAULT,
        gt=0,
        description="TCP connect timeout in milliseconds",
    )
    request_timeout_ms: int = Field(
        default=HTTP_REQUEST_TIMEOUT_MS_DEFAULT,
        gt=0,
        description="Total request timeout in milliseconds",
    )
    strict_headers: bool = Field(
        default=True,
        description="Fail the response when a rate-limit header is malformed",
    )

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Validate host URL and drop trailing slashes."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"host must start with http:// or https://, got {v!r}")
        return v.rstrip("/")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def has_credentials(self) -> bool:
        """Check if both API key and secret are configured."""
        return bool(self.api_key and self.secret_key)

    @property
    def connect_timeout(self) -> float:
        """Connect timeout in seconds."""
        return self.connect_timeout_ms / 1000

    @property
    def request_timeout(self) -> float:
        """Total request timeout in seconds."""
        return self.request_timeout_ms / 1000
