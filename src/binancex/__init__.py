"""
binancex - async Binance REST client.

Example:
    >>> from binancex import BinanceSpot
    >>> async with BinanceSpot() as spot:
    ...     resp = await spot.get_server_time()
"""

from .api import BinanceDeliveryFutures, BinancePerpFutures, BinanceSpot, symbols_param
from .client import (
    Credentials,
    EnvelopeResolver,
    HeaderTelemetry,
    QueryBuilder,
    RequestAuthority,
    Response,
)
from .config import ClientConfig, load_config
from .core import (
    AuthenticationError,
    BinanceError,
    BodyParseError,
    HeaderParseError,
    QuerySerializationError,
    RemoteError,
    TransportError,
    setup_logger,
)

__version__ = "0.3.0"

__all__ = [
    "BinanceSpot",
    "BinancePerpFutures",
    "BinanceDeliveryFutures",
    "symbols_param",
    "Credentials",
    "EnvelopeResolver",
    "HeaderTelemetry",
    "QueryBuilder",
    "RequestAuthority",
    "Response",
    "ClientConfig",
    "load_config",
    "BinanceError",
    "QuerySerializationError",
    "AuthenticationError",
    "TransportError",
    "HeaderParseError",
    "BodyParseError",
    "RemoteError",
    "setup_logger",
]
