"""
Core module for binancex.

Provides logging utilities, the exception taxonomy and small helpers.
"""

from .exceptions import (
    AuthenticationError,
    BinanceError,
    BodyParseError,
    HeaderParseError,
    QuerySerializationError,
    RemoteError,
    TransportError,
)
from .logger import get_logger, setup_logger
from .utils import format_decimal, now_timestamp, timestamp_to_datetime, to_decimal

__all__ = [
    # Logging
    "setup_logger",
    "get_logger",
    # Exceptions
    "BinanceError",
    "QuerySerializationError",
    "AuthenticationError",
    "TransportError",
    "HeaderParseError",
    "BodyParseError",
    "RemoteError",
    # Utilities
    "now_timestamp",
    "timestamp_to_datetime",
    "to_decimal",
    "format_decimal",
]
