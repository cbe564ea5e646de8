"""
Utility functions for binancex.

Includes time helpers and exact decimal formatting for query strings.
"""

import time
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation


# =============================================================================
# Time-related functions
# =============================================================================


def timestamp_to_datetime(ts: int, unit: str = "ms") -> datetime:
    """
    Convert timestamp to datetime (UTC).

    Args:
        ts: Timestamp value
        unit: "ms" for milliseconds, "s" for seconds

    Returns:
        UTC datetime object

    Example:
        >>> timestamp_to_datetime(1704067200000)
        datetime.datetime(2024, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if unit == "ms":
        ts = ts / 1000
    return datetime.fromtimestamp(ts, tz=timezone.utc)


def now_timestamp(unit: str = "ms") -> int:
    """
    Get current timestamp.

    Args:
        unit: "ms" for milliseconds, "s" for seconds

    Returns:
        Current timestamp as integer

    Example:
        >>> ts = now_timestamp()  # e.g., 1704067200000
    """
    if unit == "ms":
        return time.time_ns() // 1_000_000
    return int(time.time())


# =============================================================================
# Numeric functions
# =============================================================================


def to_decimal(value: Decimal | int | str) -> Decimal:
    """
    Coerce a value to Decimal without passing through float.

    Raises:
        ValueError: value is a float, a bool, or not a finite number
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or isinstance(value, float):
        raise ValueError(f"refusing lossy decimal conversion of {value!r}")
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except InvalidOperation as e:
            raise ValueError(f"not a decimal number: {value!r}") from e
    else:
        raise ValueError(f"unsupported decimal type: {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"not a finite decimal: {value!r}")
    return result


def format_decimal(value: Decimal) -> str:
    """
    Render a Decimal in positional notation, keeping its scale.

    Example:
        >>> format_decimal(Decimal("0.00100"))
        '0.00100'
        >>> format_decimal(Decimal("1E-7"))
        '0.0000001'
        >>> format_decimal(Decimal("1.5E+3"))
        '1500'
    """
    return format(value, "f")
