"""
Exchange-defined limits and intervals.

Spot order book depth accepts the enumerated sizes plus any other value in
0..65535 (the server truncates anything above 5000). Futures depth only
accepts the enumerated sizes.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, ClassVar

from pydantic_core import core_schema

U16_MAX = 65535


@dataclass(frozen=True)
class DepthLimit:
    """
    Spot order book depth.

    ``from_value`` maps an enumerated size to its named preset and keeps
    any other size as a custom limit.

    Example:
        >>> DepthLimit.from_value(100) is DepthLimit.LIMIT_100
        True
        >>> DepthLimit.from_value(50).is_custom
        True
    """

    value: int

    LIMIT_100: ClassVar["DepthLimit"]
    LIMIT_500: ClassVar["DepthLimit"]
    LIMIT_1000: ClassVar["DepthLimit"]
    LIMIT_5000: ClassVar["DepthLimit"]

    _presets: ClassVar[dict[int, "DepthLimit"]] = {}

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"depth limit must be int, got {type(self.value).__name__}")
        if not 0 <= self.value <= U16_MAX:
            raise ValueError(f"depth limit out of range: {self.value}")

    @classmethod
    def from_value(cls, value: int) -> "DepthLimit":
        if type(value) is int and value in cls._presets:
            return cls._presets[value]
        return cls(value)

    @classmethod
    def default(cls) -> "DepthLimit":
        return cls.LIMIT_100

    @property
    def is_custom(self) -> bool:
        return self.value not in self._presets

    @property
    def name(self) -> str:
        if self.is_custom:
            return f"LIMIT({self.value})"
        return f"LIMIT_{self.value}"

    @property
    def request_weight(self) -> int:
        limit = self.value
        if limit == 0:
            return 0
        if limit <= 100:
            return 1
        if limit <= 500:
            return 5
        if limit <= 1000:
            return 10
        return 50

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def _validate(cls, value: Any) -> "DepthLimit":
        if isinstance(value, DepthLimit):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"depth limit must be an integer, got {value!r}")
        return cls.from_value(value)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda limit: limit.value,
                return_schema=core_schema.int_schema(),
            ),
        )


DepthLimit.LIMIT_100 = DepthLimit(100)
DepthLimit.LIMIT_500 = DepthLimit(500)
DepthLimit.LIMIT_1000 = DepthLimit(1000)
DepthLimit.LIMIT_5000 = DepthLimit(5000)
DepthLimit._presets.update({
    preset.value: preset
    for preset in (
        DepthLimit.LIMIT_100,
        DepthLimit.LIMIT_500,
        DepthLimit.LIMIT_1000,
        DepthLimit.LIMIT_5000,
    )
})


class FuturesDepthLimit(IntEnum):
    """Order book depth accepted by both futures product lines."""

    LIMIT_5 = 5
    LIMIT_10 = 10
    LIMIT_20 = 20
    LIMIT_50 = 50
    LIMIT_100 = 100
    LIMIT_500 = 500
    LIMIT_1000 = 1000

    @classmethod
    def default(cls) -> "FuturesDepthLimit":
        return cls.LIMIT_500

    @property
    def request_weight(self) -> int:
        if self <= 50:
            return 2
        if self == 100:
            return 5
        if self == 500:
            return 10
        return 20


class KlineInterval(str, Enum):
    """Kline/candlestick intervals."""

    s1 = "1s"
    m1 = "1m"
    m3 = "3m"
    m5 = "5m"
    m15 = "15m"
    m30 = "30m"
    h1 = "1h"
    h2 = "2h"
    h4 = "4h"
    h6 = "6h"
    h8 = "8h"
    h12 = "12h"
    d1 = "1d"
    d3 = "3d"
    w1 = "1w"
    M1 = "1M"
