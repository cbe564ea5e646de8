"""
Wire models shared by every product line.

Only shapes that are byte-for-byte identical across spot and futures live
here; everything else is declared per product line.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from binancex.core.utils import timestamp_to_datetime

WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


class ApiError(BaseModel):
    """Error object returned by the exchange: ``{"code": -1003, "msg": "..."}``."""

    model_config = WIRE_CONFIG

    code: int
    msg: str


class Pong(BaseModel):
    """Empty ``{}`` answer of the ping endpoints. Any field makes it a non-match."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class ServerTime(BaseModel):
    model_config = WIRE_CONFIG

    server_time: int

    @property
    def as_datetime(self) -> datetime:
        return timestamp_to_datetime(self.server_time)


class PriceLevel(BaseModel):
    """One order book level, sent on the wire as ``["price", "qty"]``."""

    model_config = WIRE_CONFIG

    price: Decimal
    qty: Decimal

    @model_validator(mode="before")
    @classmethod
    def from_pair(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError(f"price level needs 2 items, got {len(data)}")
            return {"price": data[0], "qty": data[1]}
        return data
