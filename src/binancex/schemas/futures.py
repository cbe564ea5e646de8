"""
Futures wire models.

USDⓈ-M (fapi) and COIN-M (dapi) books differ in shape, so each product
line declares its own flat model.
"""

from pydantic import BaseModel, Field

from .common import WIRE_CONFIG, PriceLevel


class FapiOrderBook(BaseModel):
    """USDⓈ-M perpetual futures order book."""

    model_config = WIRE_CONFIG

    last_update_id: int
    event_time: int = Field(alias="E")
    transaction_time: int = Field(alias="T")
    bids: list[PriceLevel]
    asks: list[PriceLevel]


class DapiOrderBook(BaseModel):
    """COIN-M delivery futures order book."""

    model_config = WIRE_CONFIG

    last_update_id: int
    event_time: int = Field(alias="E")
    transaction_time: int = Field(alias="T")
    symbol: str
    pair: str
    bids: list[PriceLevel]
    asks: list[PriceLevel]
