"""
Spot wire models: market data and trading.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from binancex.core.utils import timestamp_to_datetime

from .common import WIRE_CONFIG, ApiError, PriceLevel


# =============================================================================
# Enums
# =============================================================================


class OrderSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    LIMIT = "LIMIT"
    MARKET = "MARKET"
    STOP_LOSS = "STOP_LOSS"
    STOP_LOSS_LIMIT = "STOP_LOSS_LIMIT"
    TAKE_PROFIT = "TAKE_PROFIT"
    TAKE_PROFIT_LIMIT = "TAKE_PROFIT_LIMIT"
    LIMIT_MAKER = "LIMIT_MAKER"


class TimeInForce(str, Enum):
    GTC = "GTC"  # Good Till Cancel
    IOC = "IOC"  # Immediate Or Cancel
    FOK = "FOK"  # Fill or Kill


class OrderStatus(str, Enum):
    NEW = "NEW"
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    FILLED = "FILLED"
    CANCELED = "CANCELED"
    PENDING_CANCEL = "PENDING_CANCEL"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    EXPIRED_IN_MATCH = "EXPIRED_IN_MATCH"


class OrderResponseType(str, Enum):
    ACK = "ACK"
    RESULT = "RESULT"
    FULL = "FULL"


class CancelReplaceMode(str, Enum):
    STOP_ON_FAILURE = "STOP_ON_FAILURE"
    ALLOW_FAILURE = "ALLOW_FAILURE"


# =============================================================================
# Market data
# =============================================================================


class OrderBook(BaseModel):
    model_config = WIRE_CONFIG

    last_update_id: int
    bids: list[PriceLevel]
    asks: list[PriceLevel]


class Trade(BaseModel):
    model_config = WIRE_CONFIG

    id: int
    price: Decimal
    qty: Decimal
    quote_qty: Decimal
    time: int
    is_buyer_maker: bool
    is_best_match: bool


class AggregateTrade(BaseModel):
    model_config = WIRE_CONFIG

    aggregate_trade_id: int = Field(alias="a")
    price: Decimal = Field(alias="p")
    qty: Decimal = Field(alias="q")
    first_trade_id: int = Field(alias="f")
    last_trade_id: int = Field(alias="l")
    timestamp: int = Field(alias="T")
    is_maker: bool = Field(alias="m")
    is_best_price_match: bool = Field(alias="M")


_KLINE_FIELDS = (
    "open_time",
    "open_price",
    "high_price",
    "low_price",
    "close_price",
    "volume",
    "close_time",
    "quote_asset_volume",
    "number_of_trades",
    "taker_buy_base_asset_volume",
    "taker_buy_quote_asset_volume",
)


class Kline(BaseModel):
    """One candlestick, sent as a positional JSON array."""

    model_config = WIRE_CONFIG

    open_time: int
    open_price: Decimal
    high_price: Decimal
    low_price: Decimal
    close_price: Decimal
    volume: Decimal
    close_time: int
    quote_asset_volume: Decimal
    number_of_trades: int
    taker_buy_base_asset_volume: Decimal
    taker_buy_quote_asset_volume: Decimal

    @model_validator(mode="before")
    @classmethod
    def from_row(cls, data: Any) -> Any:
        # Trailing "ignore" column is dropped.
        if isinstance(data, (list, tuple)):
            if len(data) < len(_KLINE_FIELDS):
                raise ValueError(f"kline row needs {len(_KLINE_FIELDS)} items, got {len(data)}")
            return dict(zip(_KLINE_FIELDS, data))
        return data

    @property
    def opened_at(self) -> datetime:
        return timestamp_to_datetime(self.open_time)

    @property
    def closed_at(self) -> datetime:
        return timestamp_to_datetime(self.close_time)


class AveragePrice(BaseModel):
    model_config = WIRE_CONFIG

    mins: int
    price: Decimal


class SymbolPrice(BaseModel):
    model_config = WIRE_CONFIG

    symbol: str
    price: Decimal


class BookTicker(BaseModel):
    model_config = WIRE_CONFIG

    symbol: str
    bid_price: Decimal
    bid_qty: Decimal
    ask_price: Decimal
    ask_qty: Decimal


# =============================================================================
# Trade requests (field order is the query order)
# =============================================================================


_LIMIT_TYPES = {
    OrderType.LIMIT,
    OrderType.STOP_LOSS_LIMIT,
    OrderType.TAKE_PROFIT_LIMIT,
}


def _check_order_fields(order_type: OrderType, time_in_force, quantity, quote_order_qty, price) -> None:
    if order_type in _LIMIT_TYPES:
        if time_in_force is None or quantity is None or price is None:
            raise ValueError(f"{order_type.value} order needs time_in_force, quantity and price")
    elif order_type == OrderType.MARKET:
        if quantity is None and quote_order_qty is None:
            raise ValueError("MARKET order needs quantity or quote_order_qty")
    elif order_type == OrderType.LIMIT_MAKER:
        if quantity is None or price is None:
            raise ValueError("LIMIT_MAKER order needs quantity and price")


class NewOrderReq(BaseModel):
    """
    Parameters of a new spot order.

    Example:
        >>> NewOrderReq(
        ...     symbol="BTCUSDT",
        ...     side=OrderSide.BUY,
        ...     order_type=OrderType.LIMIT,
        ...     time_in_force=TimeInForce.GTC,
        ...     quantity=Decimal("0.001"),
        ...     price=Decimal("40000"),
        ... )
    """

    model_config = WIRE_CONFIG

    symbol: str
    side: OrderSide
    order_type: OrderType = Field(alias="type")
    time_in_force: Optional[TimeInForce] = None
    quantity: Optional[Decimal] = None
    quote_order_qty: Optional[Decimal] = None
    price: Optional[Decimal] = None
    stop_price: Optional[Decimal] = None
    trailing_delta: Optional[int] = None
    iceberg_qty: Optional[Decimal] = None
    new_client_order_id: Optional[str] = None
    strategy_id: Optional[int] = None
    # The value cannot be less than 1000000.
    strategy_type: Optional[int] = Field(default=None, ge=1000000)
    new_order_resp_type: Optional[OrderResponseType] = None

    @model_validator(mode="after")
    def check_type_fields(self) -> "NewOrderReq":
        _check_order_fields(
            self.order_type, self.time_in_force, self.quantity, self.quote_order_qty, self.price
        )
        return self


class CancelOrderReq(BaseModel):
    """Either order_id or orig_client_order_id must be sent."""

    model_config = WIRE_CONFIG

    symbol: str
    order_id: Optional[int] = None
    orig_client_order_id: Optional[str] = None
    new_client_order_id: Optional[str] = None

    @model_validator(mode="after")
    def check_order_reference(self) -> "CancelOrderReq":
        if self.order_id is None and self.orig_client_order_id is None:
            raise ValueError("order_id or orig_client_order_id is required")
        return self


class CancelReplaceOrderReq(BaseModel):
    model_config = WIRE_CONFIG

    symbol: str
    side: OrderSide
    order_type: OrderType = Field(alias="type")
    cancel_replace_mode: CancelReplaceMode
    time_in_force: Optional[TimeInForce] = None
    quantity: Optional[Decimal] = None
    quote_order_qty: Optional[Decimal] = None
    price: Optional[Decimal] = None
    cancel_new_client_order_id: Optional[str] = None
    # If both are provided, cancel_order_id takes precedence.
    cancel_orig_client_order_id: Optional[str] = None
    cancel_order_id: Optional[int] = None
    new_client_order_id: Optional[str] = None
    strategy_id: Optional[int] = None
    strategy_type: Optional[int] = Field(default=None, ge=1000000)
    stop_price: Optional[Decimal] = None
    trailing_delta: Optional[int] = None
    iceberg_qty: Optional[Decimal] = None
    new_order_resp_type: Optional[OrderResponseType] = None

    @model_validator(mode="after")
    def check_fields(self) -> "CancelReplaceOrderReq":
        if self.cancel_order_id is None and self.cancel_orig_client_order_id is None:
            raise ValueError("cancel_order_id or cancel_orig_client_order_id is required")
        _check_order_fields(
            self.order_type, self.time_in_force, self.quantity, self.quote_order_qty, self.price
        )
        return self


# =============================================================================
# Trade responses
# =============================================================================


class TestNewOrderRes(BaseModel):
    """Empty ``{}`` answer of the test order endpoint."""

    __test__ = False  # not a pytest test class

    model_config = ConfigDict(frozen=True, extra="forbid")


class Fill(BaseModel):
    model_config = WIRE_CONFIG

    price: Decimal
    qty: Decimal
    commission: Decimal
    commission_asset: str
    trade_id: Optional[int] = None


class NewOrderRes(BaseModel):
    """
    New order acknowledgement.

    ACK responses carry only the identifiers; RESULT adds the execution
    fields and FULL adds ``fills``.
    """

    model_config = WIRE_CONFIG

    symbol: str
    order_id: int
    order_list_id: int
    client_order_id: str
    transact_time: int
    price: Optional[Decimal] = None
    orig_qty: Optional[Decimal] = None
    executed_qty: Optional[Decimal] = None
    cummulative_quote_qty: Optional[Decimal] = None
    status: Optional[OrderStatus] = None
    time_in_force: Optional[TimeInForce] = None
    order_type: Optional[OrderType] = Field(default=None, alias="type")
    side: Optional[OrderSide] = None
    fills: list[Fill] = Field(default_factory=list)


class CancelOrderRes(BaseModel):
    model_config = WIRE_CONFIG

    symbol: str
    orig_client_order_id: str
    order_id: int
    # Unless part of an OCO, the value will always be -1.
    order_list_id: int
    client_order_id: str
    price: Decimal
    orig_qty: Decimal
    executed_qty: Decimal
    cummulative_quote_qty: Decimal
    status: OrderStatus
    time_in_force: TimeInForce
    order_type: OrderType = Field(alias="type")
    side: OrderSide


class OrderInfo(BaseModel):
    model_config = WIRE_CONFIG

    symbol: str
    order_id: int
    order_list_id: int
    client_order_id: str
    price: Decimal
    orig_qty: Decimal
    executed_qty: Decimal
    # Negative for some historical orders: data not available.
    cummulative_quote_qty: Decimal
    status: OrderStatus
    time_in_force: TimeInForce
    order_type: OrderType = Field(alias="type")
    side: OrderSide
    stop_price: Decimal
    iceberg_qty: Decimal
    time: int
    update_time: int
    is_working: bool
    orig_quote_order_qty: Decimal


class CancelReplaceOrderRes(BaseModel):
    model_config = WIRE_CONFIG

    cancel_result: str
    new_order_result: str
    cancel_response: CancelOrderRes
    new_order_response: NewOrderRes


class CancelReplaceData(BaseModel):
    """Per-leg outcome of a failed cancel-replace. Each leg succeeded or failed on its own."""

    model_config = WIRE_CONFIG

    cancel_result: str
    new_order_result: str
    cancel_response: CancelOrderRes | ApiError = Field(union_mode="left_to_right")
    new_order_response: Optional[NewOrderRes | ApiError] = None


class CancelReplaceOrderError(BaseModel):
    """
    Error object of the cancel-replace endpoint.

    ``data`` is only sent for the partial-failure codes (-2021, -2022);
    plain errors such as rate limiting come without it.
    """

    model_config = WIRE_CONFIG

    code: int
    msg: str
    data: Optional[CancelReplaceData] = None


class Asset(BaseModel):
    model_config = WIRE_CONFIG

    asset: str
    free: Decimal
    locked: Decimal


class AccountInfo(BaseModel):
    model_config = WIRE_CONFIG

    maker_commission: int
    taker_commission: int
    buyer_commission: int
    seller_commission: int
    can_trade: bool
    can_withdraw: bool
    can_deposit: bool
    brokered: bool = False
    update_time: int
    account_type: str
    balances: list[Asset]
    permissions: list[str]
