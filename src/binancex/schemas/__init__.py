"""
Wire models and exchange limit types.
"""

from .common import WIRE_CONFIG, ApiError, Pong, PriceLevel, ServerTime
from .futures import DapiOrderBook, FapiOrderBook
from .limits import DepthLimit, FuturesDepthLimit, KlineInterval
from .spot import (
    AccountInfo,
    AggregateTrade,
    Asset,
    AveragePrice,
    BookTicker,
    CancelOrderReq,
    CancelOrderRes,
    CancelReplaceData,
    CancelReplaceMode,
    CancelReplaceOrderError,
    CancelReplaceOrderReq,
    CancelReplaceOrderRes,
    Fill,
    Kline,
    NewOrderReq,
    NewOrderRes,
    OrderBook,
    OrderInfo,
    OrderResponseType,
    OrderSide,
    OrderStatus,
    OrderType,
    SymbolPrice,
    TestNewOrderRes,
    TimeInForce,
    Trade,
)

__all__ = [
    "WIRE_CONFIG",
    "ApiError",
    "Pong",
    "PriceLevel",
    "ServerTime",
    "DapiOrderBook",
    "FapiOrderBook",
    "DepthLimit",
    "FuturesDepthLimit",
    "KlineInterval",
    "AccountInfo",
    "AggregateTrade",
    "Asset",
    "AveragePrice",
    "BookTicker",
    "CancelOrderReq",
    "CancelOrderRes",
    "CancelReplaceData",
    "CancelReplaceMode",
    "CancelReplaceOrderError",
    "CancelReplaceOrderReq",
    "CancelReplaceOrderRes",
    "Fill",
    "Kline",
    "NewOrderReq",
    "NewOrderRes",
    "OrderBook",
    "OrderInfo",
    "OrderResponseType",
    "OrderSide",
    "OrderStatus",
    "OrderType",
    "SymbolPrice",
    "TestNewOrderRes",
    "TimeInForce",
    "Trade",
]
