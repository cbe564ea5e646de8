"""
Binance Spot REST API client.

Market data endpoints are anonymous, historical trades need the API key
header, and every trade/account endpoint is signed.
"""

from typing import Optional

from binancex.client import QueryBuilder, Response
from binancex.constants import SPOT_API, SPOT_ENDPOINTS, SPOT_TESTNET_API
from binancex.core import get_logger
from binancex.schemas import (
    AccountInfo,
    AggregateTrade,
    AveragePrice,
    BookTicker,
    CancelOrderReq,
    CancelOrderRes,
    CancelReplaceOrderError,
    CancelReplaceOrderReq,
    CancelReplaceOrderRes,
    DepthLimit,
    Kline,
    KlineInterval,
    NewOrderReq,
    NewOrderRes,
    OrderBook,
    OrderInfo,
    Pong,
    ServerTime,
    SymbolPrice,
    TestNewOrderRes,
    Trade,
)

from .base import ProductClient, symbols_param

logger = get_logger(__name__)


def _add_optional_ints(query: QueryBuilder, **params: Optional[int]) -> None:
    for key, value in params.items():
        if value is not None:
            query.add_param_integer(key, value)


class BinanceSpot(ProductClient):
    """
    Binance Spot REST API client.

    Every method returns a ``Response`` carrying the payload, the HTTP status
    and the rate-limit headers.

    Example:
        >>> async with BinanceSpot() as spot:
        ...     resp = await spot.get_depth("BTCUSDT")
        ...     print(resp.payload.bids[0], resp.headers.used_weight_1m)

        >>> # With authentication
        >>> async with BinanceSpot.signed("api_key", "secret_key") as spot:
        ...     account = await spot.get_account_info()
    """

    HOST = SPOT_API
    TESTNET_HOST = SPOT_TESTNET_API

    # =========================================================================
    # Public API - System
    # =========================================================================

    async def ping(self) -> Response[Pong]:
        """Test connectivity to the Rest API. Weight(IP): 1"""
        return await self.authority.get(SPOT_ENDPOINTS["PING"], Pong)

    async def get_server_time(self) -> Response[ServerTime]:
        """Get the current server time. Weight(IP): 1"""
        return await self.authority.get(SPOT_ENDPOINTS["SERVER_TIME"], ServerTime)

    # =========================================================================
    # Public API - Market Data
    # =========================================================================

    async def get_depth(
        self,
        symbol: str,
        limit: Optional[DepthLimit] = None,
    ) -> Response[OrderBook]:
        """
        Get order book snapshot.

        Args:
            symbol: Trading pair
            limit: Depth, DepthLimit.LIMIT_100 by default. Weight follows
                ``limit.request_weight``.
        """
        limit = limit or DepthLimit.default()

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbol", symbol)
            query.add_param_integer("limit", limit.value)

        return await self.authority.get_with_query(SPOT_ENDPOINTS["DEPTH"], OrderBook, populate, 40)

    async def get_recent_trades(
        self,
        symbol: str,
        limit: Optional[int] = None,
    ) -> Response[list[Trade]]:
        """Get recent trades. Weight(IP): 1"""

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbol", symbol)
            _add_optional_ints(query, limit=limit)

        return await self.authority.get_with_query(
            SPOT_ENDPOINTS["TRADES"], list[Trade], populate, 40
        )

    async def get_historical_trades(
        self,
        symbol: str,
        from_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Response[list[Trade]]:
        """Get older market trades. Needs the API key header. Weight(IP): 5"""

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbol", symbol)
            _add_optional_ints(query, fromId=from_id, limit=limit)

        return await self.authority.get_keyed(
            SPOT_ENDPOINTS["HISTORICAL_TRADES"], list[Trade], populate, 70
        )

    async def get_aggregate_trades(
        self,
        symbol: str,
        from_id: Optional[int] = None,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Response[list[AggregateTrade]]:
        """
        Get compressed, aggregate trades.

        Trades that fill at the same time, from the same order, with the
        same price have their quantity aggregated. Weight(IP): 1
        """

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbol", symbol)
            _add_optional_ints(
                query, fromId=from_id, startTime=start_time, endTime=end_time, limit=limit
            )

        return await self.authority.get_with_query(
            SPOT_ENDPOINTS["AGG_TRADES"], list[AggregateTrade], populate, 128
        )

    async def get_klines(
        self,
        symbol: str,
        interval: KlineInterval,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Response[list[Kline]]:
        """
        Kline/candlestick bars for a symbol.

        Klines are uniquely identified by their open time. Without
        start_time and end_time the most recent klines are returned.
        """

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbol", symbol)
            query.add_param_str("interval", interval)
            _add_optional_ints(query, startTime=start_time, endTime=end_time, limit=limit)

        return await self.authority.get_with_query(
            SPOT_ENDPOINTS["KLINES"], list[Kline], populate, 128
        )

    async def get_average_price(self, symbol: str) -> Response[AveragePrice]:
        """Current average price for a symbol. Weight(IP): 1"""

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbol", symbol)

        return await self.authority.get_with_query(
            SPOT_ENDPOINTS["AVG_PRICE"], AveragePrice, populate, 32
        )

    async def get_latest_price(self, symbol: str) -> Response[SymbolPrice]:
        """Latest price for a symbol. Weight(IP): 1"""

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbol", symbol)

        return await self.authority.get_with_query(
            SPOT_ENDPOINTS["TICKER_PRICE"], SymbolPrice, populate, 32
        )

    async def get_latest_prices(
        self,
        symbols: Optional[list[str]] = None,
    ) -> Response[list[SymbolPrice]]:
        """Latest prices for the given symbols, or for all symbols. Weight(IP): 2 / 4"""
        if not symbols:
            return await self.authority.get(SPOT_ENDPOINTS["TICKER_PRICE"], list[SymbolPrice])

        value = symbols_param(symbols)

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbols", value)

        return await self.authority.get_with_query(
            SPOT_ENDPOINTS["TICKER_PRICE"], list[SymbolPrice], populate, len(value) * 3 + 16
        )

    async def get_book_ticker(self, symbol: str) -> Response[BookTicker]:
        """Best price/qty on the order book for a symbol. Weight(IP): 1"""

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbol", symbol)

        return await self.authority.get_with_query(
            SPOT_ENDPOINTS["TICKER_BOOK"], BookTicker, populate, 32
        )

    async def get_book_tickers(
        self,
        symbols: Optional[list[str]] = None,
    ) -> Response[list[BookTicker]]:
        """Best price/qty for the given symbols, or for all symbols. Weight(IP): 2 / 4"""
        if not symbols:
            return await self.authority.get(SPOT_ENDPOINTS["TICKER_BOOK"], list[BookTicker])

        value = symbols_param(symbols)

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbols", value)

        return await self.authority.get_with_query(
            SPOT_ENDPOINTS["TICKER_BOOK"], list[BookTicker], populate, len(value) * 3 + 16
        )

    # =========================================================================
    # Private API - Trading
    # =========================================================================

    async def test_new_order(self, req: NewOrderReq) -> Response[TestNewOrderRes]:
        """Validate a new order without sending it to the matching engine. Weight: 1"""
        return await self.authority.post_signed_with_query(
            SPOT_ENDPOINTS["ORDER_TEST"], TestNewOrderRes, lambda q: q.add_params_from_data(req), 128
        )

    async def new_order(self, req: NewOrderReq) -> Response[NewOrderRes]:
        """
        Send in a new order.

        Args:
            req: Order parameters, written to the query in field order

        Raises:
            QuerySerializationError: a field could not be encoded
            RemoteError: order rejected by the exchange
        """
        logger.info(f"New order: {req.side.value} {req.order_type.value} {req.symbol}")
        return await self.authority.post_signed_with_query(
            SPOT_ENDPOINTS["ORDER"], NewOrderRes, lambda q: q.add_params_from_data(req), 128
        )

    async def cancel_order(self, req: CancelOrderReq) -> Response[CancelOrderRes]:
        """
        Cancel an active order.

        If both order_id and orig_client_order_id are set, order_id takes
        precedence. Weight(IP): 1
        """
        return await self.authority.delete_signed_with_query(
            SPOT_ENDPOINTS["ORDER"], CancelOrderRes, lambda q: q.add_params_from_data(req), 128
        )

    async def cancel_all_orders(self, symbol: str) -> Response[list[CancelOrderRes]]:
        """Cancel all active orders on a symbol, OCO orders included. Weight(IP): 1"""

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbol", symbol)

        return await self.authority.delete_signed_with_query(
            SPOT_ENDPOINTS["OPEN_ORDERS"], list[CancelOrderRes], populate, 32
        )

    async def get_order_info(
        self,
        symbol: str,
        order_id: Optional[int] = None,
        orig_client_order_id: Optional[str] = None,
    ) -> Response[OrderInfo]:
        """
        Check an order's status. Either order_id or orig_client_order_id must be sent.

        Raises:
            ValueError: neither identifier given
        """
        if order_id is None and orig_client_order_id is None:
            raise ValueError("order_id or orig_client_order_id is required")

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbol", symbol)
            if order_id is not None:
                query.add_param_integer("orderId", order_id)
            if orig_client_order_id is not None:
                query.add_param_str("origClientOrderId", orig_client_order_id)

        return await self.authority.get_signed_with_query(
            SPOT_ENDPOINTS["ORDER"], OrderInfo, populate, 128
        )

    async def cancel_replace_order(
        self,
        req: CancelReplaceOrderReq,
    ) -> Response[CancelReplaceOrderRes]:
        """
        Cancel an existing order and place a new one on the same symbol.

        Raises:
            RemoteError: payload is a CancelReplaceOrderError whose ``data``
                holds the outcome of each leg
        """
        return await self.authority.post_signed_with_query(
            SPOT_ENDPOINTS["ORDER_CANCEL_REPLACE"],
            CancelReplaceOrderRes,
            lambda q: q.add_params_from_data(req),
            128,
            error_type=CancelReplaceOrderError,
        )

    async def get_open_orders(self, symbol: str) -> Response[list[OrderInfo]]:
        """All open orders on a symbol. Weight(IP): 3"""

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbol", symbol)

        return await self.authority.get_signed_with_query(
            SPOT_ENDPOINTS["OPEN_ORDERS"], list[OrderInfo], populate, 32
        )

    async def get_all_open_orders(self) -> Response[list[OrderInfo]]:
        """All open orders on every symbol. Weight(IP): 40"""
        return await self.authority.get_signed(SPOT_ENDPOINTS["OPEN_ORDERS"], list[OrderInfo])

    # =========================================================================
    # Private API - Account
    # =========================================================================

    async def get_account_info(self) -> Response[AccountInfo]:
        """Current account information. Weight(IP): 10"""
        return await self.authority.get_signed(SPOT_ENDPOINTS["ACCOUNT"], AccountInfo)
