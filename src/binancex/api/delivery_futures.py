"""
Binance COIN-M delivery futures REST API client (market data).
"""

from typing import Optional

from binancex.client import QueryBuilder, Response
from binancex.constants import (
    DELIVERY_FUTURES_API,
    DELIVERY_FUTURES_ENDPOINTS,
    DELIVERY_FUTURES_TESTNET_API,
)
from binancex.schemas import DapiOrderBook, FuturesDepthLimit, Pong, ServerTime

from .base import ProductClient


class BinanceDeliveryFutures(ProductClient):
    """
    COIN-M futures client. Symbols look like ``BTCUSD_PERP``.
    """

    HOST = DELIVERY_FUTURES_API
    TESTNET_HOST = DELIVERY_FUTURES_TESTNET_API

    async def ping(self) -> Response[Pong]:
        return await self.authority.get(DELIVERY_FUTURES_ENDPOINTS["PING"], Pong)

    async def get_server_time(self) -> Response[ServerTime]:
        return await self.authority.get(DELIVERY_FUTURES_ENDPOINTS["SERVER_TIME"], ServerTime)

    async def get_depth(
        self,
        symbol: str,
        limit: Optional[FuturesDepthLimit] = None,
    ) -> Response[DapiOrderBook]:
        limit = FuturesDepthLimit(limit) if limit is not None else FuturesDepthLimit.default()

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbol", symbol)
            query.add_param_integer("limit", int(limit))

        return await self.authority.get_with_query(
            DELIVERY_FUTURES_ENDPOINTS["DEPTH"], DapiOrderBook, populate, 34
        )
