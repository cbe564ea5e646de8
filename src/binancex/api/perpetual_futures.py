"""
Binance USDⓈ-M perpetual futures REST API client (market data).
"""

from typing import Optional

from binancex.client import QueryBuilder, Response
from binancex.constants import (
    PERPETUAL_FUTURES_API,
    PERPETUAL_FUTURES_ENDPOINTS,
    PERPETUAL_FUTURES_TESTNET_API,
)
from binancex.schemas import FapiOrderBook, FuturesDepthLimit, Pong, ServerTime

from .base import ProductClient


class BinancePerpFutures(ProductClient):
    """
    USDⓈ-M futures client.

    Example:
        >>> async with BinancePerpFutures() as fapi:
        ...     resp = await fapi.get_depth("BTCUSDT", FuturesDepthLimit.LIMIT_100)
    """

    HOST = PERPETUAL_FUTURES_API
    TESTNET_HOST = PERPETUAL_FUTURES_TESTNET_API

    async def ping(self) -> Response[Pong]:
        return await self.authority.get(PERPETUAL_FUTURES_ENDPOINTS["PING"], Pong)

    async def get_server_time(self) -> Response[ServerTime]:
        return await self.authority.get(PERPETUAL_FUTURES_ENDPOINTS["SERVER_TIME"], ServerTime)

    async def get_depth(
        self,
        symbol: str,
        limit: Optional[FuturesDepthLimit] = None,
    ) -> Response[FapiOrderBook]:
        """
        Get order book snapshot.

        Only the enumerated depths are accepted; LIMIT_500 by default.
        """
        limit = FuturesDepthLimit(limit) if limit is not None else FuturesDepthLimit.default()

        def populate(query: QueryBuilder) -> None:
            query.add_param_str("symbol", symbol)
            query.add_param_integer("limit", int(limit))

        return await self.authority.get_with_query(
            PERPETUAL_FUTURES_ENDPOINTS["DEPTH"], FapiOrderBook, populate, 34
        )
