"""
Tests for product line clients.

Endpoint wiring is checked two ways: with the authority mocked (which call,
which path, which types), and end to end against the in-process server
(which parameters, in which order).
"""

import json
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest

from binancex.api import BinanceDeliveryFutures, BinancePerpFutures, BinanceSpot, symbols_param
from binancex.client.query import QueryBuilder
from binancex.config import ClientConfig
from binancex.constants import (
    DELIVERY_FUTURES_API,
    PERPETUAL_FUTURES_API,
    PERPETUAL_FUTURES_TESTNET_API,
    SPOT_API,
    SPOT_TESTNET_API,
)
from binancex.core.exceptions import RemoteError
from binancex.schemas import (
    CancelOrderReq,
    CancelReplaceMode,
    CancelReplaceOrderError,
    CancelReplaceOrderReq,
    CancelReplaceOrderRes,
    DepthLimit,
    FuturesDepthLimit,
    KlineInterval,
    NewOrderReq,
    NewOrderRes,
    OrderBook,
    OrderSide,
    OrderType,
    Pong,
    TimeInForce,
)

from tests.conftest import API_KEY, SECRET_KEY


def populated_query(populate) -> str:
    query = QueryBuilder("https://example.com", "/p")
    populate(query)
    return query.get_query()


# =============================================================================
# Construction Tests
# =============================================================================


class TestConstruction:
    """Test cases for product client constructors."""

    def test_default_hosts(self):
        assert BinanceSpot().host == SPOT_API
        assert BinancePerpFutures().host == PERPETUAL_FUTURES_API
        assert BinanceDeliveryFutures().host == DELIVERY_FUTURES_API

    def test_signed(self):
        spot = BinanceSpot.signed("key", "secret", recv_window=10000)
        assert spot.host == SPOT_API
        assert spot.authority.credentials.api_key == "key"
        assert spot.authority.recv_window == 10000

    def test_testnet(self):
        assert BinanceSpot.testnet("k", "s").host == SPOT_TESTNET_API
        assert BinancePerpFutures.testnet().host == PERPETUAL_FUTURES_TESTNET_API

    def test_host_option_overrides_default(self):
        spot = BinanceSpot.signed("key", "secret", host="http://localhost:8080")
        assert spot.host == "http://localhost:8080"
        assert BinancePerpFutures.testnet(host="http://localhost:9000").host == "http://localhost:9000"

    def test_with_host(self):
        assert BinanceSpot.with_host("http://localhost:8080").host == "http://localhost:8080"

    def test_from_config_applies_product_host(self):
        config = ClientConfig(api_key="k", secret_key="s")
        assert BinancePerpFutures.from_config(config).host == PERPETUAL_FUTURES_API

    def test_from_config_keeps_explicit_host(self):
        config = ClientConfig(host="http://localhost:9000")
        assert BinancePerpFutures.from_config(config).host == "http://localhost:9000"

    def test_symbols_param(self):
        assert symbols_param(["BTCUSDT", "ETHUSDT"]) == '["BTCUSDT","ETHUSDT"]'
        assert symbols_param(["BNBBTC"]) == '["BNBBTC"]'


# =============================================================================
# Spot Market Tests (mocked authority)
# =============================================================================


class TestSpotMarket:
    """Test cases for spot market data endpoints."""

    @pytest.fixture
    def spot(self):
        return BinanceSpot()

    @pytest.mark.asyncio
    async def test_ping(self, spot):
        with patch.object(spot.authority, "get", new_callable=AsyncMock) as mock_get:
            await spot.ping()
            mock_get.assert_called_once_with("/api/v3/ping", Pong)

    @pytest.mark.asyncio
    async def test_depth_default_limit(self, spot):
        with patch.object(spot.authority, "get_with_query", new_callable=AsyncMock) as mock:
            await spot.get_depth("BTCUSDT")

            path, success_type, populate, _ = mock.call_args.args
            assert path == "/api/v3/depth"
            assert success_type is OrderBook
            assert populated_query(populate) == "symbol=BTCUSDT&limit=100"

    @pytest.mark.asyncio
    async def test_depth_custom_limit(self, spot):
        with patch.object(spot.authority, "get_with_query", new_callable=AsyncMock) as mock:
            await spot.get_depth("BTCUSDT", DepthLimit.from_value(50))
            populate = mock.call_args.args[2]
            assert populated_query(populate) == "symbol=BTCUSDT&limit=50"

    @pytest.mark.asyncio
    async def test_klines(self, spot):
        with patch.object(spot.authority, "get_with_query", new_callable=AsyncMock) as mock:
            await spot.get_klines("BTCUSDT", KlineInterval.h1, start_time=1, limit=10)
            populate = mock.call_args.args[2]
            assert populated_query(populate) == "symbol=BTCUSDT&interval=1h&startTime=1&limit=10"

    @pytest.mark.asyncio
    async def test_aggregate_trades_skips_unset(self, spot):
        with patch.object(spot.authority, "get_with_query", new_callable=AsyncMock) as mock:
            await spot.get_aggregate_trades("BTCUSDT", end_time=99)
            populate = mock.call_args.args[2]
            assert populated_query(populate) == "symbol=BTCUSDT&endTime=99"

    @pytest.mark.asyncio
    async def test_historical_trades_keyed(self, spot):
        with patch.object(spot.authority, "get_keyed", new_callable=AsyncMock) as mock:
            await spot.get_historical_trades("BTCUSDT", from_id=5)
            assert mock.call_args.args[0] == "/api/v3/historicalTrades"
            assert populated_query(mock.call_args.args[2]) == "symbol=BTCUSDT&fromId=5"

    @pytest.mark.asyncio
    async def test_latest_prices_all_symbols(self, spot):
        with patch.object(spot.authority, "get", new_callable=AsyncMock) as mock:
            await spot.get_latest_prices()
            assert mock.call_args.args[0] == "/api/v3/ticker/price"

    @pytest.mark.asyncio
    async def test_book_tickers_for_symbols(self, spot):
        with patch.object(spot.authority, "get_with_query", new_callable=AsyncMock) as mock:
            await spot.get_book_tickers(["BTCUSDT", "ETHUSDT"])
            assert mock.call_args.args[0] == "/api/v3/ticker/bookTicker"
            assert populated_query(mock.call_args.args[2]) == (
                "symbols=%5B%22BTCUSDT%22%2C%22ETHUSDT%22%5D"
            )


# =============================================================================
# Spot Trade Tests (mocked authority)
# =============================================================================


class TestSpotTrade:
    """Test cases for spot trading endpoints."""

    @pytest.fixture
    def spot(self):
        return BinanceSpot.signed("key", "secret")

    @pytest.fixture
    def limit_order(self):
        return NewOrderReq(
            symbol="BTCUSDT",
            side=OrderSide.BUY,
            order_type=OrderType.LIMIT,
            time_in_force=TimeInForce.GTC,
            quantity=Decimal("0.001"),
            price=Decimal("40000"),
        )

    @pytest.mark.asyncio
    async def test_new_order(self, spot, limit_order):
        with patch.object(spot.authority, "post_signed_with_query", new_callable=AsyncMock) as mock:
            await spot.new_order(limit_order)

            path, success_type, populate, _ = mock.call_args.args
            assert path == "/api/v3/order"
            assert success_type is NewOrderRes
            assert populated_query(populate) == (
                "symbol=BTCUSDT&side=BUY&type=LIMIT&timeInForce=GTC&quantity=0.001&price=40000"
            )

    @pytest.mark.asyncio
    async def test_test_new_order_path(self, spot, limit_order):
        with patch.object(spot.authority, "post_signed_with_query", new_callable=AsyncMock) as mock:
            await spot.test_new_order(limit_order)
            assert mock.call_args.args[0] == "/api/v3/order/test"

    @pytest.mark.asyncio
    async def test_cancel_order(self, spot):
        with patch.object(spot.authority, "delete_signed_with_query", new_callable=AsyncMock) as mock:
            await spot.cancel_order(CancelOrderReq(symbol="BTCUSDT", order_id=12))
            assert mock.call_args.args[0] == "/api/v3/order"
            assert populated_query(mock.call_args.args[2]) == "symbol=BTCUSDT&orderId=12"

    @pytest.mark.asyncio
    async def test_cancel_all_orders(self, spot):
        with patch.object(spot.authority, "delete_signed_with_query", new_callable=AsyncMock) as mock:
            await spot.cancel_all_orders("BTCUSDT")
            assert mock.call_args.args[0] == "/api/v3/openOrders"

    @pytest.mark.asyncio
    async def test_order_info_by_client_id(self, spot):
        with patch.object(spot.authority, "get_signed_with_query", new_callable=AsyncMock) as mock:
            await spot.get_order_info("BTCUSDT", orig_client_order_id="abc")
            assert populated_query(mock.call_args.args[2]) == "symbol=BTCUSDT&origClientOrderId=abc"

    @pytest.mark.asyncio
    async def test_order_info_requires_identifier(self, spot):
        with pytest.raises(ValueError):
            await spot.get_order_info("BTCUSDT")

    @pytest.mark.asyncio
    async def test_cancel_replace_error_type(self, spot):
        req = CancelReplaceOrderReq(
            symbol="BTCUSDT",
            side=OrderSide.SELL,
            order_type=OrderType.MARKET,
            cancel_replace_mode=CancelReplaceMode.STOP_ON_FAILURE,
            quantity=Decimal("1"),
            cancel_order_id=7,
        )
        with patch.object(spot.authority, "post_signed_with_query", new_callable=AsyncMock) as mock:
            await spot.cancel_replace_order(req)

            assert mock.call_args.args[0] == "/api/v3/order/cancelReplace"
            assert mock.call_args.args[1] is CancelReplaceOrderRes
            assert mock.call_args.kwargs["error_type"] is CancelReplaceOrderError
            assert populated_query(mock.call_args.args[2]) == (
                "symbol=BTCUSDT&side=SELL&type=MARKET&cancelReplaceMode=STOP_ON_FAILURE"
                "&quantity=1&cancelOrderId=7"
            )

    @pytest.mark.asyncio
    async def test_open_orders(self, spot):
        with patch.object(spot.authority, "get_signed", new_callable=AsyncMock) as mock:
            await spot.get_all_open_orders()
            assert mock.call_args.args[0] == "/api/v3/openOrders"

    @pytest.mark.asyncio
    async def test_account_info(self, spot):
        with patch.object(spot.authority, "get_signed", new_callable=AsyncMock) as mock:
            await spot.get_account_info()
            assert mock.call_args.args[0] == "/api/v3/account"


# =============================================================================
# Futures Tests (mocked authority)
# =============================================================================


class TestFutures:
    """Test cases for futures market data endpoints."""

    @pytest.mark.asyncio
    async def test_fapi_depth_default(self):
        fapi = BinancePerpFutures()
        with patch.object(fapi.authority, "get_with_query", new_callable=AsyncMock) as mock:
            await fapi.get_depth("BTCUSDT")
            assert mock.call_args.args[0] == "/fapi/v1/depth"
            assert populated_query(mock.call_args.args[2]) == "symbol=BTCUSDT&limit=500"

    @pytest.mark.asyncio
    async def test_dapi_depth(self):
        dapi = BinanceDeliveryFutures()
        with patch.object(dapi.authority, "get_with_query", new_callable=AsyncMock) as mock:
            await dapi.get_depth("BTCUSD_PERP", FuturesDepthLimit.LIMIT_20)
            assert mock.call_args.args[0] == "/dapi/v1/depth"
            assert populated_query(mock.call_args.args[2]) == "symbol=BTCUSD_PERP&limit=20"

    @pytest.mark.asyncio
    async def test_futures_depth_rejects_spot_only_limit(self):
        fapi = BinancePerpFutures()
        with pytest.raises(ValueError):
            await fapi.get_depth("BTCUSDT", 5000)

    @pytest.mark.asyncio
    async def test_server_time_paths(self):
        for client, path in (
            (BinancePerpFutures(), "/fapi/v1/time"),
            (BinanceDeliveryFutures(), "/dapi/v1/time"),
        ):
            with patch.object(client.authority, "get", new_callable=AsyncMock) as mock:
                await client.get_server_time()
                assert mock.call_args.args[0] == path


# =============================================================================
# End-to-end Tests
# =============================================================================


class TestSpotEndToEnd:
    """Spot client against the in-process server."""

    @pytest.mark.asyncio
    async def test_depth(self, exchange, order_book_payload):
        exchange.reply(order_book_payload, headers={"x-mbx-used-weight-1m": "5"})

        async with BinanceSpot.with_host(exchange.host) as spot:
            resp = await spot.get_depth("BTCUSDT", DepthLimit.LIMIT_500)

        assert exchange.last.raw_path == "/api/v3/depth?symbol=BTCUSDT&limit=500"
        assert resp.payload.last_update_id == 1027024
        assert resp.headers.used_weight_1m == 5

    @pytest.mark.asyncio
    async def test_new_order_signed(self, exchange):
        exchange.reply(
            {
                "symbol": "BTCUSDT",
                "orderId": 28,
                "orderListId": -1,
                "clientOrderId": "6gCrw2kRUAF9CvJDGP16IP",
                "transactTime": 1507725176595,
            }
        )
        req = NewOrderReq(
            symbol="BTCUSDT",
            side=OrderSide.SELL,
            order_type=OrderType.MARKET,
            quantity=Decimal("0.50"),
        )

        async with BinanceSpot.with_host(exchange.host, API_KEY, SECRET_KEY) as spot:
            resp = await spot.new_order(req)

        captured = exchange.last
        assert captured.method == "POST"
        assert captured.param_names == [
            "symbol", "side", "type", "quantity", "timestamp", "signature",
        ]
        assert captured.param("quantity") == "0.50"
        assert resp.payload.order_id == 28

    @pytest.mark.asyncio
    async def test_cancel_replace_partial_failure(self, exchange, cancel_order_payload):
        exchange.reply(
            {
                "code": -2021,
                "msg": "Order cancel-replace partially failed.",
                "data": {
                    "cancelResult": "SUCCESS",
                    "newOrderResult": "FAILURE",
                    "cancelResponse": cancel_order_payload,
                    "newOrderResponse": {"code": -2010, "msg": "Account has insufficient balance."},
                },
            },
            status=409,
        )
        req = CancelReplaceOrderReq(
            symbol="LTCBTC",
            side=OrderSide.BUY,
            order_type=OrderType.LIMIT,
            cancel_replace_mode=CancelReplaceMode.ALLOW_FAILURE,
            time_in_force=TimeInForce.GTC,
            quantity=Decimal("1"),
            price=Decimal("2"),
            cancel_order_id=4,
        )

        async with BinanceSpot.with_host(exchange.host, API_KEY, SECRET_KEY) as spot:
            with pytest.raises(RemoteError) as exc_info:
                await spot.cancel_replace_order(req)

        err = exc_info.value
        assert err.status == 409
        assert isinstance(err.payload, CancelReplaceOrderError)
        assert err.payload.data.cancel_response.order_id == 4
        assert err.payload.data.new_order_response.code == -2010

    @pytest.mark.asyncio
    async def test_ping_body(self, exchange):
        exchange.reply(json.dumps({}).encode())

        async with BinanceSpot.with_host(exchange.host) as spot:
            resp = await spot.ping()

        assert resp.payload == Pong()
