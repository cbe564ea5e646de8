"""
Pytest configuration and fixtures for binancex tests.
"""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from binancex.config import ClientConfig

API_KEY = "test_api_key"
SECRET_KEY = "test_api_secret"


# =============================================================================
# Recording Exchange Server
# =============================================================================


@dataclass
class CapturedRequest:
    method: str
    raw_path: str
    headers: dict[str, str]

    @property
    def query(self) -> str:
        return self.raw_path.partition("?")[2]

    @property
    def param_names(self) -> list[str]:
        return [pair.split("=", 1)[0] for pair in self.query.split("&") if pair]

    def param(self, name: str) -> Optional[str]:
        for pair in self.query.split("&"):
            key, _, value = pair.partition("=")
            if key == name:
                return value
        return None


@dataclass
class FakeExchange:
    """
    In-process HTTP server standing in for the exchange.

    Records the undecoded path and query of every request and answers with
    the configured status, body and headers.
    """

    host: str = ""
    requests: list[CapturedRequest] = field(default_factory=list)
    status: int = 200
    body: bytes = b"{}"
    headers: dict[str, str] = field(default_factory=dict)
    delay: float = 0.0

    def reply(self, payload: Any, status: int = 200, headers: Optional[dict] = None) -> None:
        self.body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        self.status = status
        self.headers = headers or {}

    @property
    def last(self) -> CapturedRequest:
        return self.requests[-1]

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(
            CapturedRequest(
                method=request.method,
                raw_path=request.raw_path,
                headers=dict(request.headers),
            )
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        return web.Response(
            status=self.status,
            body=self.body,
            headers=self.headers,
            content_type="application/json",
        )


@pytest_asyncio.fixture
async def exchange():
    """Running FakeExchange; ``exchange.host`` is its base URL."""
    fake = FakeExchange()
    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", fake.handle)
    server = TestServer(app)
    await server.start_server()
    fake.host = f"http://{server.host}:{server.port}"
    yield fake
    await server.close()


# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def anonymous_config(exchange) -> ClientConfig:
    return ClientConfig(host=exchange.host)


@pytest.fixture
def signed_config(exchange) -> ClientConfig:
    return ClientConfig(host=exchange.host, api_key=API_KEY, secret_key=SECRET_KEY)


# =============================================================================
# Sample Payloads
# =============================================================================


@pytest.fixture
def order_book_payload() -> dict:
    return {
        "lastUpdateId": 1027024,
        "bids": [["4.00000000", "431.00000000"]],
        "asks": [["4.00000200", "12.00000000"]],
    }


@pytest.fixture
def cancel_order_payload() -> dict:
    return {
        "symbol": "LTCBTC",
        "origClientOrderId": "myOrder1",
        "orderId": 4,
        "orderListId": -1,
        "clientOrderId": "cancelMyOrder1",
        "price": "2.00000000",
        "origQty": "1.00000000",
        "executedQty": "0.00000000",
        "cummulativeQuoteQty": "0.00000000",
        "status": "CANCELED",
        "timeInForce": "GTC",
        "type": "LIMIT",
        "side": "BUY",
    }
