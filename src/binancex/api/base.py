"""
Shared construction and lifecycle for product line clients.
"""

from typing import Any, ClassVar, Optional, TypeVar

import aiohttp

from binancex.client import RequestAuthority
from binancex.config import ClientConfig

C = TypeVar("C", bound="ProductClient")


def symbols_param(symbols: list[str]) -> str:
    """
    Render symbols as the JSON-array text Binance expects.

    Example:
        >>> symbols_param(["BTCUSDT", "ETHUSDT"])
        '["BTCUSDT","ETHUSDT"]'
    """
    return "[" + ",".join(f'"{symbol}"' for symbol in symbols) + "]"


class ProductClient:
    """
    One product line (spot, USDⓈ-M, COIN-M) bound to one RequestAuthority.

    Subclasses set ``HOST`` and ``TESTNET_HOST``.
    """

    HOST: ClassVar[str]
    TESTNET_HOST: ClassVar[str]

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        if config is None:
            config = ClientConfig(host=self.HOST)
        self.authority = RequestAuthority(config, session)

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def from_config(
        cls: type[C],
        config: ClientConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> C:
        """Build from a loaded config; the product host applies when none was set."""
        if "host" not in config.model_fields_set:
            config = config.model_copy(update={"host": cls.HOST})
        return cls(config, session)

    @classmethod
    def signed(cls: type[C], api_key: str, secret_key: str, **options: Any) -> C:
        """
        Production host with credentials.

        ``options`` are ClientConfig fields; an explicit ``host`` wins.
        """
        options.setdefault("host", cls.HOST)
        return cls(ClientConfig(api_key=api_key, secret_key=secret_key, **options))

    @classmethod
    def testnet(cls: type[C], api_key: str = "", secret_key: str = "", **options: Any) -> C:
        options.setdefault("host", cls.TESTNET_HOST)
        return cls(ClientConfig(api_key=api_key, secret_key=secret_key, **options))

    @classmethod
    def with_host(
        cls: type[C], host: str, api_key: str = "", secret_key: str = "", **options: Any
    ) -> C:
        return cls(ClientConfig(host=host, api_key=api_key, secret_key=secret_key, **options))

    # =========================================================================
    # Lifecycle Management
    # =========================================================================

    @property
    def host(self) -> str:
        return self.authority.host

    async def connect(self) -> None:
        await self.authority.connect()

    async def close(self) -> None:
        await self.authority.close()

    async def __aenter__(self: C) -> C:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
