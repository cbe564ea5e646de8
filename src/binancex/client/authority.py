"""
Request authority: builds, signs and dispatches every REST call.

One RequestAuthority holds the credentials, host, receive window and HTTP
timeouts of a client. All of them are fixed at construction, so a single
instance can serve any number of concurrent requests; each request owns
its own QueryBuilder.
"""

import asyncio
from typing import Any, Callable, Optional

import aiohttp
from yarl import URL

from binancex.config import ClientConfig
from binancex.constants import RECV_WINDOW_MS_DEFAULT, SIGNED_PARAMS_LEN
from binancex.core import get_logger
from binancex.core.exceptions import AuthenticationError, TransportError
from binancex.schemas.common import ApiError

from .query import QueryBuilder
from .response import EnvelopeResolver, Response
from .signer import Credentials

logger = get_logger(__name__)

Populate = Callable[[QueryBuilder], None]


class RequestAuthority:
    """
    Authenticated HTTP core shared by every product line client.

    Example:
        >>> config = ClientConfig(api_key="...", secret_key="...")
        >>> async with RequestAuthority(config) as authority:
        ...     resp = await authority.get("/api/v3/time", ServerTime)
        ...     print(resp.payload.server_time, resp.headers.used_weight_1m)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize RequestAuthority.

        Args:
            config: Client configuration; defaults to anonymous spot access
            session: Existing aiohttp session to use. It is never closed here.
        """
        self.config = config or ClientConfig()
        self._credentials = Credentials(self.config.api_key, self.config.secret_key)
        self._timeout = aiohttp.ClientTimeout(
            total=self.config.request_timeout,
            connect=self.config.connect_timeout,
        )
        self._session = session
        self._owns_session = session is None

    @property
    def host(self) -> str:
        return self.config.host

    @property
    def recv_window(self) -> int:
        return self.config.recv_window

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    # =========================================================================
    # Lifecycle Management
    # =========================================================================

    async def connect(self) -> None:
        """Create HTTP session."""
        if self._owns_session and (self._session is None or self._session.closed):
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            logger.debug(f"Connected to {self.host}")

    async def close(self) -> None:
        """Close HTTP session if this authority created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
            self._session = None
            logger.debug("Session closed")

    async def __aenter__(self) -> "RequestAuthority":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # =========================================================================
    # Anonymous requests
    # =========================================================================

    async def get(
        self,
        path: str,
        success_type: Any,
        error_type: Any = ApiError,
    ) -> Response:
        query = self._new_query(path, 0)
        return await self._dispatch("GET", query, success_type, error_type)

    async def get_with_query(
        self,
        path: str,
        success_type: Any,
        populate: Populate,
        capacity: int = 0,
        error_type: Any = ApiError,
    ) -> Response:
        query = self._new_query(path, capacity)
        populate(query)
        return await self._dispatch("GET", query, success_type, error_type)

    # =========================================================================
    # Keyed requests (API key header, no signature)
    # =========================================================================

    async def get_keyed(
        self,
        path: str,
        success_type: Any,
        populate: Optional[Populate] = None,
        capacity: int = 0,
        error_type: Any = ApiError,
    ) -> Response:
        self._require_api_key()
        query = self._new_query(path, capacity)
        if populate is not None:
            populate(query)
        return await self._dispatch(
            "GET", query, success_type, error_type, headers=self._credentials.headers()
        )

    # =========================================================================
    # Signed requests
    # =========================================================================

    async def get_signed(
        self,
        path: str,
        success_type: Any,
        error_type: Any = ApiError,
    ) -> Response:
        return await self._signed("GET", path, success_type, None, 0, error_type)

    async def get_signed_with_query(
        self,
        path: str,
        success_type: Any,
        populate: Populate,
        capacity: int = 0,
        error_type: Any = ApiError,
    ) -> Response:
        return await self._signed("GET", path, success_type, populate, capacity, error_type)

    async def post_signed_with_query(
        self,
        path: str,
        success_type: Any,
        populate: Populate,
        capacity: int = 0,
        error_type: Any = ApiError,
    ) -> Response:
        return await self._signed("POST", path, success_type, populate, capacity, error_type)

    async def delete_signed_with_query(
        self,
        path: str,
        success_type: Any,
        populate: Populate,
        capacity: int = 0,
        error_type: Any = ApiError,
    ) -> Response:
        return await self._signed("DELETE", path, success_type, populate, capacity, error_type)

    def add_signed_params(self, query: QueryBuilder, timestamp_ms: Optional[int] = None) -> str:
        """
        Append recvWindow, timestamp and signature to a populated query.

        recvWindow is only sent when it differs from the exchange default,
        since the server assumes 5000 ms when it is absent.

        Returns:
            The appended signature
        """
        if self.recv_window != RECV_WINDOW_MS_DEFAULT:
            query.add_recv_window(self.recv_window)
        query.add_timestamp(timestamp_ms)
        return query.gen_and_add_signature(self._credentials.secret_key)

    async def _signed(
        self,
        method: str,
        path: str,
        success_type: Any,
        populate: Optional[Populate],
        capacity: int,
        error_type: Any,
    ) -> Response:
        self._require_api_key()
        if not self._credentials.has_secret_key:
            raise AuthenticationError("API secret required for signed requests")

        query = self._new_query(path, capacity + SIGNED_PARAMS_LEN)
        if populate is not None:
            populate(query)
        self.add_signed_params(query)
        return await self._dispatch(
            method, query, success_type, error_type, headers=self._credentials.headers()
        )

    # =========================================================================
    # Internal Request Methods
    # =========================================================================

    def _require_api_key(self) -> None:
        if not self._credentials.has_api_key:
            raise AuthenticationError("API key required for this request")

    def _new_query(self, path: str, capacity: int) -> QueryBuilder:
        return QueryBuilder(self.host, path, len(self.host) + len(path) + capacity)

    async def _dispatch(
        self,
        method: str,
        query: QueryBuilder,
        success_type: Any,
        error_type: Any,
        headers: Optional[dict[str, str]] = None,
    ) -> Response:
        """
        Send the request and resolve its response.

        Raises:
            TransportError: Connection failed or timed out
            HeaderParseError: A rate-limit header is malformed
            BodyParseError: Body matches neither schema
            RemoteError: Exchange returned its error object
        """
        if self._session is None or self._session.closed:
            await self.connect()

        resolver = EnvelopeResolver(success_type, error_type, self.config.strict_headers)
        # The query is already encoded and signed byte for byte.
        url = URL(query.url, encoded=True)
        path = url.path
        if self._session.closed:
            # A caller-owned session is never reopened here
            raise TransportError(f"{method} {path}: injected session is closed")

        logger.debug(f"Request: {method} {path} (signed={query.is_signed})")

        try:
            async with self._session.request(
                method, url, headers=headers, timeout=self._timeout
            ) as resp:
                telemetry = resolver.parse_headers(resp.headers)
                body = await resp.read()
                status = resp.status
        except aiohttp.ClientError as e:
            logger.error(f"Connection error on {method} {path}: {e}")
            raise TransportError(f"{method} {path} failed: {e}") from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timeout on {method} {path}")
            raise TransportError(f"{method} {path} timed out") from e

        logger.debug(
            f"Response: {method} {path} status={status} "
            f"weight={telemetry.used_weight} weight_1m={telemetry.used_weight_1m}"
        )
        return resolver.finish(body, status, telemetry)
