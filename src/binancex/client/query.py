"""
Ordered query string builder.

A QueryBuilder owns the URL of exactly one request. Parameters are written
in call order, never sorted or deduplicated, and the builder remembers
where the query begins so the signable part can be sliced off exactly.
"""

from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Callable
from urllib.parse import quote

from pydantic import BaseModel

from binancex.constants import PARAM_RECV_WINDOW, PARAM_SIGNATURE, PARAM_TIMESTAMP
from binancex.core.exceptions import QuerySerializationError
from binancex.core.utils import format_decimal, now_timestamp, to_decimal

from .signer import gen_signature

# RFC 3986 unreserved characters are never escaped; quote() keeps
# letters, digits and "_.-~" by default.
_SAFE = ""


def encode_component(value: str) -> str:
    """Percent-encode a key or value for use inside a query string."""
    return quote(value, safe=_SAFE)


def render_value(value: Any) -> str:
    """
    Render one scalar as query text (not yet percent-encoded).

    Raises:
        QuerySerializationError: value is a container or cannot be rendered exactly
    """
    if isinstance(value, Enum):
        return render_value(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise QuerySerializationError(f"non-finite decimal {value!r}")
        return format_decimal(value)
    if isinstance(value, float):
        raise QuerySerializationError(
            f"float {value!r} is not exact; pass a Decimal or a numeric string",
            details={"value": repr(value)},
        )
    if isinstance(value, str):
        return value
    raise QuerySerializationError(
        f"cannot encode {type(value).__name__} as a query value",
        details={"value": repr(value)},
    )


class QueryBuilder:
    """
    Accumulates ``host + path + ?k=v&k=v...`` for a single request.

    The separator in front of each parameter comes from a two-state
    selector: ``?`` until the first parameter is written, ``&`` afterwards.
    Once a signature is appended the builder is sealed.

    Example:
        >>> q = QueryBuilder("https://api.binance.com", "/api/v3/depth")
        >>> q.add_param_str("symbol", "BTCUSDT")
        >>> q.add_param_integer("limit", 100)
        >>> q.url
        'https://api.binance.com/api/v3/depth?symbol=BTCUSDT&limit=100'
        >>> q.get_query()
        'symbol=BTCUSDT&limit=100'
    """

    def __init__(self, host: str, path: str, capacity: int = 0):
        """
        Args:
            host: Scheme and host, e.g. "https://api.binance.com"
            path: Endpoint path, e.g. "/api/v3/order"
            capacity: Expected final URL length. Only a sizing hint.
        """
        self._prefix = host + path
        self._fragments: list[str] = []
        self._query_start: int | None = None
        self._length = len(self._prefix)
        self._sealed = False
        self.capacity = max(capacity, self._length)
        self._add_separator: Callable[[], None] = self._add_query_separator

    # =========================================================================
    # Separator state
    # =========================================================================

    def _add_query_separator(self) -> None:
        self._push("?")
        self._query_start = self._length
        self._add_separator = self._add_param_separator

    def _add_param_separator(self) -> None:
        self._push("&")

    def _push(self, text: str) -> None:
        if self._sealed:
            raise RuntimeError("query is already signed, nothing can be appended")
        self._fragments.append(text)
        self._length += len(text)

    def _add_pair(self, key: str, rendered: str) -> None:
        self._add_separator()
        self._push(f"{encode_component(key)}={encode_component(rendered)}")

    # =========================================================================
    # Parameters
    # =========================================================================

    def add_params(self, params: str) -> None:
        """Append an already encoded ``a=1&b=2`` chunk verbatim."""
        if not params:
            return
        self._add_separator()
        self._push(params)

    def add_param_str(self, key: str, value: str) -> None:
        if isinstance(value, Enum):
            value = value.value
        if not isinstance(value, str):
            raise QuerySerializationError(
                f"parameter '{key}' expects str, got {type(value).__name__}"
            )
        self._add_pair(key, value)

    def add_param_integer(self, key: str, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise QuerySerializationError(
                f"parameter '{key}' expects int, got {type(value).__name__}"
            )
        self._add_pair(key, str(int(value)))

    def add_param_decimal(self, key: str, value: Decimal | int | str) -> None:
        """Append a fixed-point value in its exact positional text form."""
        try:
            decimal_value = to_decimal(value)
        except ValueError as e:
            raise QuerySerializationError(f"parameter '{key}': {e}") from e
        self._add_pair(key, format_decimal(decimal_value))

    def add_params_from_data(self, data: BaseModel | Mapping[str, Any]) -> None:
        """
        Append every field of a structured object, in declaration order.

        Pydantic models are dumped by alias with ``None`` fields skipped;
        plain mappings keep their insertion order. Nothing is written if any
        field fails to encode.

        Raises:
            QuerySerializationError: a field holds a nested or unsupported value
        """
        if isinstance(data, BaseModel):
            items = data.model_dump(mode="python", by_alias=True, exclude_none=True)
        elif isinstance(data, Mapping):
            items = data
        else:
            raise QuerySerializationError(
                f"cannot serialize {type(data).__name__} into a query"
            )

        rendered: list[tuple[str, str]] = []
        for key, value in items.items():
            if value is None:
                continue
            if not isinstance(key, str):
                raise QuerySerializationError(f"query keys must be str, got {key!r}")
            try:
                rendered.append((key, render_value(value)))
            except QuerySerializationError as e:
                raise QuerySerializationError(
                    f"field '{key}': {e.message}", details=e.details
                ) from e

        for key, text in rendered:
            self._add_pair(key, text)

    # =========================================================================
    # Signed-request parameters
    # =========================================================================

    def add_recv_window(self, recv_window: int) -> None:
        if recv_window > 0:
            self.add_param_integer(PARAM_RECV_WINDOW, recv_window)

    def add_timestamp(self, timestamp_ms: int | None = None) -> None:
        if timestamp_ms is None:
            timestamp_ms = now_timestamp(unit="ms")
        self.add_param_integer(PARAM_TIMESTAMP, timestamp_ms)

    def add_signature(self, signature: str) -> None:
        """Append ``signature`` as the final parameter and seal the query."""
        if self._query_start is None:
            raise RuntimeError("cannot sign a request without query parameters")
        self._push(f"&{PARAM_SIGNATURE}={signature}")
        self._sealed = True

    def gen_and_add_signature(self, secret: bytes | str) -> str:
        """Sign everything after ``?`` written so far, then append the signature."""
        query = self.get_query()
        if query is None:
            raise RuntimeError("cannot sign a request without query parameters")
        signature = gen_signature(query.encode("utf-8"), secret)
        self.add_signature(signature)
        return signature

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def signable_offset(self) -> int | None:
        """Index into ``url`` where the query (after ``?``) begins."""
        return self._query_start

    @property
    def is_signed(self) -> bool:
        return self._sealed

    def get_query(self) -> str | None:
        """Return the query after ``?``, or None if nothing was appended."""
        if self._query_start is None:
            return None
        return self.url[self._query_start:]

    @property
    def url(self) -> str:
        return self._prefix + "".join(self._fragments)

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self.url

    def __repr__(self) -> str:
        # The full URL may carry a signature; show only the path part.
        return f"QueryBuilder(prefix={self._prefix!r}, length={self._length})"
