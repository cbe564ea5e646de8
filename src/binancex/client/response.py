"""
Response resolution.

Binance answers with either the expected payload or its error object, and
the two share no discriminant field. The body is therefore decoded
structurally: whichever schema the JSON satisfies wins. Rate-limit headers
are parsed first, before the body is looked at.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from binancex.constants import HEADER_RETRY_AFTER, HEADER_USED_WEIGHT, HEADER_USED_WEIGHT_1M
from binancex.core import get_logger
from binancex.core.exceptions import BodyParseError, HeaderParseError, RemoteError
from binancex.schemas.common import ApiError

logger = get_logger(__name__)

T = TypeVar("T")
E = TypeVar("E")

U16_MAX = 65535

# Characters of the offending body kept in BodyParseError messages
_BODY_PREVIEW_LEN = 200


# =============================================================================
# Header telemetry
# =============================================================================


def _parse_u16(header: str, value: str) -> int:
    # An optional leading "+" is accepted, any other sign is not
    digits = value[1:] if value.startswith("+") else value
    if not digits or not digits.isascii() or not digits.isdigit():
        raise HeaderParseError(
            f"header '{header}' is not an unsigned integer: {value!r}",
            header=header,
            value=value,
        )
    number = int(digits)
    if number > U16_MAX:
        raise HeaderParseError(
            f"header '{header}' out of range: {value}",
            header=header,
            value=value,
        )
    return number


@dataclass(frozen=True)
class HeaderTelemetry:
    """Rate-limit headers of one response. Each is None when absent."""

    used_weight: Optional[int] = None
    used_weight_1m: Optional[int] = None
    retry_after: Optional[int] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str], strict: bool = True) -> "HeaderTelemetry":
        """
        Parse the three telemetry headers, case-insensitively.

        Args:
            headers: Response header mapping
            strict: Raise on a malformed value instead of dropping it

        Raises:
            HeaderParseError: A present header is not an integer in 0..65535 (strict only)

        Example:
            >>> HeaderTelemetry.from_headers({"Retry-After": "5"}).retry_after
            5
        """
        lowered = {str(k).lower(): v for k, v in headers.items()}
        values = {}
        for attr, header in (
            ("used_weight", HEADER_USED_WEIGHT),
            ("used_weight_1m", HEADER_USED_WEIGHT_1M),
            ("retry_after", HEADER_RETRY_AFTER),
        ):
            raw = lowered.get(header)
            if raw is None:
                values[attr] = None
                continue
            try:
                values[attr] = _parse_u16(header, raw)
            except HeaderParseError as e:
                if strict:
                    raise
                logger.warning(f"Ignoring malformed header: {e.message}")
                values[attr] = None
        return cls(**values)


# =============================================================================
# Envelope
# =============================================================================


@dataclass(frozen=True)
class Success(Generic[T]):
    payload: T


@dataclass(frozen=True)
class Failure(Generic[E]):
    error: E


Envelope = Union[Success[T], Failure[E]]


@dataclass(frozen=True)
class Response(Generic[T]):
    """Decoded payload together with the HTTP status and rate-limit headers."""

    payload: T
    status: int
    headers: HeaderTelemetry


@lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


def _is_success_status(status: Optional[int]) -> bool:
    return status is None or 200 <= status < 300


def decode_envelope(
    body: bytes,
    success_type: Any,
    error_type: Any = ApiError,
    status: Optional[int] = None,
) -> Envelope:
    """
    Decode ``body`` as either the success or the error schema.

    Without a status the success schema is tried first. A 2xx status keeps
    that order; any other status tries the error schema first. Either way
    the other schema is the fallback, so an error object on HTTP 200 or an
    empty ``{}`` on HTTP 400 still decodes.

    Raises:
        BodyParseError: body is not JSON, or matches neither schema

    Example:
        >>> env = decode_envelope(b'{"code":-1003,"msg":"Too much request weight used"}', Pong)
        >>> env.error.code
        -1003
    """
    attempts = [(Success, success_type), (Failure, error_type)]
    if not _is_success_status(status):
        attempts.reverse()

    diagnostics = []
    for wrap, tp in attempts:
        try:
            return wrap(_adapter(tp).validate_json(body))
        except ValidationError as e:
            diagnostics.append(f"{_type_name(tp)}: {e.error_count()} error(s), first: {_first_error(e)}")

    preview = body[:_BODY_PREVIEW_LEN].decode("utf-8", errors="replace")
    raise BodyParseError(
        f"body matches neither {_type_name(success_type)} nor {_type_name(error_type)}: {preview!r}",
        status=status,
        body=body,
        details={"diagnostics": diagnostics},
    )


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)


def _first_error(e: ValidationError) -> str:
    errors = e.errors(include_url=False)
    if not errors:
        return str(e)
    first = errors[0]
    loc = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{loc}: {first['msg']}"


# =============================================================================
# Resolver
# =============================================================================


class EnvelopeResolver(Generic[T, E]):
    """
    Turns one raw HTTP response into ``Response[T]`` or a RemoteError.

    Example:
        >>> resolver = EnvelopeResolver(ServerTime)
        >>> resolver.resolve(b'{"serverTime": 1}', 200, {}).payload.server_time
        1
    """

    def __init__(
        self,
        success_type: Any,
        error_type: Any = ApiError,
        strict_headers: bool = True,
    ):
        self.success_type = success_type
        self.error_type = error_type
        self.strict_headers = strict_headers

    def parse_headers(self, headers: Mapping[str, str]) -> HeaderTelemetry:
        return HeaderTelemetry.from_headers(headers, strict=self.strict_headers)

    def resolve_body(self, body: bytes, status: Optional[int] = None) -> Envelope:
        return decode_envelope(body, self.success_type, self.error_type, status)

    def finish(self, body: bytes, status: int, telemetry: HeaderTelemetry) -> Response[T]:
        """
        Decode the body of a response whose headers are already parsed.

        Raises:
            BodyParseError: body matches neither schema
            RemoteError: body is the exchange error object
        """
        envelope = self.resolve_body(body, status)
        if isinstance(envelope, Failure):
            raise RemoteError(Response(envelope.error, status, telemetry))
        return Response(envelope.payload, status, telemetry)

    def resolve(self, body: bytes, status: int, headers: Mapping[str, str]) -> Response[T]:
        """
        Parse headers, then the body.

        Raises:
            HeaderParseError: a telemetry header is malformed; the body is not inspected
            BodyParseError: body matches neither schema
            RemoteError: body is the exchange error object
        """
        telemetry = self.parse_headers(headers)
        return self.finish(body, status, telemetry)
