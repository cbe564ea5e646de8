"""
Binance request signing.

Signatures are HMAC-SHA256 digests of the signable part of the query
string, rendered as 64 lowercase hex characters.
"""

import hashlib
import hmac
from dataclasses import dataclass, field

from binancex.constants import API_KEY_HEADER, SIGNATURE_HEX_LEN


def _key_bytes(secret: bytes | str) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return secret


def gen_signature(payload: bytes, secret: bytes | str) -> str:
    """
    Compute the hex HMAC-SHA256 signature of ``payload``.

    Example:
        >>> len(gen_signature(b"symbol=BTCUSDT&timestamp=1", b"secret"))
        64
    """
    return hmac.new(_key_bytes(secret), payload, hashlib.sha256).hexdigest()


def gen_signature_into(payload: bytes, out: bytearray, secret: bytes | str) -> None:
    """
    Write the hex signature of ``payload`` into a caller-owned buffer.

    Raises:
        ValueError: ``out`` is not exactly 64 bytes long
    """
    if len(out) != SIGNATURE_HEX_LEN:
        raise ValueError(
            f"signature buffer must be {SIGNATURE_HEX_LEN} bytes, got {len(out)}"
        )
    digest = hmac.new(_key_bytes(secret), payload, hashlib.sha256).hexdigest()
    out[:] = digest.encode("ascii")


@dataclass(frozen=True)
class Credentials:
    """
    API key and secret for one client.

    Immutable and safe to share between concurrent requests. The secret is
    kept out of ``repr`` so it never ends up in logs or tracebacks.

    Example:
        >>> creds = Credentials("api_key", "api_secret")
        >>> creds.headers()
        {'X-MBX-APIKEY': 'api_key'}
    """

    api_key: str = ""
    secret_key: bytes = field(default=b"", repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.secret_key, str):
            object.__setattr__(self, "secret_key", self.secret_key.encode("utf-8"))

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def has_secret_key(self) -> bool:
        return bool(self.secret_key)

    def headers(self) -> dict[str, str]:
        """Get request headers with API key."""
        return {API_KEY_HEADER: self.api_key}

    def sign(self, payload: bytes) -> str:
        """Sign ``payload`` with this secret."""
        return gen_signature(payload, self.secret_key)
