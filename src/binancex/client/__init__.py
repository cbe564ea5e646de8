"""
Client core: query building, signing, dispatch and response resolution.
"""

from .authority import Populate, RequestAuthority
from .query import QueryBuilder, encode_component, render_value
from .response import (
    EnvelopeResolver,
    Failure,
    HeaderTelemetry,
    Response,
    Success,
    decode_envelope,
)
from .signer import Credentials, gen_signature, gen_signature_into

__all__ = [
    "Populate",
    "RequestAuthority",
    "QueryBuilder",
    "encode_component",
    "render_value",
    "EnvelopeResolver",
    "Failure",
    "HeaderTelemetry",
    "Response",
    "Success",
    "decode_envelope",
    "Credentials",
    "gen_signature",
    "gen_signature_into",
]
