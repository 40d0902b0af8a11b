"""
signed-query: HMAC-signed, canonically query-encoded payloads.

Lets a server trust nested data (account codes, amounts) that travelled
through an untrusted client as one opaque `digest|canonical` string.
"""

from .canonical import StructuredValue, scalar_text, to_query, value_kind
from .decode import from_query, insert_at_path, parse_key
from .digest import DEFAULT_ALGORITHM, compute_digest, safe_equal
from .config import DEFAULT_MAX_AGE_SECONDS, SigningConfig, system_clock
from .sign import TIMESTAMP_KEY, sign
from .verify import check_freshness, verify
from .protocol import SignatureProtocol
from .errors import (
    ConfigurationError,
    EncodingError,
    ErrorCode,
    PayloadConflictError,
    RequestForgery,
    RequestTooOld,
    SignedQueryError,
)

__version__ = "2.1.0"
__all__ = [
    # Canonical encoding
    "StructuredValue",
    "scalar_text",
    "to_query",
    "value_kind",
    # Decoding
    "from_query",
    "insert_at_path",
    "parse_key",
    # Digest
    "DEFAULT_ALGORITHM",
    "compute_digest",
    "safe_equal",
    # Configuration
    "DEFAULT_MAX_AGE_SECONDS",
    "SigningConfig",
    "system_clock",
    # Protocol
    "TIMESTAMP_KEY",
    "sign",
    "verify",
    "check_freshness",
    "SignatureProtocol",
    # Errors
    "ErrorCode",
    "SignedQueryError",
    "ConfigurationError",
    "RequestForgery",
    "RequestTooOld",
    "EncodingError",
    "PayloadConflictError",
]
