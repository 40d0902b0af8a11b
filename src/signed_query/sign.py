"""
Payload signing for signed-query.

Produces `digest|canonical` tokens over a timestamped copy of the data.
The verifier recomputes the digest over the canonical half byte-for-byte,
so the canonical encoding here MUST stay in lockstep with verify.py.
"""

from collections.abc import Mapping
from typing import Any

import structlog

from .canonical import to_query
from .config import Clock, SigningConfig, system_clock
from .digest import compute_digest
from .errors import EncodingError

logger = structlog.get_logger(__name__)

TIMESTAMP_KEY = "timestamp"
TOKEN_SEPARATOR = "|"


def sign(
    data: Mapping[str, Any],
    config: SigningConfig,
    clock: Clock = system_clock,
) -> str:
    """
    Sign a nested mapping and return a signature token.

    The caller's mapping is not mutated; a `timestamp` entry is added to
    the signed copy unless one is already present.

    Args:
        data: Nested mapping of protected values
        config: Signing configuration holding the private key
        clock: Source of the current time in integer seconds

    Returns:
        Token of the form `<hex digest>|<canonical query string>`

    Raises:
        ConfigurationError: If no private key is configured
        EncodingError: If a supplied timestamp is not an integer
    """
    secret = config.require_private_key()

    payload = dict(data)
    if payload.get(TIMESTAMP_KEY) is None:
        payload[TIMESTAMP_KEY] = clock()
    payload[TIMESTAMP_KEY] = _integer_timestamp(payload[TIMESTAMP_KEY])

    unsigned = to_query(payload)
    signed = compute_digest(secret, unsigned, config.digest_algorithm)

    logger.debug(
        "payload_signed",
        fields=sorted(str(key) for key in payload),
        timestamp=payload[TIMESTAMP_KEY],
    )
    return TOKEN_SEPARATOR.join([signed, unsigned])


def _integer_timestamp(value: Any) -> int:
    """Signed timestamps must be whole seconds, or verify would reject them."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    raise EncodingError(
        "Timestamp must be an integer number of seconds",
        details={"received": type(value).__name__},
    )
