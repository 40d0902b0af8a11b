"""
Signature token verification for signed-query.

Checks the digest first and the freshness window second. A forged token
is rejected before its payload is decoded, so nothing about its embedded
timestamp is ever evaluated.
"""

from typing import Any

import structlog

from .config import Clock, SigningConfig, system_clock
from .decode import from_query
from .digest import compute_digest, safe_equal
from .errors import RequestForgery, RequestTooOld
from .sign import TIMESTAMP_KEY, TOKEN_SEPARATOR

logger = structlog.get_logger(__name__)


def verify(
    token: str,
    config: SigningConfig,
    clock: Clock = system_clock,
) -> dict[str, Any]:
    """
    Verify a signature token and return the signed data.

    Args:
        token: `<hex digest>|<canonical query string>`
        config: Signing configuration holding the private key
        clock: Source of the current time in integer seconds

    Returns:
        Nested dict of the signed values (all leaves are strings)

    Raises:
        ConfigurationError: If no private key is configured
        RequestForgery: If the digest does not match
        RequestTooOld: If the timestamp is outside the freshness window
        PayloadConflictError: If the signed payload addresses one key as
            both a mapping and a sequence
    """
    secret = config.require_private_key()

    provided, _, unsigned = (token or "").partition(TOKEN_SEPARATOR)
    expected = compute_digest(secret, unsigned, config.digest_algorithm)

    if not safe_equal(provided, expected):
        logger.warning("signature_forged", token_length=len(token or ""))
        raise RequestForgery(
            "Signature forged or incorrect private key.",
            details={"algorithm": config.digest_algorithm},
        )

    params = from_query(unsigned)
    check_freshness(params.get(TIMESTAMP_KEY), config.max_age_seconds, clock)
    return params


def check_freshness(timestamp: Any, max_age_seconds: int, clock: Clock = system_clock) -> int:
    """
    Check a signed timestamp against the symmetric freshness window.

    Returns:
        Age of the timestamp in seconds (negative when it lies in the future)

    Raises:
        RequestTooOld: If the timestamp is missing, not an integer, or more
            than `max_age_seconds` away from now in either direction
    """
    now = clock()
    try:
        signed_at = int(timestamp)
    except (TypeError, ValueError):
        logger.warning("signature_expired", reason="invalid_timestamp")
        raise RequestTooOld(
            "Timestamp is missing or not an integer.",
            details={"timestamp": timestamp if isinstance(timestamp, str) else None},
        )

    age = now - signed_at
    if abs(age) > max_age_seconds:
        logger.warning("signature_expired", age=age, max_age=max_age_seconds)
        raise RequestTooOld(
            f"Timestamp is more than {max_age_seconds} seconds off. The server "
            "clock may be incorrect or this may be a replay attack.",
            details={"age": age, "max_age_seconds": max_age_seconds},
        )

    return age
