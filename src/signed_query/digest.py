"""
Keyed digests over canonical query strings.

Produces lowercase hex HMAC digests. SHA-1 is the default so tokens stay
compatible with existing signers; any algorithm in
hashlib.algorithms_guaranteed may be configured instead.
"""

import hmac

DEFAULT_ALGORITHM = "sha1"


def compute_digest(secret: bytes, message: str, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """
    Compute the HMAC of `message` under `secret`.

    Args:
        secret: Non-empty private key bytes
        message: Canonical query string

    Returns:
        Hex-encoded digest
    """
    return hmac.new(secret, message.encode("utf-8"), algorithm).hexdigest()


def safe_equal(left: str, right: str) -> bool:
    """
    Constant-time string comparison to prevent timing side-channel attacks.
    """
    left = left if isinstance(left, str) else str(left or "")
    right = right if isinstance(right, str) else str(right or "")
    return hmac.compare_digest(left.encode("utf-8"), right.encode("utf-8"))
