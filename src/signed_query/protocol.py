"""
Signature protocol bound to one configuration and clock.
"""

from collections.abc import Mapping
from typing import Any

from .config import Clock, SigningConfig, system_clock
from .sign import sign
from .verify import verify


class SignatureProtocol:
    """
    Signs and verifies tokens with a fixed SigningConfig.

    Holds no mutable state; one instance may be shared across threads.
    """

    def __init__(self, config: SigningConfig, clock: Clock = system_clock):
        self.config = config
        self.clock = clock

    def sign(self, data: Mapping[str, Any]) -> str:
        return sign(data, self.config, self.clock)

    def verify(self, token: str) -> dict[str, Any]:
        return verify(token, self.config, self.clock)

    # Names used by newer clients of the same wire format
    generate_signature = sign
    validate_signature = verify

    def __repr__(self) -> str:
        return f"SignatureProtocol(algorithm={self.config.digest_algorithm!r})"
