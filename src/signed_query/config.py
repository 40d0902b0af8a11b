"""
Signing configuration for signed-query.

Holds the shared private key and protocol limits. Configuration is
read-only once built; replace the whole object to change or clear the key.

SECURITY: The private key MUST come from a secrets manager or the
environment. Never hardcode or commit it.
"""

from __future__ import annotations

import hashlib
import os
import time
from typing import Callable

from pydantic import BaseModel, Field, SecretStr, field_validator

from .digest import DEFAULT_ALGORITHM
from .errors import ConfigurationError

Clock = Callable[[], int]

DEFAULT_MAX_AGE_SECONDS = 3600


def system_clock() -> int:
    """Current time in integer seconds since the epoch."""
    return int(time.time())


class SigningConfig(BaseModel):
    """
    Private key and limits shared by signer and verifier.
    """

    private_key: SecretStr | None = Field(
        None,
        description="Shared HMAC secret; None or empty means not configured",
    )

    digest_algorithm: str = Field(
        DEFAULT_ALGORITHM,
        description="hashlib algorithm name used for the HMAC",
    )

    max_age_seconds: int = Field(
        DEFAULT_MAX_AGE_SECONDS,
        description="Freshness window, applied both to the past and the future",
    )

    default_currency: str = Field(
        "USD",
        description="Currency used by sign_transaction when none is given",
    )

    @field_validator("digest_algorithm")
    @classmethod
    def validate_digest_algorithm(cls, v: str) -> str:
        v = v.lower()
        allowed = {
            name for name in hashlib.algorithms_guaranteed
            if not name.startswith("shake_")
        }
        if v not in allowed:
            raise ValueError(
                f"Unsupported digest_algorithm '{v}'. "
                f"Allowed values: {sorted(allowed)}"
            )
        return v

    @field_validator("max_age_seconds")
    @classmethod
    def validate_max_age(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_age_seconds must be positive")
        return v

    def require_private_key(self) -> bytes:
        """
        Return the private key bytes.

        Raises:
            ConfigurationError: If no private key has been set
        """
        secret = self.private_key.get_secret_value() if self.private_key else ""
        if not secret:
            raise ConfigurationError("private_key not configured")
        return secret.encode("utf-8")

    @classmethod
    def from_env(cls) -> SigningConfig:
        """
        Load configuration from environment variables.
        """
        return cls(
            private_key=SecretStr(os.getenv("SIGNED_QUERY_PRIVATE_KEY", "")),
            digest_algorithm=os.getenv(
                "SIGNED_QUERY_DIGEST_ALGORITHM", DEFAULT_ALGORITHM
            ),
            max_age_seconds=int(
                os.getenv("SIGNED_QUERY_MAX_AGE_SECONDS", str(DEFAULT_MAX_AGE_SECONDS))
            ),
            default_currency=os.getenv("SIGNED_QUERY_DEFAULT_CURRENCY", "USD"),
        )

    model_config = {
        "frozen": True,
    }
