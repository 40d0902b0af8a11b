"""
Error codes and exception types for signed-query.

Every failure raised by the protocol carries a typed code so callers can
map it onto their own transport-level rejection.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """
    Failure codes surfaced on every SignedQueryError.
    """
    CONFIGURATION_MISSING = "CONFIGURATION_MISSING"
    SIGNATURE_FORGED = "SIGNATURE_FORGED"
    SIGNATURE_EXPIRED = "SIGNATURE_EXPIRED"
    PAYLOAD_CONFLICT = "PAYLOAD_CONFLICT"
    ENCODING_FAILED = "ENCODING_FAILED"


class SignedQueryError(Exception):
    """
    Base error with typed code and audit details.
    """
    code: ErrorCode = ErrorCode.SIGNATURE_FORGED

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(SignedQueryError):
    """Raised when no private key has been configured."""
    code = ErrorCode.CONFIGURATION_MISSING


class RequestForgery(SignedQueryError):
    """Raised when signature verification fails."""
    code = ErrorCode.SIGNATURE_FORGED


class RequestTooOld(RequestForgery):
    """Raised when the timestamp is outside the freshness window. Prevents replay attacks."""
    code = ErrorCode.SIGNATURE_EXPIRED


class EncodingError(SignedQueryError, ValueError):
    """Raised when a value cannot be rendered into a query string."""
    code = ErrorCode.ENCODING_FAILED


class PayloadConflictError(SignedQueryError, ValueError):
    """Raised when a decoded key path uses one node as both a mapping and a sequence."""
    code = ErrorCode.PAYLOAD_CONFLICT
