"""
Fixed-schema signing helpers kept for older callers.

Each helper only builds its payload and delegates to SignatureProtocol.
New code should call SignatureProtocol.sign / verify directly.
"""

import warnings
from collections.abc import Mapping
from typing import Any

import structlog

from .protocol import SignatureProtocol

logger = structlog.get_logger(__name__)


def _deprecated(name: str, replacement: str) -> None:
    logger.warning("deprecated_call", function=name, replacement=replacement)
    warnings.warn(
        f"{name} is deprecated; use {replacement} instead",
        DeprecationWarning,
        stacklevel=3,
    )


def sign_subscription(protocol: SignatureProtocol, plan_code: str, account_code: str | None = None) -> str:
    _deprecated("sign_subscription", "SignatureProtocol.sign")
    return protocol.sign({
        "account": {"account_code": account_code},
        "subscription": {"plan_code": plan_code},
    })


def sign_billing_info(protocol: SignatureProtocol, account_code: str) -> str:
    _deprecated("sign_billing_info", "SignatureProtocol.sign")
    return protocol.sign({"account": {"account_code": account_code}})


def sign_transaction(
    protocol: SignatureProtocol,
    amount_in_cents: int,
    currency: str | None = None,
    account_code: str | None = None,
) -> str:
    """Sign a one-off transaction; currency falls back to the configured default."""
    _deprecated("sign_transaction", "SignatureProtocol.sign")
    return protocol.sign({
        "account": {"account_code": account_code},
        "transaction": {
            "amount_in_cents": amount_in_cents,
            "currency": currency or protocol.config.default_currency,
        },
    })


def verify_subscription(protocol: SignatureProtocol, params: Mapping[str, Any]) -> dict[str, Any]:
    _deprecated("verify_subscription", "SignatureProtocol.verify")
    return protocol.verify(params.get("signature", ""))


def verify_billing_info(protocol: SignatureProtocol, params: Mapping[str, Any]) -> dict[str, Any]:
    _deprecated("verify_billing_info", "SignatureProtocol.verify")
    return protocol.verify(params.get("signature", ""))


def verify_transaction(protocol: SignatureProtocol, params: Mapping[str, Any]) -> dict[str, Any]:
    _deprecated("verify_transaction", "SignatureProtocol.verify")
    return protocol.verify(params.get("signature", ""))
