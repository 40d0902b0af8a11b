"""
Canonical query-string serialization.

CRITICAL: signer and verifier must agree byte-for-byte, so this encoding
MUST be deterministic for any key insertion order.

Rules:
- Mapping entries render under bracket paths: `k`, then `parent[k]`
- Rendered `key=value` fragments of a mapping are sorted lexicographically
- Sequence elements render under `parent[]` in their original order
- Names and values are form-encoded (space as `+`); bracket delimiters
  of the path are written literally
- None renders as an empty value, booleans as `true`/`false`
"""

from collections.abc import Mapping
from typing import Any, Literal, Union
from urllib.parse import quote_plus

from .errors import EncodingError

StructuredValue = Union[str, list["StructuredValue"], dict[str, "StructuredValue"]]

ValueKind = Literal["mapping", "sequence", "scalar"]


def value_kind(value: Any) -> ValueKind:
    """Classify a structured value into exactly one of its three shapes."""
    if isinstance(value, Mapping):
        return "mapping"
    if isinstance(value, (list, tuple)):
        return "sequence"
    return "scalar"


def to_query(value: Any, key: str | None = None) -> str:
    """
    Serialize a nested structure to a canonical query string.

    Args:
        value: Mapping, sequence or scalar to encode
        key: Already-escaped bracket path of `value` (None at top level)

    Returns:
        Canonical query string; empty containers yield an empty string

    Raises:
        EncodingError: If a scalar is reached without a key
    """
    kind = value_kind(value)

    if kind == "mapping":
        fragments = [
            to_query(item, _child_path(key, name))
            for name, item in value.items()
        ]
        return _join(sorted(fragments))

    if kind == "sequence":
        return _join(to_query(item, f"{key}[]") for item in value)

    if key is None:
        raise EncodingError(
            "Cannot encode a scalar without a key",
            details={"received": type(value).__name__},
        )
    return f"{key}={quote_plus(scalar_text(value), safe='')}"


def scalar_text(value: Any) -> str:
    """Render a scalar as its natural textual form."""
    if value is None:
        return ""
    if isinstance(value, bool):
        # Must check bool before int (bool is subclass of int in Python)
        return "true" if value else "false"
    return str(value)


def _child_path(parent: str | None, name: Any) -> str:
    escaped = quote_plus(str(name), safe="")
    if parent is None:
        return escaped
    return f"{parent}[{escaped}]"


def _join(fragments) -> str:
    # Empty containers contribute nothing, not a stray separator
    return "&".join(fragment for fragment in fragments if fragment)
