"""
Nested query-string decoding.

Rebuilds the mapping/sequence tree that canonical.to_query flattened.
All leaf values come back as strings.
"""

import re
from typing import Any, Optional
from urllib.parse import unquote_plus

from .errors import PayloadConflictError

# A path component of None stands for an empty `[]` group (sequence append).
PathComponent = Optional[str]

_KEY_PATTERN = re.compile(r"\A([^\[\]]+)((?:\[[^\[\]]*\])*)\Z")
_GROUP_PATTERN = re.compile(r"\[([^\[\]]*)\]")


def from_query(query: str) -> dict[str, Any]:
    """
    Parse a flat query string back into a nested structure.

    Args:
        query: `&`-joined `key=value` fragments using bracket path notation

    Returns:
        Nested dict; `[]` groups produce lists

    Raises:
        PayloadConflictError: If one node is addressed as both mapping and sequence
    """
    tree: dict[str, Any] = {}

    for fragment in query.split("&"):
        if not fragment:
            continue
        raw_key, _, raw_value = fragment.partition("=")
        path = _decode_key(raw_key)
        if not path[0]:
            continue
        insert_at_path(tree, path, unquote_plus(raw_value))

    return tree


def _decode_key(raw_key: str) -> list[PathComponent]:
    # Literal brackets delimit the path, so escaped brackets stay inside names.
    if "[" in raw_key:
        return [
            unquote_plus(component) if component is not None else None
            for component in parse_key(raw_key)
        ]
    # Fully escaped keys (`a%5Bb%5D`) carry the path inside the escaping.
    return parse_key(unquote_plus(raw_key))


def parse_key(key: str) -> list[PathComponent]:
    """
    Split `name[a][][b]` into `["name", "a", None, "b"]`.

    A key that does not follow bracket notation is a single literal name.
    """
    match = _KEY_PATTERN.match(key)
    if match is None:
        return [key]

    path: list[PathComponent] = [match.group(1)]
    for group in _GROUP_PATTERN.findall(match.group(2)):
        path.append(group if group else None)
    return path


def insert_at_path(node: dict[str, Any], path: list[PathComponent], value: str) -> None:
    """
    Store `value` in `node` at `path`, creating containers on the way.

    Collision policy:
    - a scalar is overwritten by whatever is written last at its node
    - a mapping is never silently turned into a sequence (or back);
      that raises PayloadConflictError
    """
    name, rest = path[0], path[1:]

    if not rest:
        node[name] = value
        return

    if rest[0] is None:
        _insert_into_sequence(_container(node, name, list), rest[1:], value, path)
    else:
        insert_at_path(_container(node, name, dict), rest, value)


def _insert_into_sequence(
    sequence: list[Any],
    tail: list[PathComponent],
    value: str,
    full_path: list[PathComponent],
) -> None:
    if not tail:
        sequence.append(value)
        return

    if tail[0] is None:
        # Sequences of sequences cannot be told apart once flattened;
        # consecutive elements land in the same inner list.
        if sequence and isinstance(sequence[-1], list):
            inner = sequence[-1]
        else:
            inner = []
            sequence.append(inner)
        _insert_into_sequence(inner, tail[1:], value, full_path)
        return

    # Array of mappings: keep filling the last element until a key repeats.
    last = sequence[-1] if sequence else None
    if isinstance(last, dict) and not _holds_path(last, tail):
        target = last
    else:
        target = {}
        sequence.append(target)
    insert_at_path(target, tail, value)


def _container(node: dict[str, Any], name: str, kind: type) -> Any:
    existing = node.get(name)

    if existing is None or isinstance(existing, str):
        created = kind()
        node[name] = created
        return created

    if not isinstance(existing, kind):
        raise PayloadConflictError(
            f"Key {name!r} is used as both a mapping and a sequence",
            details={
                "key": name,
                "expected": kind.__name__,
                "actual": type(existing).__name__,
            },
        )

    return existing


def _holds_path(mapping: dict[str, Any], path: list[PathComponent]) -> bool:
    """Whether every component of `path` already exists under `mapping`."""
    current: Any = mapping
    for component in path:
        if component is None:
            return False
        if not isinstance(current, dict) or component not in current:
            return False
        current = current[component]
    return True
