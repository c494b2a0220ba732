"""Data reference resolution.

A reference is a string value starting with ``$`` whose remainder is a dotted
path into the data bag, e.g. ``"$customer.id"``. Lookups never raise: a
missing key or a ``None`` anywhere along the path resolves to ``None``.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from ..constants import REFERENCE_PREFIX

__all__ = (
    "get_nested_value",
    "is_reference",
    "resolve_value",
)


def _lookup(current: Any, key: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(key)
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        if key.isascii() and key.isdigit():
            index = int(key)
            return current[index] if index < len(current) else None
        return None
    # Private and dunder attributes are never reachable from a path
    if key.startswith("_"):
        return None
    return getattr(current, key, None)


def get_nested_value(data: Any, path: str) -> Any:
    """Resolve a dotted path against `data`.

    Mappings are indexed by key, lists and tuples by integer segment, any
    other object by attribute. Attribute segments starting with
    ``_`` resolve to ``None``.

    Examples:
        >>> get_nested_value({"a": {"b": {"c": "x"}}}, "a.b.c")
        'x'
        >>> get_nested_value({"a": {"b": {}}}, "a.b.c") is None
        True
    """
    if data is None:
        return None
    if "." not in path:
        return _lookup(data, path)
    current = data
    for key in path.split("."):
        if current is None:
            return None
        current = _lookup(current, key)
    return current


def is_reference(value: Any) -> bool:
    """Return True if `value` is a ``$``-prefixed data reference."""
    return isinstance(value, str) and value.startswith(REFERENCE_PREFIX)


def resolve_value(value: Any, data: Any) -> Any:
    """Resolve `value` against `data` when it is a reference, else return it unchanged."""
    if is_reference(value):
        return get_nested_value(data, value[len(REFERENCE_PREFIX) :])
    return value
