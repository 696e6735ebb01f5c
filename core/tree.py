# =============================================================================
# core/tree.py  —  Total Lookups over Untyped JSON Trees
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The vendor's hotel documents are loosely typed: any node may be missing,
#   null, or of the wrong type.  These helpers walk a decoded JSON value
#   (dicts, lists, scalars) and return a default instead of raising, so every
#   extractor reads as a straight sequence of lookups.
#
#     get_path(doc, "detail", "location", "city")   → value or default
#     get_list(doc, "detail", "images")             → list or []
#     get_text(doc, "detail", "star")               → "5", "4.5", or ""
# =============================================================================

from typing import Any, Union

Key = Union[str, int]

_MISSING = object()


def _step(node: Any, key: Key) -> Any:
    if isinstance(node, dict):
        return node.get(key, _MISSING) if isinstance(key, str) else _MISSING
    if isinstance(node, list) and isinstance(key, int) and not isinstance(key, bool):
        if -len(node) <= key < len(node):
            return node[key]
    return _MISSING


def get_path(node: Any, *keys: Key, default: Any = None) -> Any:
    """Follow dict keys / list indices; return default on any mismatch.

    A JSON null at the end of the path also yields the default.
    """
    current = node
    for key in keys:
        current = _step(current, key)
        if current is _MISSING:
            return default
    return default if current is None else current


def has_path(node: Any, *keys: Key) -> bool:
    """True if the path exists and does not end in null."""
    return get_path(node, *keys, default=_MISSING) is not _MISSING


def get_list(node: Any, *keys: Key) -> list:
    """Like get_path, but anything other than a list comes back as []."""
    value = get_path(node, *keys)
    return value if isinstance(value, list) else []


def as_text(value: Any) -> str:
    """Text view of a scalar leaf.

    Strings are returned verbatim, numbers in their decimal form, booleans
    as "true"/"false".  Null, objects and arrays have no text: "".
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def get_text(node: Any, *keys: Key) -> str:
    return as_text(get_path(node, *keys))


def as_float(value: Any, default: float = 0.0) -> float:
    """Numeric view of a leaf: numbers pass through, numeric strings parse."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default
