"""Value bag helpers: effective map, property paths and stringification."""

import json
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Optional

from .models import PlaceholderKey
from .syntax import DEFAULT_KEY_TABLE, KeyTable, is_non_blank

# Returned by get_property_by_path when a path does not resolve. None is a
# legitimate value in the bag and renders as "null".
MISSING = object()


def current_timestamp(now: Optional[datetime] = None) -> str:
    """Render a timestamp in the locale's date and time format."""
    return (now or datetime.now()).strftime("%c")


def build_effective_map(
    values: Optional[Mapping[str, Any]],
    key_table: KeyTable = DEFAULT_KEY_TABLE,
    now: Optional[datetime] = None,
) -> dict[PlaceholderKey, str]:
    """
    Build the map of standard placeholders that have usable values.

    Only canonical key names are considered (aliases are not keys in the
    value bag). Values must be strings with visible characters and are
    stored trimmed. "now" is always present.

    Args:
        values: The caller's value bag (standard keys plus any extra properties)
        key_table: Table used to recognise standard keys
        now: Time to use for "now" when the bag does not provide one

    Returns:
        Dict of PlaceholderKey to trimmed value
    """
    effective: dict[PlaceholderKey, str] = {}

    for name, value in (values or {}).items():
        key = key_table.key_named(name)
        if key is not None and is_non_blank(value):
            effective[key] = value.strip()

    if PlaceholderKey.NOW not in effective:
        effective[PlaceholderKey.NOW] = current_timestamp(now)

    return effective


def get_property_by_path(obj: Any, path: str) -> Any:
    """
    Get a value from nested mappings and lists using a dot-notation path.

    Segments are mapping keys, or non-negative integer indices when the
    current value is a list. Any mismatch returns MISSING rather than raising.

    Args:
        obj: The value bag
        path: Dot-notation path (e.g., "title", "items.1.name")

    Returns:
        The value at the path, or MISSING
    """
    if not path or not isinstance(obj, Mapping):
        return MISSING

    current = obj
    for part in path.split("."):
        if isinstance(current, Mapping):
            if part not in current:
                return MISSING
            current = current[part]
        elif _is_list(current):
            if not part.isdecimal():
                return MISSING
            index = int(part)
            if index >= len(current):
                return MISSING
            current = current[index]
        else:
            return MISSING

    return current


def stringify_value(value: Any) -> str:
    """Render a bag value as text."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping) or _is_list(value):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def property_value(values: Mapping[str, Any], path: str) -> Optional[str]:
    """
    Resolve a plain property reference.

    Returns:
        Non-blank strings as-is, other values stringified, None if the path
        is missing or holds a blank string
    """
    value = get_property_by_path(values, path)
    if value is MISSING:
        return None
    if isinstance(value, str):
        return value if is_non_blank(value) else None
    return stringify_value(value)


def option_value(values: Mapping[str, Any], path: str) -> Optional[str]:
    """
    Resolve an option reference to the currently selected choice.

    Lists yield their first element, mappings the value of their first
    entry, scalars themselves.

    Returns:
        The stringified choice, or None if nothing is selectable
    """
    value = get_property_by_path(values, path)
    if value is MISSING:
        return None
    if _is_list(value):
        if not value:
            return None
        value = value[0]
    elif isinstance(value, Mapping):
        if not value:
            return None
        value = next(iter(value.values()))

    if isinstance(value, str) and not is_non_blank(value):
        return None
    return stringify_value(value)


def has_option_choices(values: Mapping[str, Any], path: str) -> bool:
    """True when the path holds a non-empty list or mapping of choices."""
    value = get_property_by_path(values, path)
    return (_is_list(value) or isinstance(value, Mapping)) and len(value) > 0


def _is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
