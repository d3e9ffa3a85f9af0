"""Helpers for reading untyped TOML tables.

Options arrive as parsed TOML (or as plain dicts handed over by a build
host). These helpers validate at that boundary and narrow types.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value, stripped. Empty strings read as missing."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_raw_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value without stripping it."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    return value


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    if not isinstance(value, bool):
        return None
    return value


def get_int(table: Mapping[str, object], key: str) -> int | None:
    value = table.get(key)
    # bool is an int subclass; TOML `true` is not a timestamp.
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping."""
    return as_str_dict(table.get(key))


def to_str_tuple(value: object) -> tuple[str, ...]:
    """Accept a single string or a list of strings.

    Non-string list items are dropped.
    """
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        items = cast(list[object], list(value))
        return tuple(item for item in items if isinstance(item, str))
    return ()


def get_str_list(table: Mapping[str, object], key: str) -> tuple[str, ...]:
    return to_str_tuple(table.get(key))
