"""
Value tree definitions.

A value tree is Python's JSON data model: None, bool, int/float, str,
list (array) and dict[str, ...] (object). Parsers that preserve duplicate
keys additionally produce ObjectEntries for object literals whose keys repeat.
"""

from __future__ import annotations

import typing as _typing

JsonValue: _typing.TypeAlias = (
    "None | bool | int | float | str | list[JsonValue] | dict[str, JsonValue] | ObjectEntries"
)
"""Any node of a value tree."""

JsonObject: _typing.TypeAlias = "dict[str, JsonValue]"
"""An object node with unique keys."""


class ObjectEntries(list[tuple[str, _typing.Any]]):
    """
    Ordered (key, value) entries of one object literal that repeats a key.

    The standard JSON parser keeps only the last occurrence of a repeated
    key. The duplicate-preserving parser emits this type instead, so the
    merge engine can fold every occurrence in encounter order.

    Example:
        >>> entries = ObjectEntries([("a", 1), ("a", 2)])
        >>> entries.keys()
        ['a', 'a']
    """

    def keys(self) -> list[str]:
        """Keys in encounter order, repeats included."""
        return [key for key, _ in self]

    def has_duplicates(self) -> bool:
        """Whether any key occurs more than once."""
        keys = self.keys()
        return len(keys) != len(set(keys))

    def __repr__(self) -> str:
        return f"ObjectEntries({list.__repr__(self)})"


def is_object(value: _typing.Any) -> bool:
    """True for object nodes with unique keys (plain dicts)."""
    return isinstance(value, dict)


def is_array(value: _typing.Any) -> bool:
    """True for array nodes."""
    # ObjectEntries subclasses list but is an object literal, not an array
    return isinstance(value, list) and not isinstance(value, ObjectEntries)


def kind_of(value: _typing.Any) -> str:
    """
    Name the JSON kind of a value, for error messages.

    Returns one of "null", "boolean", "number", "string", "array",
    "object". Non-JSON Python values are reported by their type name.
    """
    if value is None:
        return "null"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (dict, ObjectEntries)):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__
