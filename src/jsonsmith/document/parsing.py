"""
JSON text to value tree, and back.

The standard parser keeps only the last occurrence of a repeated key.
With preserve_duplicates=True, object literals that repeat a key are
returned as ObjectEntries instead, so every occurrence survives until
jsonsmith.core.reconcile_duplicates folds them.
"""

from __future__ import annotations

import json as _json
import typing as _typing

import jsonsmith.constants as constants
import jsonsmith.core.types as types


def collect_object_pairs(
    pairs: list[tuple[str, _typing.Any]],
) -> dict[str, _typing.Any] | types.ObjectEntries:
    """
    object_pairs_hook that keeps repeated keys.

    Returns a plain dict when the literal's keys are unique, otherwise
    ObjectEntries holding every pair in encounter order.
    """
    entries = types.ObjectEntries(pairs)
    if entries.has_duplicates():
        return entries
    return dict(pairs)


def parse_json(text: str, *, preserve_duplicates: bool = False) -> _typing.Any:
    """
    Parse JSON text into a value tree.

    Args:
        text: JSON document text.
        preserve_duplicates: Keep repeated keys as ObjectEntries.

    Raises:
        json.JSONDecodeError: If text is not valid JSON.
    """
    if preserve_duplicates:
        return _json.loads(text, object_pairs_hook=collect_object_pairs)
    return _json.loads(text)


def to_json(
    value: _typing.Any,
    *,
    indent: int | None = constants.DEFAULT_INDENT,
    ensure_ascii: bool = False,
) -> str:
    """
    Serialize a value tree.

    Raises:
        TypeError: If the tree holds non-JSON values.
        ValueError: If the tree contains a reference cycle.
    """
    return _json.dumps(value, indent=indent, ensure_ascii=ensure_ascii)


def coerce_json_string(value: _typing.Any) -> _typing.Any:
    """
    Decode a string that holds a JSON object or array.

    Agents often pass structured values as JSON text. Strings that decode
    to a scalar (e.g. "42", "true") are returned unchanged so that string
    content is never silently retyped.
    """
    if not isinstance(value, str):
        return value
    stripped = value.strip()
    if not stripped or stripped[0] not in "{[":
        return value
    try:
        parsed = _json.loads(stripped)
    except _json.JSONDecodeError:
        return value
    if isinstance(parsed, (dict, list)):
        return parsed
    return value
