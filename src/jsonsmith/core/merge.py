"""
Recursive merge of value trees.

Two operations share one conflict policy:

- deep_merge(target, source): objects merge key by key, recursively;
  everything else (primitives, arrays, object-vs-non-object) resolves to
  the source value.
- reconcile_duplicates(node): folds the repeated keys of ObjectEntries
  literals with deep_merge, in encounter order.

Both are pure and share untouched substructure with their inputs. They
guard against reference cycles by tracking the identities of the nodes on
the active recursion path; the set travels as a parameter so the functions
stay reentrant.

Example:
    >>> deep_merge(
    ...     {"common": {"welcome": "Welcome", "goodbye": "Bye"}},
    ...     {"common": {"welcome": "Bienvenue", "hello": "Bonjour"}},
    ... )
    {'common': {'welcome': 'Bienvenue', 'goodbye': 'Bye', 'hello': 'Bonjour'}}
"""

from __future__ import annotations

import typing as _typing

import jsonsmith.constants as constants
import jsonsmith.core.types as types


def deep_merge(
    target: _typing.Any,
    source: _typing.Any,
    _active: set[int] | None = None,
) -> _typing.Any:
    """
    Merge source into target without mutating either.

    Args:
        target: The base value.
        source: The value merged on top; wins every non-object conflict.

    Returns:
        The merged value. When either side is not an object this is
        source itself.
    """
    if not types.is_object(source) or not types.is_object(target):
        return source

    if _active is None:
        _active = set()
    if id(target) in _active or id(source) in _active:
        return source

    entered = {id(target), id(source)} - _active
    _active.update(entered)
    try:
        result = dict(target)
        for key, value in source.items():
            existing = result.get(key)
            if key in result and types.is_object(existing) and types.is_object(value):
                result[key] = deep_merge(existing, value, _active)
            else:
                result[key] = value
        return result
    finally:
        _active.difference_update(entered)


def reconcile_duplicates(
    node: _typing.Any,
    _active: set[int] | None = None,
) -> _typing.Any:
    """
    Fold repeated keys into a tree of unique-key objects.

    The first occurrence of a key seeds the result; each later occurrence
    is deep-merged into it when both are objects and replaces it otherwise.
    The key keeps the position of its first occurrence. Objects nested in
    arrays are reconciled individually.

    A duplicate-free tree comes back equal to the input.
    """
    if not isinstance(node, (dict, list)):
        return node

    if _active is None:
        _active = set()
    if id(node) in _active:
        return node

    _active.add(id(node))
    try:
        if isinstance(node, types.ObjectEntries):
            return _fold_entries(node, _active)
        if isinstance(node, dict):
            return {key: reconcile_duplicates(value, _active) for key, value in node.items()}
        return [reconcile_duplicates(item, _active) for item in node]
    finally:
        _active.discard(id(node))


def _fold_entries(
    entries: types.ObjectEntries,
    active: set[int],
) -> dict[str, _typing.Any]:
    """Fold one duplicate-carrying literal in encounter order."""
    result: dict[str, _typing.Any] = {}
    for key, raw in entries:
        value = reconcile_duplicates(raw, active)
        if key in result:
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def find_duplicate_keys(node: _typing.Any) -> list[str]:
    """
    List the dot paths of keys that repeat within one object literal.

    Only ObjectEntries can carry repeats, so trees from the standard parser
    always yield an empty list. Array elements contribute their index as a
    path segment. Each path is reported once, in encounter order.
    """
    found: list[str] = []
    _collect_duplicates(node, (), found, set())
    return found


def _collect_duplicates(
    node: _typing.Any,
    prefix: tuple[str, ...],
    found: list[str],
    active: set[int],
) -> None:
    if not isinstance(node, (dict, list)) or id(node) in active:
        return

    active.add(id(node))
    try:
        if isinstance(node, types.ObjectEntries):
            seen: set[str] = set()
            for key, value in node:
                path = constants.PATH_SEPARATOR.join((*prefix, key))
                if key in seen and path not in found:
                    found.append(path)
                seen.add(key)
                _collect_duplicates(value, (*prefix, key), found, active)
        elif isinstance(node, dict):
            for key, value in node.items():
                _collect_duplicates(value, (*prefix, key), found, active)
        else:
            for index, item in enumerate(node):
                _collect_duplicates(item, (*prefix, str(index)), found, active)
    finally:
        active.discard(id(node))
