"""
Dot-notation path addressing over a value tree.

    >>> doc = {"common": {"welcome": "Hi"}}
    >>> get_value(doc, "common.welcome")
    'Hi'
    >>> set_value(doc, "pages.home.title", "Home")
    >>> doc["pages"]
    {'home': {'title': 'Home'}}

get_value and delete_value are strict: any missing link fails before
anything is mutated. set_value is permissive and creates (or replaces)
intermediate objects along the path.
"""

from __future__ import annotations

import typing as _typing

import jsonsmith.constants as constants
import jsonsmith.core.errors as errors
import jsonsmith.core.types as types


def split_path(path: str) -> list[str]:
    """
    Split a dot-notation path into segments.

    Empty segments (from leading, trailing or doubled separators) are kept;
    they address the "" key like any other segment.

    Raises:
        InvalidPathError: If path is not a string or is empty.
    """
    if not isinstance(path, str):
        raise errors.InvalidPathError(
            f"Path must be a string, got {type(path).__name__}",
            path=str(path),
        )
    if not path:
        raise errors.InvalidPathError("Path must not be empty", path=path)
    return path.split(constants.PATH_SEPARATOR)


def _descend(
    current: _typing.Any,
    segment: str,
    path: str,
) -> _typing.Any:
    """Resolve one segment strictly, raising on any missing link."""
    if not types.is_object(current):
        raise errors.NotTraversableError(
            f"Path {path} not found: cannot look up '{segment}' in a "
            f"{types.kind_of(current)} value",
            path=path,
            segment=segment,
        )
    if segment not in current:
        raise errors.PathNotFoundError(
            f"Path {path} not found: '{segment}' does not exist",
            path=path,
            segment=segment,
        )
    return current[segment]


def get_value(root: _typing.Any, path: str) -> _typing.Any:
    """
    Return the value at path.

    Args:
        root: Value tree to read from.
        path: Dot-notation path, e.g. "common.welcome".

    Returns:
        The addressed value, of any kind.

    Raises:
        InvalidPathError: If path is empty.
        NotTraversableError: If a non-object sits where a key lookup is needed.
        PathNotFoundError: If an object on the path lacks the next key.
    """
    current = root
    for segment in split_path(path):
        current = _descend(current, segment, path)
    return current


def has_value(root: _typing.Any, path: str) -> bool:
    """Whether get_value would succeed. Invalid paths still raise."""
    try:
        get_value(root, path)
    except (errors.NotTraversableError, errors.PathNotFoundError):
        return False
    return True


def set_value(root: _typing.Any, path: str, value: _typing.Any) -> None:
    """
    Assign value at path, creating intermediate objects as needed.

    Any missing key or non-object value at an intermediate position is
    replaced with a new empty object. Existing non-object data there is
    discarded.

    Raises:
        InvalidPathError: If path is empty.
        NotTraversableError: If root itself is not an object.
    """
    segments = split_path(path)
    if not types.is_object(root):
        raise errors.NotTraversableError(
            f"Cannot write {path}: root is a {types.kind_of(root)} value, not an object",
            path=path,
            segment=segments[0],
        )

    current: types.JsonObject = root
    for segment in segments[:-1]:
        child = current.get(segment)
        if not types.is_object(child):
            child = {}
            current[segment] = child
        current = child

    current[segments[-1]] = value


def delete_value(root: _typing.Any, path: str) -> None:
    """
    Remove the key addressed by path.

    Traversal is as strict as get_value; the tree is untouched on failure.

    Raises:
        InvalidPathError: If path is empty.
        NotTraversableError: If a non-object sits where a key lookup is needed.
        PathNotFoundError: If any key on the path, including the last, is missing.
    """
    segments = split_path(path)

    parent = root
    for segment in segments[:-1]:
        parent = _descend(parent, segment, path)

    last = segments[-1]
    # Resolve the final key first so failures leave the tree intact
    _descend(parent, last, path)
    del parent[last]
