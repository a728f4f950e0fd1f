"""
Core value-tree algorithms.

Path addressing (get/set/delete by dot-notation path) and the recursive
merge engine. Pure Python, no I/O.

Usage:
    import jsonsmith.core as core

    doc = {}
    core.set_value(doc, "a.b.c", 5)
    core.deep_merge(doc, {"a": {"d": 1}})
"""

from jsonsmith.core.errors import (
    InvalidPathError,
    NotTraversableError,
    PathError,
    PathNotFoundError,
)
from jsonsmith.core.merge import deep_merge, find_duplicate_keys, reconcile_duplicates
from jsonsmith.core.paths import delete_value, get_value, has_value, set_value, split_path
from jsonsmith.core.types import JsonObject, JsonValue, ObjectEntries, is_array, is_object, kind_of

__all__ = [
    # Types
    "JsonValue",
    "JsonObject",
    "ObjectEntries",
    "is_object",
    "is_array",
    "kind_of",
    # Errors
    "PathError",
    "InvalidPathError",
    "NotTraversableError",
    "PathNotFoundError",
    # Path addressing
    "split_path",
    "get_value",
    "has_value",
    "set_value",
    "delete_value",
    # Merge engine
    "deep_merge",
    "reconcile_duplicates",
    "find_duplicate_keys",
]
