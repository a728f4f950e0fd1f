"""
Document I/O: JSON text parsing and file persistence.
"""

from jsonsmith.document.parsing import (
    coerce_json_string,
    collect_object_pairs,
    parse_json,
    to_json,
)
from jsonsmith.document.store import DocumentError, DocumentStore

__all__ = [
    "DocumentError",
    "DocumentStore",
    "coerce_json_string",
    "collect_object_pairs",
    "parse_json",
    "to_json",
]
