"""
Shared constants for jsonsmith.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Path addressing
PATH_SEPARATOR = "."
"""Separator between segments of a dot-notation path."""

# Document serialization defaults
DEFAULT_INDENT = 2
"""Indentation used when writing documents back to disk."""

DEFAULT_ENCODING = "utf-8"
"""Text encoding for reading and writing documents."""

# Tool output
MULTI_SUCCESS_WRITE = "Successfully wrote"
"""Per-document status reported by multi-document writes."""

MULTI_SUCCESS_DELETE = "Successfully deleted"
"""Per-document status reported by multi-document deletes."""

MULTI_SUCCESS_MERGE = "Successfully merged"
"""Per-document status reported by multi-document merges."""

ERROR_PREFIX = "Error: "
"""Prefix for error strings returned to the agent."""
