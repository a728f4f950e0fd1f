"""
jsonsmith - path-addressed JSON document editing.

Read, write, delete and deep-merge values in JSON files by dot-notation
path, and reconcile documents whose objects repeat keys. Usable as a
library, from the command line, or as an MCP server for agents.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("jsonsmith")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from jsonsmith.config import Settings  # noqa: E402
from jsonsmith.core import (  # noqa: E402
    deep_merge,
    delete_value,
    get_value,
    reconcile_duplicates,
    set_value,
)

__all__ = [
    "__version__",
    "__version_info__",
    "Settings",
    "deep_merge",
    "delete_value",
    "get_value",
    "reconcile_duplicates",
    "set_value",
]
