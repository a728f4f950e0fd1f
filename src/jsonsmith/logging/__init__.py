"""
Logging for jsonsmith.

Provides stderr logging setup and a JSONL audit log of document edits.
"""

from jsonsmith.logging.edit_logger import EditLogger
from jsonsmith.logging.runtime import LOGGER_NAME, configure_logging, parse_level

__all__ = [
    "LOGGER_NAME",
    "EditLogger",
    "configure_logging",
    "parse_level",
]
