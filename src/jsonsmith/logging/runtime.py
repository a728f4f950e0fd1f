"""
Process-level logging setup.

Log records go to stderr only: stdout carries CLI output and, under
`jsonsmith serve`, the MCP stdio transport.
"""

import logging as _logging
import sys as _sys
import typing as _typing

LOGGER_NAME = "jsonsmith"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LEVELS = {
    "debug": _logging.DEBUG,
    "info": _logging.INFO,
    "warning": _logging.WARNING,
    "error": _logging.ERROR,
}


def parse_level(level: str | int) -> int:
    """Translate a config level name (or numeric level) to a logging level."""
    if isinstance(level, int):
        return level
    try:
        return _LEVELS[level.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown log level: {level!r} (expected one of {', '.join(_LEVELS)})"
        ) from None


def configure_logging(
    level: str | int = "warning",
    *,
    stream: _typing.TextIO | None = None,
) -> _logging.Logger:
    """
    Attach a single stderr handler to the jsonsmith logger.

    Calling again replaces the handler installed by a previous call
    instead of stacking another one.

    Args:
        level: "debug", "info", "warning", "error" or a numeric level.
        stream: Destination stream (default: sys.stderr).

    Returns:
        The configured jsonsmith logger.
    """
    logger = _logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_jsonsmith_handler", False):
            logger.removeHandler(handler)

    handler = _logging.StreamHandler(stream if stream is not None else _sys.stderr)
    handler.setFormatter(_logging.Formatter(LOG_FORMAT))
    handler._jsonsmith_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(parse_level(level))
    logger.propagate = False
    return logger
