"""
Shared pytest fixtures for jsonsmith tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import json as _json
import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import jsonsmith.config as config
import jsonsmith.logging as jsonsmith_logging
import jsonsmith.tools as tools

# =============================================================================
# Environment Isolation
# =============================================================================


@_pytest.fixture(autouse=True)
def isolated_env(
    tmp_path_factory: _pytest.TempPathFactory,
    monkeypatch: _pytest.MonkeyPatch,
) -> _pathlib.Path:
    """
    Isolate every test from the user's jsonsmith environment.

    Clears JSONSMITH_* variables and points the user config directory at
    an empty temporary directory.

    Returns:
        The (empty) user config directory.
    """
    for key in list(_os.environ):
        if key.startswith("JSONSMITH_"):
            monkeypatch.delenv(key)
    monkeypatch.delenv("NO_COLOR", raising=False)

    user_config_dir = tmp_path_factory.mktemp("user-config")
    monkeypatch.setenv("JSONSMITH_CONFIG_DIR", str(user_config_dir))
    return user_config_dir


@_pytest.fixture(autouse=True)
def restore_logger() -> _typing.Iterator[_logging.Logger]:
    """
    Undo configure_logging() calls made by a test.

    The CLI leaves the jsonsmith logger with its own stderr handler and
    propagation off, which hides records from caplog.
    """
    logger = _logging.getLogger(jsonsmith_logging.LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@_pytest.fixture
def clean_settings() -> config.Settings:
    """Settings with built-in defaults only."""
    return config.Settings.construct_without_dotenv()


# =============================================================================
# Document Fixtures
# =============================================================================


@_pytest.fixture
def write_doc(tmp_path: _pathlib.Path) -> _typing.Callable[..., _pathlib.Path]:
    """
    Factory writing a JSON document under tmp_path.

    Usage:
        path = write_doc("en.json", {"common": {"welcome": "Welcome"}})
        path = write_doc("raw.json", text='{"a": 1, "a": 2}')
    """

    def _write(
        name: str,
        value: _typing.Any = None,
        *,
        text: str | None = None,
    ) -> _pathlib.Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if text is None:
            text = _json.dumps(value, indent=2)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@_pytest.fixture
def read_doc() -> _typing.Callable[[_pathlib.Path], _typing.Any]:
    """Load a JSON document from disk."""

    def _read(path: _pathlib.Path) -> _typing.Any:
        return _json.loads(path.read_text(encoding="utf-8"))

    return _read


@_pytest.fixture
def registry(clean_settings: config.Settings) -> tools.ToolRegistry:
    """Registry of all built-in tools with default settings."""
    return tools.build_registry_from_settings(clean_settings)
