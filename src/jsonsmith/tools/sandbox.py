"""
Path policy for document tools.

Provides:
- Absolute-path enforcement (documents are addressed by absolute path)
- Optional allowed-root restriction
- ~ expansion and resolution of document paths
"""

from __future__ import annotations

import os as _os
import pathlib as _pathlib
import typing as _typing


class PathValidationError(Exception):
    """Raised when a document path fails validation."""

    pass


class SandboxConfig:
    """Configuration for document path validation."""

    def __init__(
        self,
        base_dir: _pathlib.Path | None = None,
        allowed_paths: list[_pathlib.Path] | None = None,
        require_absolute: bool = True,
    ) -> None:
        """
        Initialize sandbox configuration.

        Args:
            base_dir: Directory relative paths resolve against (when allowed)
            allowed_paths: Directories documents must live under (empty = anywhere)
            require_absolute: Reject paths that are not absolute after ~ expansion
        """
        self.base_dir = base_dir or _pathlib.Path.cwd()
        self.allowed_paths = allowed_paths or []
        self.require_absolute = require_absolute

        self._allowed_roots = [
            _pathlib.Path(_os.path.expanduser(p)).resolve() for p in self.allowed_paths
        ]

    @classmethod
    def from_settings(
        cls,
        settings: _typing.Any,
        base_dir: _pathlib.Path | None = None,
    ) -> SandboxConfig:
        """Build a sandbox config from Settings.sandbox."""
        return cls(
            base_dir=base_dir,
            allowed_paths=settings.get_allowed_paths(),
            require_absolute=settings.sandbox.require_absolute_paths,
        )

    @property
    def restricted(self) -> bool:
        """Whether documents are confined to allowed roots."""
        return bool(self._allowed_roots)


def validate_path(
    path: _pathlib.Path | str,
    config: SandboxConfig,
) -> _pathlib.Path:
    """
    Validate an absolute document path against the allowed roots.

    Args:
        path: The path to validate
        config: Sandbox configuration

    Returns:
        The resolved, validated path

    Raises:
        PathValidationError: If the path is outside every allowed root
    """
    if isinstance(path, str):
        path = _pathlib.Path(path)

    try:
        resolved = path.resolve()
    except (OSError, RuntimeError) as e:
        raise PathValidationError(f"Cannot resolve path: {path} ({e})") from e

    if not config.restricted:
        return resolved

    for allowed in config._allowed_roots:
        if resolved.is_relative_to(allowed):
            return resolved

    roots = ", ".join(str(p) for p in config._allowed_roots)
    raise PathValidationError(
        f"Access denied: {path} is outside allowed directories. "
        f"Documents are only allowed under: {roots}"
    )


def resolve_and_validate(
    path: str,
    config: SandboxConfig,
) -> _pathlib.Path:
    """
    Expand, resolve and validate a document path.

    Args:
        path: The path string (may contain ~)
        config: Sandbox configuration

    Returns:
        The resolved, validated absolute path

    Raises:
        PathValidationError: If the path is relative (when absolute paths are
            required) or outside the allowed roots
    """
    expanded = _pathlib.Path(_os.path.expanduser(path))

    if not expanded.is_absolute():
        if config.require_absolute:
            raise PathValidationError(f"Path must be absolute: {path}")
        expanded = config.base_dir / expanded

    return validate_path(expanded, config)


def resolve_all(
    paths: _typing.Iterable[str],
    config: SandboxConfig,
) -> dict[str, _pathlib.Path]:
    """
    Validate every path before any is used.

    Paths are keyed by their input spelling; a repeated spelling appears
    once, and the first invalid path aborts the whole batch.

    Raises:
        PathValidationError: If any path fails validation
    """
    resolved: dict[str, _pathlib.Path] = {}
    for path in paths:
        if path not in resolved:
            resolved[path] = resolve_and_validate(path, config)
    return resolved
