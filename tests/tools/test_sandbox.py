"""
Tests for the document path policy.

Absolute paths are required by default; allowed roots optionally
confine documents to specific directories.
"""

import pathlib as _pathlib

import pytest as _pytest

import jsonsmith.config as config
import jsonsmith.tools.sandbox as sandbox


class TestAbsolutePaths:
    """Absolute-path enforcement."""

    def test_absolute_path_accepted(self, tmp_path: _pathlib.Path) -> None:
        target = tmp_path / "en.json"
        assert sandbox.resolve_and_validate(str(target), sandbox.SandboxConfig()) == target.resolve()

    @_pytest.mark.parametrize("path", ["relative/en.json", "en.json", "./en.json", "../en.json", ""])
    def test_relative_path_rejected(self, path: str) -> None:
        with _pytest.raises(sandbox.PathValidationError) as exc_info:
            sandbox.resolve_and_validate(path, sandbox.SandboxConfig())
        assert str(exc_info.value) == f"Path must be absolute: {path}"

    def test_home_relative_path_expanded(self) -> None:
        resolved = sandbox.resolve_and_validate("~/en.json", sandbox.SandboxConfig())
        assert resolved == (_pathlib.Path.home() / "en.json").resolve()

    def test_relative_allowed_when_not_required(self, tmp_path: _pathlib.Path) -> None:
        sandbox_config = sandbox.SandboxConfig(base_dir=tmp_path, require_absolute=False)
        resolved = sandbox.resolve_and_validate("locales/en.json", sandbox_config)
        assert resolved == (tmp_path / "locales" / "en.json").resolve()

    def test_dotdot_is_normalized(self, tmp_path: _pathlib.Path) -> None:
        target = f"{tmp_path}/a/../en.json"
        assert sandbox.resolve_and_validate(target, sandbox.SandboxConfig()) == (tmp_path / "en.json").resolve()


class TestAllowedRoots:
    """Allowed-root restriction."""

    def test_unrestricted_by_default(self) -> None:
        assert not sandbox.SandboxConfig().restricted

    def test_path_inside_root_allowed(self, tmp_path: _pathlib.Path) -> None:
        sandbox_config = sandbox.SandboxConfig(allowed_paths=[tmp_path / "locales"])
        target = tmp_path / "locales" / "fr" / "common.json"
        assert sandbox.validate_path(target, sandbox_config) == target.resolve()

    def test_path_outside_root_denied(self, tmp_path: _pathlib.Path) -> None:
        sandbox_config = sandbox.SandboxConfig(allowed_paths=[tmp_path / "locales"])
        with _pytest.raises(sandbox.PathValidationError, match="outside allowed directories"):
            sandbox.validate_path(tmp_path / "secrets.json", sandbox_config)

    def test_dotdot_escape_denied(self, tmp_path: _pathlib.Path) -> None:
        sandbox_config = sandbox.SandboxConfig(allowed_paths=[tmp_path / "locales"])
        escape = f"{tmp_path}/locales/../secrets.json"
        with _pytest.raises(sandbox.PathValidationError):
            sandbox.resolve_and_validate(escape, sandbox_config)

    def test_from_settings(self, tmp_path: _pathlib.Path) -> None:
        settings = config.Settings.construct_without_dotenv(
            sandbox={"require_absolute_paths": False, "allowed_paths": [str(tmp_path)]},
        )
        sandbox_config = sandbox.SandboxConfig.from_settings(settings)
        assert sandbox_config.require_absolute is False
        assert sandbox_config.restricted


class TestResolveAll:
    """Batch validation for multi-document tools."""

    def test_validates_all_before_returning(self, tmp_path: _pathlib.Path) -> None:
        paths = [str(tmp_path / "a.json"), "relative.json", str(tmp_path / "b.json")]
        with _pytest.raises(sandbox.PathValidationError, match="relative.json"):
            sandbox.resolve_all(paths, sandbox.SandboxConfig())

    def test_repeated_spelling_collapsed(self, tmp_path: _pathlib.Path) -> None:
        a = str(tmp_path / "a.json")
        resolved = sandbox.resolve_all([a, a], sandbox.SandboxConfig())
        assert list(resolved) == [a]
