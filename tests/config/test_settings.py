"""Tests for configuration settings."""

import pathlib as _pathlib

import pytest as _pytest

import jsonsmith.config as config


class TestSettingsDefaults:
    """Test Settings default values with a clean environment."""

    def test_documents_defaults(self, clean_settings: config.Settings) -> None:
        assert clean_settings.documents.indent == 2
        assert clean_settings.documents.ensure_ascii is False
        assert clean_settings.documents.encoding == "utf-8"
        assert clean_settings.documents.trailing_newline is False

    def test_sandbox_requires_absolute_paths(self, clean_settings: config.Settings) -> None:
        assert clean_settings.sandbox.require_absolute_paths is True
        assert clean_settings.sandbox.allowed_paths == []

    def test_logging_defaults(self, clean_settings: config.Settings) -> None:
        assert clean_settings.logging.level == "warning"
        assert clean_settings.logging.audit_enabled is False
        assert clean_settings.get_audit_file() is None

    def test_tools_defaults(self, clean_settings: config.Settings) -> None:
        assert clean_settings.get_disabled_tools() == set()
        assert clean_settings.tools.parse_json_strings is True

    def test_version(self, clean_settings: config.Settings) -> None:
        assert clean_settings.version == 1

    def test_no_unknown_fields_in_defaults(self, clean_settings: config.Settings) -> None:
        for section in (
            clean_settings.documents,
            clean_settings.sandbox,
            clean_settings.logging,
            clean_settings.tools,
        ):
            assert section.collect_all_extra_fields() == {}


class TestSettingsEnvironment:
    """Environment variables override YAML layers."""

    def test_nested_env_override(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JSONSMITH_DOCUMENTS__INDENT", "4")
        settings = config.Settings.construct_without_dotenv()
        assert settings.documents.indent == 4
        # Sibling keys from YAML survive
        assert settings.documents.encoding == "utf-8"

    def test_boolean_env_override(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JSONSMITH_SANDBOX__REQUIRE_ABSOLUTE_PATHS", "false")
        settings = config.Settings.construct_without_dotenv()
        assert settings.sandbox.require_absolute_paths is False

    def test_constructor_overrides_env(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JSONSMITH_VERSION", "5")
        settings = config.Settings.construct_without_dotenv(version=9)
        assert settings.version == 9

    def test_invalid_level_rejected(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JSONSMITH_LOGGING__LEVEL", "loud")
        with _pytest.raises(ValueError):
            config.Settings.construct_without_dotenv()


class TestSettingsLayers:
    """User and project YAML layers."""

    def test_user_config_applies(
        self,
        isolated_env: _pathlib.Path,
        tmp_path: _pathlib.Path,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (isolated_env / "config.yaml").write_text(
            "tools:\n  disabled:\n    delete_json_value: true\n"
        )
        settings = config.Settings.construct_without_dotenv()
        assert settings.get_disabled_tools() == {"delete_json_value"}

    def test_project_config_overrides_user(
        self,
        isolated_env: _pathlib.Path,
        tmp_path: _pathlib.Path,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        (isolated_env / "config.yaml").write_text("documents:\n  indent: 8\n  trailing_newline: true\n")
        project = tmp_path / "project"
        (project / ".jsonsmith").mkdir(parents=True)
        (project / ".jsonsmith" / "config.yaml").write_text("documents:\n  indent: 3\n")
        monkeypatch.chdir(project)

        settings = config.Settings.construct_without_dotenv()

        assert settings.documents.indent == 3
        assert settings.documents.trailing_newline is True

    def test_env_overrides_project(
        self,
        tmp_path: _pathlib.Path,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        project = tmp_path / "project"
        (project / ".jsonsmith").mkdir(parents=True)
        (project / ".jsonsmith" / "config.yaml").write_text("documents:\n  indent: 3\n")
        monkeypatch.chdir(project)
        monkeypatch.setenv("JSONSMITH_DOCUMENTS__INDENT", "6")

        assert config.Settings.construct_without_dotenv().documents.indent == 6

    def test_unknown_keys_are_reported(
        self,
        isolated_env: _pathlib.Path,
        tmp_path: _pathlib.Path,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (isolated_env / "config.yaml").write_text("documents:\n  indnet: 4\n")
        settings = config.Settings.construct_without_dotenv()
        assert settings.documents.collect_all_extra_fields("documents") == {"documents.indnet": 4}
        assert settings.collect_all_extra_fields() == {"documents.indnet": 4}


class TestSettingsHelpers:
    """Helper methods on Settings."""

    def test_allowed_paths_expand_user(self) -> None:
        settings = config.Settings.construct_without_dotenv(
            sandbox={"allowed_paths": ["~/locales", "/srv/data"]},
        )
        assert settings.get_allowed_paths() == [
            _pathlib.Path.home() / "locales",
            _pathlib.Path("/srv/data"),
        ]

    def test_audit_file_expands_user(self) -> None:
        settings = config.Settings.construct_without_dotenv(
            logging={"audit_file": "~/audit.jsonl"},
        )
        assert settings.get_audit_file() == _pathlib.Path.home() / "audit.jsonl"


class TestFindProjectRoot:
    """Tests for project root detection."""

    def test_finds_marker_in_ancestor(self, tmp_path: _pathlib.Path) -> None:
        (tmp_path / ".jsonsmith").mkdir()
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert config.find_project_root(nested) == tmp_path.resolve()

    def test_git_marker(self, tmp_path: _pathlib.Path) -> None:
        (tmp_path / ".git").mkdir()
        assert config.find_project_root(tmp_path) == tmp_path.resolve()
