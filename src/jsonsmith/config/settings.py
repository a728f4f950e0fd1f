"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with JSONSMITH_ prefix
3. .env file (if JSONSMITH_ENV_FILE points at one)
4. Layered YAML config files:
   - Project config: .jsonsmith/config.yaml (highest)
   - User config: ~/.config/jsonsmith/config.yaml
   - Built-in defaults: bundled defaults/config.yaml (lowest)

Nested config uses double underscore delimiter:
  JSONSMITH_DOCUMENTS__INDENT=4
  JSONSMITH_SANDBOX__REQUIRE_ABSOLUTE_PATHS=false
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import jsonsmith.config.sources as sources
import jsonsmith.config.types as types

PROJECT_MARKERS = (sources.PROJECT_CONFIG_DIRNAME, ".git", "pyproject.toml", "package.json")
"""Files or directories whose presence marks a project root."""


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only an explicit JSONSMITH_ENV_FILE is honored; if it is set but
    missing, no .env is loaded rather than silently falling back.
    """
    if env_file := _os.environ.get("JSONSMITH_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


def find_project_root(start_path: _pathlib.Path | None = None) -> _pathlib.Path:
    """
    Find the project root directory.

    Walks up from start_path (default: cwd) to the first directory that
    contains one of PROJECT_MARKERS, falling back to the current directory.
    """
    if start_path is None:
        start_path = _pathlib.Path.cwd()

    current = start_path.resolve()
    while True:
        for marker in PROJECT_MARKERS:
            if (current / marker).exists():
                return current
        if current == current.parent:
            break
        current = current.parent

    return _pathlib.Path.cwd()


class Settings(_pydantic_settings.BaseSettings):
    """
    jsonsmith configuration settings.

    All settings can be overridden via environment variables with JSONSMITH_ prefix.
    For nested config, use double underscore: JSONSMITH_DOCUMENTS__INDENT=4

    Config precedence (highest to lowest):
    1. Constructor arguments
    2. Environment variables (JSONSMITH_*)
    3. .env file
    4. Project config (.jsonsmith/config.yaml)
    5. User config (~/.config/jsonsmith/config.yaml)
    6. Built-in defaults
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="JSONSMITH_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # JSONSMITH_DOCUMENTS__INDENT
        extra="allow",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings (constructor args): highest
        2. env_settings (JSONSMITH_* env vars)
        3. dotenv_settings (.env file)
        4. layered YAML config files
        5. (defaults via Field definitions): lowest
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            sources.LayeredYamlSettingsSource(settings_cls, find_project_root()),
            file_secret_settings,
        )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation and CI environments.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    # =========================================================================
    # Config version (for future migrations)
    # =========================================================================

    version: int = _pydantic.Field(default=1, description="Config schema version")

    # =========================================================================
    # Nested config sections
    # =========================================================================

    documents: types.DocumentsConfig = _pydantic.Field(
        default_factory=types.DocumentsConfig
    )
    """Serialization of written documents."""

    sandbox: types.SandboxConfig = _pydantic.Field(default_factory=types.SandboxConfig)
    """Document path policy."""

    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)
    """Logging settings."""

    tools: types.ToolsConfig = _pydantic.Field(default_factory=types.ToolsConfig)
    """Tool settings."""

    # =========================================================================
    # Helper methods
    # =========================================================================

    def get_allowed_paths(self) -> list[_pathlib.Path]:
        """Allowed document roots with ~ expanded."""
        return [
            _pathlib.Path(_os.path.expanduser(p))
            for p in self.sandbox.allowed_paths
        ]

    def get_disabled_tools(self) -> set[str]:
        """Names of tools disabled in config."""
        return self.tools.get_disabled_tools()

    def get_audit_file(self) -> _pathlib.Path | None:
        """Explicit audit file path, if configured."""
        if self.logging.audit_file:
            return _pathlib.Path(_os.path.expanduser(self.logging.audit_file))
        return None

    # =========================================================================
    # Config auditing
    # =========================================================================

    def collect_all_extra_fields(self) -> dict[str, _typing.Any]:
        """
        Unknown fields inside the config sections, keyed by dotted path.

        e.g. {"documents.indnet": 4}. Top-level extras are left out: the
        JSONSMITH_ prefix is shared with variables like JSONSMITH_CONFIG_DIR.
        """
        result: dict[str, _typing.Any] = {}
        for field_name in ["documents", "sandbox", "logging", "tools"]:
            section: types.ConfigBase = getattr(self, field_name)
            result.update(section.collect_all_extra_fields(prefix=field_name))
        return result
