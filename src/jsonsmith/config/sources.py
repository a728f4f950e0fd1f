"""Custom pydantic-settings source for layered YAML configuration.

Configuration layers (in precedence order, highest first):
1. Environment variables (handled by pydantic-settings)
2. Project config: .jsonsmith/config.yaml in project root
3. User config: ~/.config/jsonsmith/config.yaml (or JSONSMITH_CONFIG_DIR)
4. Built-in defaults: bundled config.yaml

The YAML layers are combined with jsonsmith's own deep_merge, so nested
sections merge key by key while lists and scalars from higher layers
replace lower ones.

Environment variables:
- JSONSMITH_CONFIG_DIR: Override user config directory (default: ~/.config/jsonsmith)
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings
import yaml as _yaml

import jsonsmith.core as core

# Environment variable for overriding user config directory
ENV_CONFIG_DIR = "JSONSMITH_CONFIG_DIR"

PROJECT_CONFIG_DIRNAME = ".jsonsmith"


class ConfigFileError(Exception):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


def load_yaml_file(path: _pathlib.Path) -> dict[str, _typing.Any] | None:
    """
    Load a YAML config file.

    Returns:
        Parsed mapping, or None if the file is empty.

    Raises:
        ConfigFileError: If the file cannot be read, is malformed YAML,
            or its top level is not a mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigFileError(path, f"permission denied: {e}") from e
    except OSError as e:
        raise ConfigFileError(path, f"cannot read file: {e}") from e

    try:
        parsed = _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise ConfigFileError(path, f"invalid YAML: {e}") from e

    if parsed is None:
        return None

    if not isinstance(parsed, dict):
        type_name = type(parsed).__name__
        raise ConfigFileError(
            path,
            f"config must be a YAML mapping (dict), got {type_name}",
        )

    return parsed


class LayeredYamlSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """
    Settings source that deep-merges layered YAML config files.

    Flow:
        1. Load each YAML file into a dict
        2. deep_merge the dicts, lowest precedence first
        3. Return the merged dict to pydantic-settings for validation

    Layers (lowest to highest precedence):
    1. Built-in defaults (src/jsonsmith/config/defaults/config.yaml)
    2. User config (~/.config/jsonsmith/config.yaml)
    3. Project config (.jsonsmith/config.yaml)
    """

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        project_root: _pathlib.Path | None = None,
        *,
        user_config_path: _pathlib.Path | None = None,
        builtin_config_path: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize the settings source.

        Args:
            settings_cls: The Settings class being populated.
            project_root: Optional project root path for project-level config.
            user_config_path: Override path for user config file (for testing).
            builtin_config_path: Override path for builtin defaults (for testing).
        """
        super().__init__(settings_cls)
        self._project_root = project_root
        self._user_config_path = user_config_path
        self._builtin_config_path = builtin_config_path
        # Layers actually loaded, lowest precedence first
        self._loaded_layers: list[tuple[str, _pathlib.Path]] = []
        self._merged = self._load_config_layers()

    def _load_config_layers(self) -> dict[str, _typing.Any]:
        """Load every existing layer and merge them in precedence order."""
        merged: dict[str, _typing.Any] = {}

        # Built-in defaults are required: a missing or empty file is an
        # installation problem
        builtin_path = self._get_builtin_config_path()
        if not builtin_path.exists():
            raise ConfigFileError(
                builtin_path,
                "built-in defaults not found (possible installation problem)",
            )
        builtin_content = load_yaml_file(builtin_path)
        if not builtin_content:
            raise ConfigFileError(
                builtin_path,
                "built-in defaults file is empty (possible installation problem)",
            )
        merged = core.deep_merge(merged, builtin_content)
        self._loaded_layers.append(("built-in", builtin_path))

        for layer_name, path in (
            ("user", self._get_user_config_path()),
            ("project", self._get_project_config_path()),
        ):
            if path is None or not path.exists():
                continue
            content = load_yaml_file(path)
            if content:
                merged = core.deep_merge(merged, content)
                self._loaded_layers.append((layer_name, path))

        return merged

    def get_loaded_layers(self) -> list[tuple[str, _pathlib.Path]]:
        """Layers that were loaded, lowest precedence first."""
        return list(self._loaded_layers)

    def get_layer_paths(self) -> list[tuple[str, _pathlib.Path, bool]]:
        """
        Get info about all config layers.

        Returns:
            List of (layer_name, path, exists) tuples in precedence order
            (highest first: project, user, builtin).
        """
        layers: list[tuple[str, _pathlib.Path, bool]] = []

        project_path = self._get_project_config_path()
        if project_path is not None:
            layers.append(("project", project_path, project_path.exists()))

        user_path = self._get_user_config_path()
        layers.append(("user", user_path, user_path.exists()))

        builtin_path = self._get_builtin_config_path()
        layers.append(("built-in", builtin_path, builtin_path.exists()))

        return layers

    def _get_builtin_config_path(self) -> _pathlib.Path:
        if self._builtin_config_path is not None:
            return self._builtin_config_path
        return get_builtin_defaults_path()

    def _get_user_config_path(self) -> _pathlib.Path:
        if self._user_config_path is not None:
            return self._user_config_path
        return get_user_config_path()

    def _get_project_config_path(self) -> _pathlib.Path | None:
        if self._project_root is None:
            return None
        return get_project_config_path(self._project_root)

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,  # noqa: ARG002 - required by pydantic-settings interface
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        """Get value for a top-level field from the merged layers."""
        value = self._merged.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, _typing.Any]:
        """Return the merged config as a plain dict for Pydantic validation."""
        return dict(self._merged)


def get_builtin_defaults_path() -> _pathlib.Path:
    """Path to the bundled defaults/config.yaml."""
    return _pathlib.Path(__file__).parent / "defaults" / "config.yaml"


def get_user_config_dir() -> _pathlib.Path:
    """
    Get the user config directory.

    Respects JSONSMITH_CONFIG_DIR if set, otherwise uses the XDG path.
    """
    config_dir_env = _os.environ.get(ENV_CONFIG_DIR)
    if config_dir_env:
        return _pathlib.Path(config_dir_env)
    return _pathlib.Path.home() / ".config" / "jsonsmith"


def get_user_config_path() -> _pathlib.Path:
    """Path to config.yaml in the user config directory."""
    return get_user_config_dir() / "config.yaml"


def get_project_config_path(project_root: _pathlib.Path) -> _pathlib.Path:
    """Path to .jsonsmith/config.yaml within the project."""
    return project_root / PROJECT_CONFIG_DIRNAME / "config.yaml"
