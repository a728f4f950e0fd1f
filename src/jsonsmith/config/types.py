"""Configuration type definitions for jsonsmith settings.

This module defines the Pydantic models used to represent configuration
sections nested within the main Settings class:

- DocumentsConfig: how documents are serialized when written back
- SandboxConfig: which document paths tools may touch
- LoggingConfig: log level and the JSONL edit audit log
- ToolsConfig: disabled tools and value coercion

All types use `extra="allow"` to preserve unknown fields, so config files
can be audited for typos with `collect_all_extra_fields()`.
"""

import typing as _typing

import pydantic as _pydantic

import jsonsmith.constants as constants

# =============================================================================
# Base class with introspection
# =============================================================================


class ConfigBase(_pydantic.BaseModel):
    """
    Base class for all config types.

    All config types use `extra="allow"` so unknown fields are preserved
    rather than silently dropped.
    """

    model_config = _pydantic.ConfigDict(extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Return fields that were provided but not in the schema."""
        return dict(self.model_extra) if self.model_extra else {}

    def collect_all_extra_fields(
        self,
        prefix: str = "",
    ) -> dict[str, _typing.Any]:
        """
        Recursively collect extra fields from this config and nested configs.

        Returns a flat dict with dotted paths as keys, e.g.:
            {"documents.indnet": 4}
        """
        result: dict[str, _typing.Any] = {}

        for key, value in self.get_extra_fields().items():
            path = f"{prefix}.{key}" if prefix else key
            result[path] = value

        for field_name in self.__class__.model_fields:
            value = getattr(self, field_name, None)
            if isinstance(value, ConfigBase):
                child_prefix = f"{prefix}.{field_name}" if prefix else field_name
                result.update(value.collect_all_extra_fields(child_prefix))

        return result


# =============================================================================
# Document Settings
# =============================================================================


class DocumentsConfig(ConfigBase):
    """
    Serialization of written documents.

    YAML section: documents.*
    """

    indent: int | None = _pydantic.Field(default=constants.DEFAULT_INDENT, ge=0, le=16)
    """Indentation width. None writes compact JSON."""

    ensure_ascii: bool = False
    """Escape non-ASCII characters (translation catalogs usually want False)."""

    encoding: str = constants.DEFAULT_ENCODING
    """Text encoding for reads and writes."""

    trailing_newline: bool = False
    """End written files with a newline."""


# =============================================================================
# Sandbox Settings
# =============================================================================


class SandboxConfig(ConfigBase):
    """
    Document path policy.

    YAML section: sandbox.*
    """

    require_absolute_paths: bool = True
    """Reject relative document paths."""

    allowed_paths: list[str] = _pydantic.Field(default_factory=list)
    """Directories documents must live under. Empty = anywhere."""


# =============================================================================
# Logging Settings
# =============================================================================


class LoggingConfig(ConfigBase):
    """
    Logging settings.

    YAML section: logging.*
    """

    level: _typing.Literal["debug", "info", "warning", "error"] = "warning"
    """Log level for the jsonsmith logger (written to stderr)."""

    audit_enabled: bool = False
    """Record every tool call and result to a JSONL audit file."""

    audit_file: str | None = None
    """Audit file path. None = auto-named file in audit_dir."""

    audit_dir: str | None = None
    """Directory for auto-named audit files. None = system temp dir."""


# =============================================================================
# Tool Settings
# =============================================================================


class ToolsConfig(ConfigBase):
    """
    Tool-related configuration.

    YAML section: tools.*

    YAML shape:
        tools:
          disabled:
            delete_json_value: true
          parse_json_strings: true
    """

    disabled: dict[str, bool] = _pydantic.Field(default_factory=dict)
    """
    Tools to disable entirely.
    Dict for layer mergeability. Key is tool name, value is whether disabled.
    """

    parse_json_strings: bool = True
    """Decode string values that hold a JSON object or array before writing."""

    def is_tool_disabled(self, name: str) -> bool:
        """Check if a tool is disabled."""
        return self.disabled.get(name, False)

    def get_disabled_tools(self) -> set[str]:
        """Names of all disabled tools."""
        return {name for name, disabled in self.disabled.items() if disabled}
