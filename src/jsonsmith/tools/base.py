"""
Base classes for the tool system.

Tools are how an agent edits documents. Each tool has a name,
description, input schema, and execute method.
"""

from __future__ import annotations

import abc as _abc
import dataclasses as _dataclasses
import datetime as _datetime
import pathlib as _pathlib
import typing as _typing

import jsonsmith.tools.sandbox as sandbox


@_dataclasses.dataclass
class ToolResult:
    """
    Result of executing a tool.

    All tools return this standardized result format.
    """

    success: bool
    output: str
    error: str | None = None

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to JSON-serializable dict."""
        return {
            "success": self.success,
            "output": self.output,
            "error": self.error,
        }

    def to_text(self) -> str:
        """Render for an agent: output on success, "Error: ..." on failure."""
        if self.success:
            return self.output
        return f"Error: {self.error}"


@_dataclasses.dataclass
class InputValidation:
    """
    Outcome of checking tool input against the tool's schema.

    Errors block execution; warnings (e.g. unknown keys) are passed
    back to the caller alongside the result.
    """

    errors: list[str] = _dataclasses.field(default_factory=list)
    warnings: list[str] = _dataclasses.field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


_JSON_TYPE_CHECKS: dict[str, _typing.Callable[[_typing.Any], bool]] = {
    "string": lambda v: isinstance(v, str),
    # bool is an int subclass; JSON keeps them apart
    "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "array": lambda v: isinstance(v, list),
    "object": lambda v: isinstance(v, dict),
    "null": lambda v: v is None,
}


def _matches_type(value: _typing.Any, schema: dict[str, _typing.Any]) -> bool:
    expected = schema.get("type")
    if expected is None:
        return True
    if isinstance(expected, list):
        return any(_JSON_TYPE_CHECKS.get(t, lambda _v: True)(value) for t in expected)
    return _JSON_TYPE_CHECKS.get(expected, lambda _v: True)(value)


@_dataclasses.dataclass
class ToolMetrics:
    """
    Metrics for a single tool's usage.

    Tracks call counts, durations, and success rates for observability.
    """

    tool_name: str
    call_count: int = 0
    success_count: int = 0
    failure_count: int = 0
    total_duration_ms: float = 0.0
    last_used: str | None = None  # ISO timestamp

    @property
    def success_rate(self) -> float:
        """Success rate as a percentage (0.0 to 100.0)."""
        if self.call_count == 0:
            return 0.0
        return (self.success_count / self.call_count) * 100.0

    @property
    def average_duration_ms(self) -> float:
        """Average duration per call in milliseconds."""
        if self.call_count == 0:
            return 0.0
        return self.total_duration_ms / self.call_count

    def record_call(
        self,
        success: bool,
        duration_ms: float,
        timestamp: str | None = None,
    ) -> None:
        """
        Record a tool call.

        Args:
            success: Whether the call succeeded
            duration_ms: How long the call took in milliseconds
            timestamp: ISO timestamp of the call (default: now)
        """
        self.call_count += 1
        if success:
            self.success_count += 1
        else:
            self.failure_count += 1
        self.total_duration_ms += duration_ms
        self.last_used = timestamp or _datetime.datetime.now(_datetime.UTC).isoformat()

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to JSON-serializable dict."""
        return {
            "tool_name": self.tool_name,
            "call_count": self.call_count,
            "success_count": self.success_count,
            "failure_count": self.failure_count,
            "total_duration_ms": self.total_duration_ms,
            "average_duration_ms": self.average_duration_ms,
            "success_rate": self.success_rate,
            "last_used": self.last_used,
        }


class MetricsCollector:
    """
    Collects tool metrics across a session.

    Metrics are recorded for every dispatched tool call.
    """

    def __init__(self) -> None:
        self._metrics: dict[str, ToolMetrics] = {}

    def record(
        self,
        tool_name: str,
        success: bool,
        duration_ms: float,
        timestamp: str | None = None,
    ) -> None:
        """Record a tool call."""
        if tool_name not in self._metrics:
            self._metrics[tool_name] = ToolMetrics(tool_name=tool_name)
        self._metrics[tool_name].record_call(success, duration_ms, timestamp)

    def get(self, tool_name: str) -> ToolMetrics | None:
        """Get metrics for a specific tool."""
        return self._metrics.get(tool_name)

    def all(self) -> list[ToolMetrics]:
        """Get all tool metrics, sorted by call count (descending)."""
        return sorted(
            self._metrics.values(),
            key=lambda m: m.call_count,
            reverse=True,
        )

    def to_dict(self) -> dict[str, dict[str, _typing.Any]]:
        """Convert all metrics to JSON-serializable dict."""
        return {name: m.to_dict() for name, m in self._metrics.items()}

    def summary(self) -> dict[str, _typing.Any]:
        """Get a summary of all metrics."""
        total_calls = sum(m.call_count for m in self._metrics.values())
        total_success = sum(m.success_count for m in self._metrics.values())
        total_duration = sum(m.total_duration_ms for m in self._metrics.values())

        return {
            "total_calls": total_calls,
            "total_success": total_success,
            "total_failures": total_calls - total_success,
            "success_rate": (total_success / total_calls * 100.0) if total_calls else 0.0,
            "total_duration_ms": total_duration,
            "tools_used": len(self._metrics),
        }


class Tool(_abc.ABC):
    """
    Abstract base class for all tools.

    Subclasses must implement:
    - name (property): The tool's identifier (used in tool calls)
    - description (property): Human-readable description for the agent
    - input_schema (property): JSON schema for input validation
    - execute(): The actual tool implementation

    Optional metadata (override for richer tool information):
    - version (property): Tool version string (default: "0.0.0")
    - categories (property): List of category tags (default: [])
    """

    @property
    @_abc.abstractmethod
    def name(self) -> str:
        """Tool name (e.g., 'read_json_value')."""
        ...

    @property
    @_abc.abstractmethod
    def description(self) -> str:
        """Human-readable description for the agent."""
        ...

    @property
    @_abc.abstractmethod
    def input_schema(self) -> dict[str, _typing.Any]:
        """
        JSON schema for tool input.

        This schema is published to the agent to describe what parameters
        the tool accepts, and drives validate_input().
        """
        ...

    @_abc.abstractmethod
    async def execute(self, input: dict[str, _typing.Any]) -> ToolResult:
        """
        Execute the tool with the given input.

        Args:
            input: Dictionary matching the input schema

        Returns:
            ToolResult with success status, output, and optional error
        """
        ...

    # Optional metadata properties with null-ish defaults

    @property
    def version(self) -> str:
        """Tool version string. "0.0.0" means not tracked."""
        return "0.0.0"

    @property
    def categories(self) -> list[str]:
        """Category tags for tool organization."""
        return []

    @property
    def requires_permission(self) -> bool:
        """
        Whether this tool modifies documents.

        Read-only tools return False.
        """
        return True

    def validate_input(self, input: _typing.Any) -> InputValidation:
        """
        Check input against input_schema.

        Only the top-level properties are checked: required keys must be
        present, declared types must match (array item types included),
        and undeclared keys produce warnings.
        """
        validation = InputValidation()
        if not isinstance(input, dict):
            validation.errors.append(
                f"Input must be an object, got {type(input).__name__}"
            )
            return validation

        schema = self.input_schema
        properties: dict[str, _typing.Any] = schema.get("properties", {})

        for key in schema.get("required", []):
            if key not in input:
                validation.errors.append(f"Missing required field: {key}")

        for key, value in input.items():
            prop = properties.get(key)
            if prop is None:
                validation.warnings.append(f"Unknown parameter ignored: {key}")
                continue
            if not _matches_type(value, prop):
                validation.errors.append(
                    f"Field '{key}' must be of type {prop['type']}"
                )
                continue
            items = prop.get("items")
            if isinstance(value, list) and items:
                if not all(_matches_type(item, items) for item in value):
                    validation.errors.append(
                        f"Field '{key}' items must be of type {items['type']}"
                    )

        return validation

    def to_api_format(self) -> dict[str, _typing.Any]:
        """Tool definition in the MCP/Anthropic shape."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema,
        }

    def __repr__(self) -> str:
        return f"<Tool {self.name}>"

    def _require_input(
        self,
        input: dict[str, _typing.Any],
        key: str,
        *,
        label: str | None = None,
    ) -> _typing.Any:
        """
        Get a required input value, returning an error ToolResult if missing.

        Args:
            input: The input dictionary from execute()
            key: The key to look up
            label: Human-readable name for error messages (defaults to key)

        Returns:
            The input value if present and non-empty, or a ToolResult error
        """
        value = input.get(key)
        if value is None or value == "" or value == []:
            return ToolResult(
                success=False,
                output="",
                error=f"No {label or key} provided",
            )
        return value


class SandboxMixin:
    """
    Mixin providing document path validation for tools.

    Tools that accept document paths inherit from this mixin and set
    _base_dir and _sandbox_config in their __init__.

    Attributes:
        _base_dir: Base directory for relative path resolution
        _sandbox_config: Sandbox configuration (or None for lazy initialization)
    """

    _base_dir: _pathlib.Path
    _sandbox_config: sandbox.SandboxConfig | None

    def _get_sandbox_config(self) -> sandbox.SandboxConfig:
        """Get or create the sandbox configuration."""
        if self._sandbox_config is None:
            self._sandbox_config = sandbox.SandboxConfig(base_dir=self._base_dir)
        return self._sandbox_config

    def _resolve_and_validate(self, path: str) -> _pathlib.Path:
        """
        Resolve a document path and validate it against sandbox rules.

        Raises:
            PathValidationError: If the path is not allowed
        """
        return sandbox.resolve_and_validate(path, self._get_sandbox_config())

    def _resolve_path_or_error(self, path: str) -> _pathlib.Path | ToolResult:
        """Like _resolve_and_validate, but returns a ToolResult on failure."""
        try:
            return self._resolve_and_validate(path)
        except sandbox.PathValidationError as e:
            return ToolResult(success=False, output="", error=str(e))
