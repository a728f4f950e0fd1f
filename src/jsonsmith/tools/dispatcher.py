"""
Tool dispatch shared by the CLI and the MCP server.

Looks a tool up by name, validates its input, runs it, and records
metrics and (optionally) an audit trail. Every failure comes back as a
ToolResult; nothing raises to the caller.
"""

import logging as _logging
import time as _time
import typing as _typing

import jsonsmith.logging as jsonsmith_logging
import jsonsmith.tools.base as base
import jsonsmith.tools.registry as registry

_logger = _logging.getLogger(__name__)


class ToolDispatcher:
    """
    Executes tools by name with consistent validation and logging.

    Tool metrics are always collected during execution.
    """

    def __init__(
        self,
        tool_registry: registry.ToolRegistry | None,
        *,
        audit: jsonsmith_logging.EditLogger | None = None,
    ) -> None:
        """
        Initialize the dispatcher.

        Args:
            tool_registry: Registry of available tools.
            audit: Optional edit audit logger.
        """
        self._registry = tool_registry
        self._audit = audit
        self._metrics = base.MetricsCollector()

    @property
    def metrics(self) -> base.MetricsCollector:
        """Get the metrics collector for this dispatcher."""
        return self._metrics

    @property
    def registry(self) -> registry.ToolRegistry | None:
        return self._registry

    async def execute(
        self,
        name: str,
        input: dict[str, _typing.Any],
    ) -> base.ToolResult:
        """
        Execute a single tool call.

        Handles:
        - Tool lookup
        - Input validation (errors abort, warnings are prepended to output)
        - Execution and error handling
        - Metrics and audit logging

        Args:
            name: Registered tool name.
            input: Tool input.

        Returns:
            The result of tool execution.
        """
        if self._audit:
            self._audit.log_tool_call(tool_name=name, tool_input=input)

        if self._registry is None:
            return self._make_error_result(name, "No tool registry configured")

        tool = self._registry.get(name)
        if tool is None:
            return self._make_error_result(name, f"Unknown tool: {name}")

        validation = tool.validate_input(input)
        if not validation.is_valid:
            return self._make_error_result(
                name,
                f"Invalid input: {'; '.join(validation.errors)}",
            )

        start_time = _time.perf_counter()
        try:
            result = await tool.execute(input)
        except Exception as e:
            duration_ms = (_time.perf_counter() - start_time) * 1000
            self._metrics.record(name, False, duration_ms)
            _logger.exception("Tool %s raised", name)
            return self._make_error_result(name, str(e) or type(e).__name__, duration_ms)

        duration_ms = (_time.perf_counter() - start_time) * 1000
        self._metrics.record(name, result.success, duration_ms)

        if validation.has_warnings:
            warning_text = "Warning: " + "; ".join(validation.warnings) + "\n\n"
            result = base.ToolResult(
                success=result.success,
                output=warning_text + result.output,
                error=result.error,
            )

        self._log_result(name, result, duration_ms)
        return result

    def _make_error_result(
        self,
        name: str,
        error: str,
        duration_ms: float | None = None,
    ) -> base.ToolResult:
        """Create and log an error result."""
        result = base.ToolResult(success=False, output="", error=error)
        self._log_result(name, result, duration_ms)
        return result

    def _log_result(
        self,
        name: str,
        result: base.ToolResult,
        duration_ms: float | None = None,
    ) -> None:
        if result.success:
            _logger.info("%s succeeded", name)
        else:
            _logger.info("%s failed: %s", name, result.error)

        if self._audit:
            self._audit.log_tool_result(
                tool_name=name,
                success=result.success,
                output=result.output if result.success else None,
                error=result.error,
                duration_ms=duration_ms,
            )

    def close(self) -> None:
        """Close the audit log, if any."""
        if self._audit:
            self._audit.close()


def create_dispatcher(
    settings: _typing.Any,
    *,
    source: str = "unknown",
) -> ToolDispatcher:
    """Build a dispatcher (registry + audit log) from Settings."""
    audit = jsonsmith_logging.EditLogger.from_settings(settings, source=source)
    return ToolDispatcher(
        registry.build_registry_from_settings(settings),
        audit=audit if audit.enabled else None,
    )
