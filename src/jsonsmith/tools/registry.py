"""
Tool registry for managing available tools.

The registry provides a central place to register, look up, and list tools.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import jsonsmith.tools.base as base

_logger = _logging.getLogger(__name__)


class ToolRegistry:
    """
    Registry for tool instances.

    Tools can be registered by name and looked up for execution.
    The registry also provides listing and schema introspection.
    """

    def __init__(self) -> None:
        self._tools: dict[str, base.Tool] = {}

    def register(self, tool: base.Tool) -> None:
        """
        Register a tool instance.

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def get(self, name: str) -> base.Tool | None:
        """Get a tool by name (case-sensitive), or None if not found."""
        return self._tools.get(name)

    def get_or_raise(self, name: str) -> base.Tool:
        """
        Get a tool by name, raising if not found.

        Raises:
            KeyError: If tool is not found
        """
        tool = self._tools.get(name)
        if tool is None:
            available = ", ".join(sorted(self._tools.keys()))
            raise KeyError(f"Tool '{name}' not found. Available: {available}")
        return tool

    def list_tools(self) -> list[base.Tool]:
        """List all registered tools, sorted by name."""
        return sorted(self._tools.values(), key=lambda t: t.name)

    def list_names(self) -> list[str]:
        """Sorted list of tool names."""
        return sorted(self._tools.keys())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __iter__(self) -> _typing.Iterator[base.Tool]:
        return iter(self.list_tools())


def build_registry_from_settings(
    settings: _typing.Any,  # jsonsmith.config.Settings, but avoid circular import
) -> ToolRegistry:
    """
    Build a tool registry configured from Settings.

    All tools share one DocumentStore (documents.* settings) and one
    SandboxConfig (sandbox.* settings). Tools listed under tools.disabled
    are skipped.
    """
    import jsonsmith.document as document
    import jsonsmith.tools.document as document_tools
    import jsonsmith.tools.multi as multi
    import jsonsmith.tools.sandbox as sandbox

    registry = ToolRegistry()
    disabled_tools: set[str] = settings.get_disabled_tools()

    store = document.DocumentStore.from_settings(settings)
    sandbox_config = sandbox.SandboxConfig.from_settings(settings)

    tool_classes: list[type[base.Tool]] = [
        document_tools.ReadJsonValueTool,
        document_tools.WriteJsonValueTool,
        document_tools.DeleteJsonValueTool,
        document_tools.MergeJsonValueTool,
        document_tools.MergeDuplicateKeysTool,
        multi.ReadMultipleJsonValuesTool,
        multi.WriteMultipleJsonValuesTool,
        multi.DeleteMultipleJsonValuesTool,
        multi.MergeMultipleJsonValuesTool,
    ]
    for tool_class in tool_classes:
        tool = tool_class(
            store=store,
            base_dir=sandbox_config.base_dir,
            sandbox_config=sandbox_config,
            parse_json_strings=settings.tools.parse_json_strings,
        )
        if tool.name in disabled_tools:
            _logger.debug("Tool %s disabled by config", tool.name)
            continue
        registry.register(tool)

    unknown = disabled_tools - BUILTIN_TOOL_NAMES
    if unknown:
        _logger.warning("Unknown tools in tools.disabled: %s", ", ".join(sorted(unknown)))

    return registry


# Builtin tool names for reference
BUILTIN_TOOL_NAMES = frozenset({
    "read_json_value",
    "write_json_value",
    "delete_json_value",
    "merge_json_value",
    "merge_duplicate_keys",
    "read_multiple_json_values",
    "write_multiple_json_values",
    "delete_multiple_json_values",
    "merge_multiple_json_values",
})
