"""
Tool system for jsonsmith.

Tools are how an agent reads and edits JSON documents.
"""

from jsonsmith.tools.base import (
    InputValidation,
    MetricsCollector,
    SandboxMixin,
    Tool,
    ToolMetrics,
    ToolResult,
)
from jsonsmith.tools.dispatcher import ToolDispatcher, create_dispatcher
from jsonsmith.tools.document import (
    DeleteJsonValueTool,
    DocumentTool,
    MergeDuplicateKeysTool,
    MergeJsonValueTool,
    ReadJsonValueTool,
    WriteJsonValueTool,
)
from jsonsmith.tools.multi import (
    DeleteMultipleJsonValuesTool,
    MergeMultipleJsonValuesTool,
    MultiDocumentTool,
    ReadMultipleJsonValuesTool,
    WriteMultipleJsonValuesTool,
)
from jsonsmith.tools.registry import (
    BUILTIN_TOOL_NAMES,
    ToolRegistry,
    build_registry_from_settings,
)
from jsonsmith.tools.sandbox import PathValidationError, SandboxConfig

__all__ = [
    # Base
    "InputValidation",
    "MetricsCollector",
    "SandboxMixin",
    "Tool",
    "ToolMetrics",
    "ToolResult",
    # Document tools
    "DocumentTool",
    "ReadJsonValueTool",
    "WriteJsonValueTool",
    "DeleteJsonValueTool",
    "MergeJsonValueTool",
    "MergeDuplicateKeysTool",
    # Multi-document tools
    "MultiDocumentTool",
    "ReadMultipleJsonValuesTool",
    "WriteMultipleJsonValuesTool",
    "DeleteMultipleJsonValuesTool",
    "MergeMultipleJsonValuesTool",
    # Registry and dispatch
    "BUILTIN_TOOL_NAMES",
    "ToolRegistry",
    "build_registry_from_settings",
    "ToolDispatcher",
    "create_dispatcher",
    # Sandbox
    "PathValidationError",
    "SandboxConfig",
]
