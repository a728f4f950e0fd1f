"""jsonsmith MCP server implementation using FastMCP.

Every enabled tool in the registry is exposed under its registry name.
Handlers route through a ToolDispatcher and return plain text: the tool
output on success, "Error: ..." on failure. stdout belongs to the stdio
transport, so all logging goes to stderr.
"""

import contextlib as _contextlib
import logging as _logging
import typing as _typing

import fastmcp as _fastmcp

import jsonsmith
import jsonsmith.config as config
import jsonsmith.logging as jsonsmith_logging
import jsonsmith.tools as tools

_logger = _logging.getLogger(__name__)

SERVER_NAME = "jsonsmith"
SERVER_INSTRUCTIONS = (
    "Read, write, delete and deep-merge values in JSON files by dot-notation path "
    "(e.g. 'common.welcome'). File paths must be absolute. The *_multiple_* tools "
    "apply one operation to several files and return a per-file result map."
)

Handler = _typing.Callable[..., _typing.Awaitable[str]]


async def call_tool(
    dispatcher: tools.ToolDispatcher,
    name: str,
    tool_input: dict[str, _typing.Any],
) -> str:
    """Dispatch one call and render the result for the agent."""
    result = await dispatcher.execute(name, tool_input)
    return result.to_text()


def build_handlers(dispatcher: tools.ToolDispatcher) -> dict[str, Handler]:
    """
    Typed MCP handlers for every built-in tool, keyed by tool name.

    FastMCP derives each tool's input schema from the handler signature.
    Optional parameters left unset are not forwarded.
    """

    async def read_json_value(file_path: str, path: str) -> str:
        return await call_tool(
            dispatcher, "read_json_value", {"file_path": file_path, "path": path}
        )

    async def write_json_value(file_path: str, path: str, value: _typing.Any) -> str:
        return await call_tool(
            dispatcher,
            "write_json_value",
            {"file_path": file_path, "path": path, "value": value},
        )

    async def delete_json_value(file_path: str, path: str) -> str:
        return await call_tool(
            dispatcher, "delete_json_value", {"file_path": file_path, "path": path}
        )

    async def merge_json_value(
        file_path: str,
        value: _typing.Any,
        path: str | None = None,
    ) -> str:
        tool_input: dict[str, _typing.Any] = {"file_path": file_path, "value": value}
        if path is not None:
            tool_input["path"] = path
        return await call_tool(dispatcher, "merge_json_value", tool_input)

    async def merge_duplicate_keys(file_path: str, dry_run: bool = False) -> str:
        return await call_tool(
            dispatcher,
            "merge_duplicate_keys",
            {"file_path": file_path, "dry_run": dry_run},
        )

    async def read_multiple_json_values(file_paths: list[str], path: str) -> str:
        return await call_tool(
            dispatcher,
            "read_multiple_json_values",
            {"file_paths": file_paths, "path": path},
        )

    async def write_multiple_json_values(
        file_paths: list[str],
        path: str,
        value: _typing.Any,
    ) -> str:
        return await call_tool(
            dispatcher,
            "write_multiple_json_values",
            {"file_paths": file_paths, "path": path, "value": value},
        )

    async def delete_multiple_json_values(file_paths: list[str], path: str) -> str:
        return await call_tool(
            dispatcher,
            "delete_multiple_json_values",
            {"file_paths": file_paths, "path": path},
        )

    async def merge_multiple_json_values(
        file_paths: list[str],
        value: _typing.Any,
        path: str | None = None,
    ) -> str:
        tool_input: dict[str, _typing.Any] = {"file_paths": file_paths, "value": value}
        if path is not None:
            tool_input["path"] = path
        return await call_tool(dispatcher, "merge_multiple_json_values", tool_input)

    handlers: list[Handler] = [
        read_json_value,
        write_json_value,
        delete_json_value,
        merge_json_value,
        merge_duplicate_keys,
        read_multiple_json_values,
        write_multiple_json_values,
        delete_multiple_json_values,
        merge_multiple_json_values,
    ]
    return {handler.__name__: handler for handler in handlers}


def create_server(
    settings: config.Settings | None = None,
    *,
    dispatcher: tools.ToolDispatcher | None = None,
) -> _fastmcp.FastMCP:
    """
    Build the FastMCP app.

    Args:
        settings: Settings used to build the dispatcher (default: Settings()).
        dispatcher: Pre-built dispatcher; overrides settings when given.

    Returns:
        The FastMCP app, with one tool per enabled registry entry.
    """
    if dispatcher is None:
        dispatcher = tools.create_dispatcher(settings or config.Settings(), source="mcp")
    registry = dispatcher.registry

    @_contextlib.asynccontextmanager
    async def lifespan(_app: _fastmcp.FastMCP) -> _typing.AsyncIterator[None]:
        _logger.info("Starting jsonsmith MCP server")
        try:
            yield
        finally:
            summary = dispatcher.metrics.summary()
            _logger.info(
                "Shutting down jsonsmith MCP server (%d calls, %d failed)",
                summary["total_calls"],
                summary["total_failures"],
            )
            dispatcher.close()

    mcp = _fastmcp.FastMCP(
        SERVER_NAME,
        version=jsonsmith.__version__,
        instructions=SERVER_INSTRUCTIONS,
        lifespan=lifespan,
    )

    for name, handler in build_handlers(dispatcher).items():
        tool = registry.get(name) if registry is not None else None
        if tool is None:
            continue
        mcp.tool(name=name, description=tool.description)(handler)

    return mcp


def run_server(settings: config.Settings | None = None) -> None:
    """Serve the tool set over stdio until the client disconnects."""
    settings = settings or config.Settings()
    jsonsmith_logging.configure_logging(settings.logging.level)
    create_server(settings).run(transport="stdio")
