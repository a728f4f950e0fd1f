"""
MCP server for jsonsmith.

Exposes the document tools to agents over the Model Context Protocol.
"""

from jsonsmith.server.app import build_handlers, call_tool, create_server, run_server

__all__ = ["build_handlers", "call_tool", "create_server", "run_server"]
