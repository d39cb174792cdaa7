"""MCP tool catalog, dispatch and JSON-RPC processing."""

from .dispatcher import ToolDispatcher, create_dispatcher
from .processor import McpRequestProcessor
from .tools import TOOL_NAMES, TOOLS

__all__ = [
    "McpRequestProcessor",
    "ToolDispatcher",
    "create_dispatcher",
    "TOOLS",
    "TOOL_NAMES",
]
