"""JSON-RPC method handling for the MCP endpoint.

Every request is handled on its own; nothing is remembered between calls.
This is the only place where failures are turned into JSON-RPC errors.
"""

import json
from typing import Any, Dict, Mapping, Optional

import structlog
from mcp.types import INTERNAL_ERROR, METHOD_NOT_FOUND, TextContent

from .dispatcher import ToolDispatcher
from .tools import list_tool_descriptors

logger = structlog.get_logger()

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "telegram-cloud"
SERVER_VERSION = "1.0.0"

INITIALIZE_RESULT: Dict[str, Any] = {
    "protocolVersion": PROTOCOL_VERSION,
    "capabilities": {"tools": {}},
    "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
}


def jsonrpc_result(request_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def jsonrpc_error(request_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {"code": code, "message": message},
    }


def format_tool_result(result: Any) -> Dict[str, Any]:
    """Wrap a dispatcher result as MCP content: one pretty-printed text block."""
    text = json.dumps(result, indent=2, ensure_ascii=False)
    content = TextContent(type="text", text=text)
    return {"content": [content.model_dump(exclude_none=True)]}


class McpRequestProcessor:
    """Answer ``initialize``, ``tools/list`` and ``tools/call``."""

    def __init__(self, dispatcher: ToolDispatcher):
        self.dispatcher = dispatcher

    async def process(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        request_id = request.get("id")
        method = request.get("method")
        params = request.get("params")
        if not isinstance(params, Mapping):
            params = {}

        try:
            if method == "initialize":
                return jsonrpc_result(request_id, INITIALIZE_RESULT)

            if method == "tools/list":
                return jsonrpc_result(request_id, {"tools": list_tool_descriptors()})

            if method == "tools/call":
                result = await self._call_tool(params)
                return jsonrpc_result(request_id, format_tool_result(result))

            logger.info("Unsupported JSON-RPC method", method=method)
            return jsonrpc_error(
                request_id, METHOD_NOT_FOUND, f"Method not found: {method}"
            )
        except Exception as e:
            logger.error(
                "JSON-RPC request failed",
                method=method,
                error=str(e),
                error_type=type(e).__name__,
            )
            return jsonrpc_error(request_id, INTERNAL_ERROR, str(e) or "Unknown error")

    async def _call_tool(self, params: Mapping[str, Any]) -> Any:
        name: Optional[str] = params.get("name")
        args = params.get("arguments") or {}
        return await self.dispatcher.dispatch(name, args)
