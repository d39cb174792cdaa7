"""MCP server exposing the Telegram tools over the stdio transport.

Serves the same tool catalog and dispatcher as the HTTP endpoint, for clients
that launch the server as a subprocess instead of connecting over HTTP.
"""

import json
from typing import Any, Dict, List, Optional

import structlog
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from src.config.settings import Settings

from .dispatcher import ToolDispatcher, create_dispatcher
from .processor import SERVER_NAME, SERVER_VERSION
from .tools import TOOLS

logger = structlog.get_logger()


async def list_tools() -> List[Tool]:
    """Return the full tool catalog."""
    return list(TOOLS)


async def call_tool(
    dispatcher: ToolDispatcher, name: str, arguments: Optional[Dict[str, Any]]
) -> List[TextContent]:
    """Run a tool and return its result as one pretty-printed text block."""
    result = await dispatcher.dispatch(name, arguments or {})
    text = json.dumps(result, indent=2, ensure_ascii=False)
    return [TextContent(type="text", text=text)]


def create_stdio_server(dispatcher: ToolDispatcher) -> Server:
    """Build a low-level MCP server wired to ``dispatcher``."""
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    server.list_tools()(list_tools)

    # Schemas are advertised only; handlers read what they need.
    @server.call_tool(validate_input=False)
    async def _call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        return await call_tool(dispatcher, name, arguments)

    return server


async def run_stdio_server(settings: Settings) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    dispatcher = create_dispatcher(settings)
    server = create_stdio_server(dispatcher)

    logger.info("Starting stdio MCP server", voice_provider=settings.voice_provider)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream, write_stream, server.create_initialization_options()
            )
    finally:
        await dispatcher.close()
        logger.info("Stdio MCP server stopped")


if __name__ == "__main__":
    from src.main import run

    raise SystemExit(run(["--transport", "stdio"]))
