"""HTTP transport for the MCP endpoint."""

from .server import create_api_app, run_api_server

__all__ = ["create_api_app", "run_api_server"]
