"""FastAPI server for the MCP HTTP transport.

Routes:
- ``GET /health``: liveness probe
- ``POST /mcp``: JSON-RPC requests
- ``GET /sse``: one-shot discovery stream announcing the ``/mcp`` URL
- ``GET /``: service description
Anything else gets a plain-text 404.
"""

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import (
    JSONResponse,
    PlainTextResponse,
    Response,
    StreamingResponse,
)
from mcp.types import INVALID_REQUEST, PARSE_ERROR
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config.settings import Settings
from ..mcp.dispatcher import create_dispatcher
from ..mcp.processor import McpRequestProcessor, jsonrpc_error
from ..mcp.tools import TOOL_NAMES

logger = structlog.get_logger()

SERVICE_ID = "telegram-cloud"
SERVICE_TITLE = "Telegram Cloud MCP"
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


def _endpoint_url(request: Request, settings: Settings) -> str:
    origin = settings.public_base_url or str(request.base_url).rstrip("/")
    return f"{origin}/mcp"


def create_api_app(
    settings: Settings,
    processor: Optional[McpRequestProcessor] = None,
) -> FastAPI:
    """Create the FastAPI application.

    When ``processor`` is omitted one is built from ``settings`` and its HTTP
    clients are closed on shutdown.
    """
    owns_processor = processor is None
    if processor is None:
        processor = McpRequestProcessor(create_dispatcher(settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("MCP HTTP server starting", voice_provider=settings.voice_provider)
        yield
        if owns_processor:
            await processor.dispatcher.close()
        logger.info("MCP HTTP server stopped")

    app = FastAPI(
        title=SERVICE_TITLE,
        version="1.0.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    @app.exception_handler(StarletteHTTPException)
    async def not_found(request: Request, exc: StarletteHTTPException) -> Response:
        # Unknown paths and wrong methods both fall through to 404.
        return PlainTextResponse("Not found", status_code=404)

    @app.get("/health")
    async def health_check() -> Dict[str, str]:
        return {"status": "ok", "service": SERVICE_ID}

    @app.post("/mcp")
    async def mcp_endpoint(request: Request) -> JSONResponse:
        """Handle one JSON-RPC request."""
        try:
            payload: Any = await request.json()
        except ValueError:
            logger.warning("Rejected unparseable MCP request body")
            return JSONResponse(
                jsonrpc_error(None, PARSE_ERROR, "Parse error"), status_code=400
            )

        if not isinstance(payload, dict):
            logger.warning(
                "Rejected MCP request that is not a JSON object",
                body_type=type(payload).__name__,
            )
            return JSONResponse(
                jsonrpc_error(None, INVALID_REQUEST, "Invalid Request"),
                status_code=400,
            )

        return JSONResponse(await processor.process(payload))

    @app.get("/sse")
    async def sse_endpoint(request: Request) -> StreamingResponse:
        """Announce the JSON-RPC endpoint, then close the stream."""
        endpoint = _endpoint_url(request, settings)

        async def events() -> AsyncIterator[str]:
            yield f"event: endpoint\ndata: {endpoint}\n\n"

        return StreamingResponse(
            events(), media_type="text/event-stream", headers=SSE_HEADERS
        )

    @app.get("/")
    async def service_info() -> Response:
        info = {
            "service": SERVICE_TITLE,
            "endpoints": {
                "mcp": "/mcp (POST)",
                "sse": "/sse (GET)",
                "health": "/health (GET)",
            },
            "tools": TOOL_NAMES,
            "voiceEnabled": settings.voice_enabled,
            "voiceProvider": settings.voice_provider,
        }
        return Response(
            content=json.dumps(info, indent=2), media_type="application/json"
        )

    return app


async def run_api_server(settings: Settings) -> None:
    """Run the FastAPI server using uvicorn."""
    import uvicorn

    app = create_api_app(settings)

    config = uvicorn.Config(
        app=app,
        host=settings.api_server_host,
        port=settings.api_server_port,
        log_level="info" if not settings.debug else "debug",
    )
    server = uvicorn.Server(config)
    await server.serve()
