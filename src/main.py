"""Command-line entry point for Telegram Cloud MCP."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import structlog

from src import __version__
from src.config import load_config
from src.config.settings import Settings
from src.exceptions import ConfigurationError

logger = structlog.get_logger()


def setup_logging(level: str, debug: bool = False) -> None:
    """Configure structlog on top of stdlib logging, writing to stderr.

    Stdout stays free for the stdio MCP transport.
    """
    log_level = logging.DEBUG if debug else getattr(logging, level, logging.INFO)
    logging.basicConfig(
        level=log_level, format="%(message)s", stream=sys.stderr, force=True
    )
    # httpx logs full request URLs, which embed the bot token.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Telegram Bot API tools served over the Model Context Protocol"
    )
    parser.add_argument(
        "--transport",
        "-t",
        choices=["http", "stdio"],
        default="http",
        help="MCP transport (default: http)",
    )
    parser.add_argument("--host", default=None, help="HTTP bind address override")
    parser.add_argument(
        "--port", type=int, default=None, help="HTTP listen port override"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


async def serve(settings: Settings, transport: str) -> None:
    """Run the selected transport until it stops."""
    if transport == "stdio":
        from src.mcp.telegram_server import run_stdio_server

        await run_stdio_server(settings)
    else:
        from src.api.server import run_api_server

        await run_api_server(settings)


def run(argv: Optional[List[str]] = None) -> int:
    """Load configuration, set up logging and start serving."""
    args = parse_args(argv)

    overrides = {}
    if args.host:
        overrides["api_server_host"] = args.host
    if args.port:
        overrides["api_server_port"] = args.port
    if args.debug:
        overrides["debug"] = True

    setup_logging("INFO", debug=args.debug)
    try:
        settings = load_config(**overrides)
    except ConfigurationError as e:
        logger.error("Configuration error", error=str(e))
        return 1
    setup_logging(settings.log_level, debug=settings.debug)

    logger.info(
        "Starting Telegram Cloud MCP", version=__version__, transport=args.transport
    )
    try:
        asyncio.run(serve(settings, args.transport))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
