"""
Main entry point for GistPad MCP Server.

This module provides the main() function and server initialization.
"""

import asyncio
import sys

import structlog
from mcp.server.stdio import stdio_server

from .client import GistClient
from .config import Settings, load_settings
from .context import AppContext
from .logging import configure_logging
from .notifications import SessionNotifier
from .server import create_server, initialization_options

logger = structlog.get_logger(__name__)


async def serve(settings: Settings) -> None:
    async with GistClient(settings.github_token, api_url=settings.api_url) as client:
        context = AppContext.create(settings, client, SessionNotifier())
        server = create_server(context)

        async with stdio_server() as (read_stream, write_stream):
            logger.info("server_started", transport="stdio")
            await server.run(read_stream, write_stream, initialization_options(server, context))


def main(argv: list[str] | None = None):
    """Main entry point."""
    settings = load_settings(argv)
    configure_logging(settings.log_level)

    if not settings.github_token:
        logger.error("missing_github_token")
        sys.exit("GITHUB_TOKEN environment variable is required")

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
