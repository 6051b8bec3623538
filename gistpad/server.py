"""
MCP server wiring for GistPad MCP Server.

Registers resource, subscription, prompt and tool handlers on a low-level MCP
Server, and runs the background cache refresh for the server's lifetime.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version
from typing import Any

import structlog
from mcp.server import NotificationOptions, Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.models import InitializationOptions
from mcp.types import GetPromptResult, Prompt, Resource, ResourceTemplate, TextContent, Tool
from pydantic import AnyUrl

from . import prompts, resources
from .config import SERVER_INSTRUCTIONS, SERVER_NAME
from .context import AppContext
from .notifications import SessionNotifier
from .tools import build_registry, to_text_content
from .utils import gist_id_from_uri

logger = structlog.get_logger(__name__)


def server_version() -> str:
    try:
        return version("gistpad-mcp")
    except PackageNotFoundError:
        return "0.0.0"


async def refresh_periodically(context: AppContext, interval: float) -> None:
    """Reload both stores every `interval` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        logger.info("background_refresh_started")
        results = await asyncio.gather(
            context.gist_store.refresh(),
            context.starred_gist_store.refresh(),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logger.error("background_refresh_failed", error=str(result))


def create_server(context: AppContext) -> Server:
    """Build the MCP server around an already constructed AppContext."""

    @asynccontextmanager
    async def lifespan(_server: Server) -> AsyncIterator[AppContext]:
        refresher = asyncio.create_task(
            refresh_periodically(context, context.settings.refresh_interval)
        )
        try:
            yield context
        finally:
            refresher.cancel()
            try:
                await refresher
            except asyncio.CancelledError:
                pass
            if isinstance(context.notifier, SessionNotifier):
                await context.notifier.drain()

    server = Server(
        SERVER_NAME,
        version=server_version(),
        instructions=SERVER_INSTRUCTIONS,
        lifespan=lifespan,
    )
    registry = build_registry(context.settings)

    def bind_session() -> None:
        # Notifications can only reach the client through its session
        if isinstance(context.notifier, SessionNotifier):
            context.notifier.bind(server.request_context.session)

    # ============== Resources ==============

    @server.list_resources()
    async def list_resources() -> list[Resource]:
        bind_session()
        return await resources.list_resources(context)

    @server.list_resource_templates()
    async def list_resource_templates() -> list[ResourceTemplate]:
        return resources.list_resource_templates()

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        bind_session()
        return await resources.read_resource(uri, context)

    @server.subscribe_resource()
    async def subscribe_resource(uri: AnyUrl) -> None:
        bind_session()
        context.gist_store.subscribe(gist_id_from_uri(str(uri)))
        logger.info("resource_subscribed", uri=str(uri))

    @server.unsubscribe_resource()
    async def unsubscribe_resource(uri: AnyUrl) -> None:
        context.gist_store.unsubscribe(gist_id_from_uri(str(uri)))
        logger.info("resource_unsubscribed", uri=str(uri))

    # ============== Prompts ==============

    if context.settings.include_prompts:

        @server.list_prompts()
        async def list_prompts() -> list[Prompt]:
            bind_session()
            return await prompts.list_prompts(context)

        @server.get_prompt()
        async def get_prompt(name: str, arguments: dict[str, str] | None) -> GetPromptResult:
            bind_session()
            return await prompts.get_prompt(name, arguments, context)

    # ============== Tools ==============

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        bind_session()
        return registry.list_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        bind_session()
        logger.info("tool_called", tool=name)
        result = await registry.call(name, arguments, context)
        return to_text_content(result)

    return server


def initialization_options(server: Server, context: AppContext) -> InitializationOptions:
    options = server.create_initialization_options(
        notification_options=NotificationOptions(
            prompts_changed=context.settings.include_prompts,
            resources_changed=True,
        ),
    )
    # Clients may subscribe to individual gists
    if options.capabilities.resources is not None:
        options.capabilities.resources.subscribe = True
    return options
