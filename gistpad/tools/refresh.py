"""
Cache refresh tool.
"""

import asyncio

from ..context import AppContext
from .registry import NoArgs, ToolEntry


async def refresh_gists(args: NoArgs, context: AppContext) -> str:
    await asyncio.gather(
        context.gist_store.refresh(),
        context.starred_gist_store.refresh(),
    )
    return "Gists refreshed!"


TOOLS = [
    ToolEntry(
        name="refresh_gists",
        description="Refresh the server's cache of gists, to ensure it picks up "
                    "any changes made by external clients.",
        handler=refresh_gists,
    ),
]
