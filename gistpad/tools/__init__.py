"""
MCP tools for GistPad MCP Server.

Each module contributes a TOOLS list; build_registry composes them into the
dispatch table used by the server.
"""

from ..config import Settings
from . import archive, comments, daily, files, gists, prompts, refresh, star
from .registry import GistIdArgs, NoArgs, ToolEntry, ToolRegistry, to_text_content


def build_registry(settings: Settings) -> ToolRegistry:
    entries = [
        *gists.TOOLS,
        *files.TOOLS,
        *comments.TOOLS,
        *archive.TOOLS,
        *star.TOOLS,
        *daily.TOOLS,
        *refresh.TOOLS,
    ]
    if settings.include_prompts:
        entries.extend(prompts.TOOLS)
    return ToolRegistry(entries)


__all__ = [
    "GistIdArgs",
    "NoArgs",
    "ToolEntry",
    "ToolRegistry",
    "build_registry",
    "to_text_content",
]
