"""
Handler-layer errors for GistPad MCP Server.

Missing gists/files/comments and broken preconditions are reported to the client
as MCP errors. Failures from the GitHub API propagate as GitHubApiError.
"""

from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, INVALID_REQUEST, ErrorData

from .context import AppContext
from .models import Gist


def invalid_params(message: str) -> McpError:
    return McpError(ErrorData(code=INVALID_PARAMS, message=message))


def invalid_request(message: str) -> McpError:
    return McpError(ErrorData(code=INVALID_REQUEST, message=message))


async def find_gist_by_id(context: AppContext, gist_id: str, message: str | None = None) -> Gist:
    """Find a gist in your gists, raising INVALID_PARAMS if it isn't there."""
    gist = await context.gist_store.find(gist_id)
    if gist is None:
        raise invalid_params(message or f'Gist with ID "{gist_id}" not found')
    return gist
