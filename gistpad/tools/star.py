"""
Star tools. Starred gists live in their own store, separate from your gists.
"""

from ..context import AppContext
from ..models import Gist
from ..utils import gist_summary
from .registry import GistIdArgs, NoArgs, ToolEntry


async def list_starred_gists(args: NoArgs, context: AppContext) -> dict:
    starred = await context.starred_gist_store.get_all()
    return {"count": len(starred), "gists": [gist_summary(g) for g in starred]}


async def star_gist(args: GistIdArgs, context: AppContext) -> str:
    await context.client.put(f"/{args.id}/star")

    # Starring someone else's gist means it won't be in your gists
    gist = await context.gist_store.find(args.id)
    if gist is None:
        gist = Gist.model_validate(await context.client.get(f"/{args.id}"))

    context.starred_gist_store.add(gist)
    return "Gist starred successfully"


async def unstar_gist(args: GistIdArgs, context: AppContext) -> str:
    await context.client.delete(f"/{args.id}/star")
    context.starred_gist_store.remove(args.id)
    return "Gist unstarred successfully"


TOOLS = [
    ToolEntry(
        name="list_starred_gists",
        description="List all your starred gists",
        handler=list_starred_gists,
    ),
    ToolEntry(
        name="star_gist",
        description="Star a gist",
        handler=star_gist,
        args_model=GistIdArgs,
    ),
    ToolEntry(
        name="unstar_gist",
        description="Unstar a gist",
        handler=unstar_gist,
        args_model=GistIdArgs,
    ),
]
