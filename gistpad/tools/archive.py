"""
Archive tools. A gist is archived by suffixing its description with " [Archived]".
"""

from ..context import AppContext
from ..errors import find_gist_by_id, invalid_params
from ..models import Gist
from ..utils import (
    archived_description,
    gist_summary,
    is_archived_gist,
    is_daily_note_gist,
    unarchived_description,
)
from .registry import GistIdArgs, NoArgs, ToolEntry


async def list_archived_gists(args: NoArgs, context: AppContext) -> dict:
    gists = await context.gist_store.get_all()
    archived = [g for g in gists if is_archived_gist(g)]
    return {"count": len(archived), "gists": [gist_summary(g) for g in archived]}


async def archive_gist(args: GistIdArgs, context: AppContext) -> str:
    gist = await find_gist_by_id(context, args.id)

    if is_daily_note_gist(gist):
        raise invalid_params("Cannot archive daily notes")

    if is_archived_gist(gist):
        raise invalid_params("Gist is already archived")

    data = await context.client.patch(f"/{args.id}", {"description": archived_description(gist.description)})
    context.gist_store.update(Gist.model_validate(data))
    return "Gist archived successfully"


async def unarchive_gist(args: GistIdArgs, context: AppContext) -> str:
    gist = await find_gist_by_id(context, args.id)

    if not is_archived_gist(gist):
        raise invalid_params("Gist is not archived")

    data = await context.client.patch(f"/{args.id}", {"description": unarchived_description(gist.description)})
    context.gist_store.update(Gist.model_validate(data))
    return "Gist unarchived successfully"


TOOLS = [
    ToolEntry(
        name="list_archived_gists",
        description="List all of your archived gists",
        handler=list_archived_gists,
    ),
    ToolEntry(
        name="archive_gist",
        description="Archive a gist by ID",
        handler=archive_gist,
        args_model=GistIdArgs,
    ),
    ToolEntry(
        name="unarchive_gist",
        description="Unarchive a gist by ID",
        handler=unarchive_gist,
        args_model=GistIdArgs,
    ),
]
