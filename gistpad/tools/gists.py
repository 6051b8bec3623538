"""
Gist tools: list, read, create, delete, describe and duplicate gists.
"""

import structlog
from pydantic import BaseModel, Field

from ..context import AppContext
from ..errors import find_gist_by_id
from ..models import Gist
from ..utils import (
    gist_content,
    gist_summary,
    is_archived_gist,
    is_daily_note_gist,
    is_prompt_gist,
)
from .registry import GistIdArgs, NoArgs, ToolEntry

logger = structlog.get_logger(__name__)


class CreateGistArgs(BaseModel):
    description: str = Field(description="Description of the gist")
    content: str = Field(description="Content of the gist's file")
    filename: str = Field(default="README.md", description="Name of the gist's file")
    public: bool = Field(default=False, description="Whether the gist should be public")


class UpdateDescriptionArgs(BaseModel):
    id: str = Field(description="The ID of the gist to update")
    description: str = Field(description="The new description for the gist")


async def list_gists(args: NoArgs, context: AppContext) -> dict:
    gists = await context.gist_store.get_all()
    visible = [
        g for g in gists
        if not is_daily_note_gist(g) and not is_archived_gist(g) and not is_prompt_gist(g)
    ]
    return {"count": len(visible), "gists": [gist_summary(g) for g in visible]}


async def get_gist(args: GistIdArgs, context: AppContext) -> dict:
    # Always read through to GitHub, list results don't carry file content
    gist = Gist.model_validate(await context.client.get(f"/{args.id}"))
    context.gist_store.update(gist)
    return gist_summary(gist)


async def create_gist(args: CreateGistArgs, context: AppContext) -> dict:
    data = await context.client.post("", {
        "description": args.description,
        "public": args.public,
        "files": {args.filename: {"content": gist_content(args.content)}},
    })
    gist = Gist.model_validate(data)
    context.gist_store.add(gist)
    logger.info("gist_created", gist_id=gist.id)
    return gist_summary(gist)


async def delete_gist(args: GistIdArgs, context: AppContext) -> str:
    await find_gist_by_id(context, args.id)
    await context.client.delete(f"/{args.id}")
    context.gist_store.remove(args.id)
    logger.info("gist_deleted", gist_id=args.id)
    return "Gist deleted successfully"


async def update_gist_description(args: UpdateDescriptionArgs, context: AppContext) -> dict:
    await find_gist_by_id(context, args.id)
    data = await context.client.patch(f"/{args.id}", {"description": args.description})
    gist = Gist.model_validate(data)
    context.gist_store.update(gist)
    return gist_summary(gist)


async def duplicate_gist(args: GistIdArgs, context: AppContext) -> dict:
    source = await find_gist_by_id(context, args.id)
    source = await context.gist_store.ensure_content_loaded(source)

    data = await context.client.post("", {
        "description": f"{source.description or ''} (Copy)".strip(),
        "public": source.public,
        "files": {
            filename: {"content": gist_content(file.content or "")}
            for filename, file in source.files.items()
        },
    })
    gist = Gist.model_validate(data)
    context.gist_store.add(gist)
    logger.info("gist_duplicated", source_id=source.id, gist_id=gist.id)
    return gist_summary(gist)


TOOLS = [
    ToolEntry(
        name="list_gists",
        description="List all of your GitHub Gists (excluding daily notes, prompts and archived gists)",
        handler=list_gists,
    ),
    ToolEntry(
        name="get_gist",
        description="Get a specific GitHub Gist by ID, including the contents of its files",
        handler=get_gist,
        args_model=GistIdArgs,
    ),
    ToolEntry(
        name="create_gist",
        description="Create a new GitHub Gist",
        handler=create_gist,
        args_model=CreateGistArgs,
    ),
    ToolEntry(
        name="delete_gist",
        description="Delete a GitHub Gist by ID",
        handler=delete_gist,
        args_model=GistIdArgs,
    ),
    ToolEntry(
        name="update_gist_description",
        description="Update a GitHub Gist's description",
        handler=update_gist_description,
        args_model=UpdateDescriptionArgs,
    ),
    ToolEntry(
        name="duplicate_gist",
        description="Create a copy of an existing gist",
        handler=duplicate_gist,
        args_model=GistIdArgs,
    ),
]
