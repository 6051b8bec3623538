"""
MCP resources for GistPad MCP Server.

Every gist is exposed as gist:///<id>, its comments as gist:///<id>/comments.
"""

import json
from datetime import datetime

from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import Annotations, Resource, ResourceTemplate
from pydantic import AnyUrl

from .context import AppContext
from .errors import invalid_params
from .models import Gist, GistComment
from .utils import (
    GIST_URI_PREFIX,
    STARRED_SUFFIX,
    gist_id_from_uri,
    gist_summary,
    gist_uri,
    is_archived_gist,
    is_daily_note_gist,
    is_prompt_gist,
)

JSON_MIME_TYPE = "application/json"


def should_include_in_resource_list(gist: Gist, context: AppContext) -> bool:
    return (
        not is_prompt_gist(gist)
        and (context.include_archived or not is_archived_gist(gist))
        and (context.include_daily or not is_daily_note_gist(gist))
    )


def gist_display_name(gist: Gist) -> str:
    """Get a user-friendly name, falling back to the first filename."""
    name = (gist.description or "").strip()
    if name:
        return name

    first_file = next(iter(gist.files), None)
    if first_file is None:
        return "Empty"

    # README.md isn't distinctive enough to name a gist
    if first_file == "README.md":
        return "Untitled"

    if first_file.lower().endswith(".md"):
        return first_file[:-3]
    return first_file


def _updated_at(gist: Gist) -> datetime:
    return datetime.fromisoformat(gist.updated_at.replace("Z", "+00:00"))


def list_resource_templates() -> list[ResourceTemplate]:
    return [
        ResourceTemplate(
            uriTemplate=f"{GIST_URI_PREFIX}{{gistId}}/comments",
            name="Comments for a gist",
            description="List of comments on a specific gist",
            mimeType=JSON_MIME_TYPE,
        ),
    ]


async def list_resources(context: AppContext) -> list[Resource]:
    gists = await context.gist_store.get_all()

    if context.include_starred:
        starred = await context.starred_gist_store.get_all()
        gists = gists + [
            g.model_copy(update={"description": f"{g.description or ''}{STARRED_SUFFIX}"})
            for g in starred
        ]

    visible = [g for g in gists if should_include_in_resource_list(g, context)]
    visible.sort(key=_updated_at, reverse=True)

    return [
        Resource(
            uri=AnyUrl(gist_uri(g.id)),
            name=gist_display_name(g),
            mimeType=JSON_MIME_TYPE,
            annotations=Annotations(lastModified=g.updated_at),
        )
        for g in visible
    ]


async def read_resource(uri: AnyUrl | str, context: AppContext) -> list[ReadResourceContents]:
    uri_str = str(uri)
    if not uri_str.startswith(GIST_URI_PREFIX):
        raise invalid_params(f"Unknown resource: {uri_str}")

    gist_id = gist_id_from_uri(uri_str)
    if not gist_id:
        raise invalid_params(f"Unknown resource: {uri_str}")

    if uri_str.rstrip("/").endswith("/comments"):
        data = await context.client.get(f"/{gist_id}/comments")
        comments = [GistComment.model_validate(item) for item in data]
        text = json.dumps([c.model_dump() for c in comments], indent=2, ensure_ascii=False)
        # The newest comment dates the whole thread
        meta = {"lastModified": max(c.updated_at for c in comments)} if comments else None
        return [ReadResourceContents(content=text, mime_type=JSON_MIME_TYPE, meta=meta)]

    gist = Gist.model_validate(await context.client.get(f"/{gist_id}"))
    context.gist_store.update(gist)

    if uri_str.rstrip("/").endswith("/raw"):
        main_file = gist.files.get("README.md") or next(iter(gist.files.values()), None)
        if main_file is None:
            raise invalid_params(f"Gist with ID \"{gist_id}\" has no files")
        return [ReadResourceContents(content=main_file.content or "", mime_type=main_file.type)]

    text = json.dumps(gist_summary(gist), indent=2, ensure_ascii=False)
    return [ReadResourceContents(content=text, mime_type=JSON_MIME_TYPE)]
