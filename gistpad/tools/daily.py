"""
Daily note tools.

All daily notes live in a single private gist described as "📆 Daily notes",
with one Markdown file per day named MM-DD-YYYY.md.
"""

from datetime import date

import structlog
from pydantic import BaseModel, Field

from ..context import AppContext
from ..errors import invalid_params
from ..models import Gist
from ..utils import DAILY_NOTES_DESCRIPTION, markdown_filename
from .registry import NoArgs, ToolEntry

logger = structlog.get_logger(__name__)


class UpdateTodaysNoteArgs(BaseModel):
    content: str = Field(description="The updated content for today's daily note")


class DailyNoteDateArgs(BaseModel):
    date: str = Field(
        description="Date of the daily note, in the following format: MM-DD-YYYY (e.g. 03-10-2025)"
    )


def daily_note_name(day: date | None = None) -> str:
    return (day or date.today()).strftime("%m-%d-%Y")


def todays_filename() -> str:
    return f"{daily_note_name()}.md"


def new_note_content(filename: str) -> str:
    return f"# {filename.removesuffix('.md')}\n"


async def create_daily_notes_gist(context: AppContext, filename: str) -> Gist:
    data = await context.client.post("", {
        "description": DAILY_NOTES_DESCRIPTION,
        "public": False,
        "files": {filename: {"content": new_note_content(filename)}},
    })
    gist = Gist.model_validate(data)
    context.gist_store.set_daily_notes(gist)
    logger.info("daily_notes_gist_created", gist_id=gist.id)
    return gist


async def add_daily_note(context: AppContext, gist_id: str, filename: str) -> Gist:
    data = await context.client.patch(f"/{gist_id}", {
        "files": {filename: {"content": new_note_content(filename)}},
    })
    gist = Gist.model_validate(data)
    context.gist_store.update(gist)
    return gist


async def require_daily_notes(context: AppContext, message: str) -> Gist:
    gist = await context.gist_store.get_daily_notes()
    if gist is None:
        raise invalid_params(message)
    return gist


async def get_todays_note(args: NoArgs, context: AppContext) -> str:
    filename = todays_filename()

    gist = await context.gist_store.get_daily_notes()
    if gist is None:
        gist = await create_daily_notes_gist(context, filename)
    elif filename not in gist.files:
        gist = await add_daily_note(context, gist.id, filename)

    return gist.files[filename].content or ""


async def update_todays_note(args: UpdateTodaysNoteArgs, context: AppContext) -> str:
    filename = todays_filename()
    files = {filename: {"content": args.content or new_note_content(filename)}}

    gist = await context.gist_store.get_daily_notes()
    if gist is None:
        data = await context.client.post("", {
            "description": DAILY_NOTES_DESCRIPTION,
            "public": False,
            "files": files,
        })
        context.gist_store.set_daily_notes(Gist.model_validate(data))
    else:
        data = await context.client.patch(f"/{gist.id}", {"files": files})
        context.gist_store.update(Gist.model_validate(data))

    return "Successfully updated today's note"


async def list_daily_notes(args: NoArgs, context: AppContext) -> dict:
    gist = await context.gist_store.get_daily_notes()

    # No daily notes gist yet, don't create one just to list it
    if gist is None:
        return {"count": 0, "notes": []}

    dates = [filename.removesuffix(".md") for filename in gist.files]
    return {"count": len(dates), "notes": [{"date": d} for d in dates]}


async def get_daily_note(args: DailyNoteDateArgs, context: AppContext) -> str:
    gist = await require_daily_notes(context, "Requested daily note doesn't exist")

    file = gist.files.get(markdown_filename(args.date))
    if file is None:
        raise invalid_params(f"Daily note for {args.date} doesn't exist")
    return file.content or ""


async def delete_daily_note(args: DailyNoteDateArgs, context: AppContext) -> str:
    gist = await require_daily_notes(context, "The specified daily note doesn't exist")

    filename = markdown_filename(args.date)
    if filename not in gist.files:
        raise invalid_params(f"Daily note for {args.date} doesn't exist")

    if len(gist.files) == 1:
        raise invalid_params("Cannot delete the only daily note")

    data = await context.client.patch(f"/{gist.id}", {"files": {filename: None}})
    context.gist_store.update(Gist.model_validate(data))
    return f"Successfully deleted daily note for {args.date}"


TOOLS = [
    ToolEntry(
        name="get_todays_note",
        description="Get or create the daily note for today's date "
                    "(for tracking todos, tasks, scratch notes, etc.)",
        handler=get_todays_note,
    ),
    ToolEntry(
        name="update_todays_note",
        description="Update the content of today's daily note",
        handler=update_todays_note,
        args_model=UpdateTodaysNoteArgs,
    ),
    ToolEntry(
        name="list_daily_notes",
        description="List all of your existing/historical daily notes",
        handler=list_daily_notes,
    ),
    ToolEntry(
        name="get_daily_note",
        description="Get the contents of a specific/existing daily note",
        handler=get_daily_note,
        args_model=DailyNoteDateArgs,
    ),
    ToolEntry(
        name="delete_daily_note",
        description="Delete a specific daily note by date",
        handler=delete_daily_note,
        args_model=DailyNoteDateArgs,
    ),
]
