"""
File tools: add, update, edit, delete and rename files inside a gist.

Existence checks run against the cache before anything is sent to GitHub.
"""

from pydantic import BaseModel, Field

from ..context import AppContext
from ..errors import find_gist_by_id, invalid_params
from ..models import Gist
from ..utils import gist_content
from .registry import ToolEntry


class FileContentArgs(BaseModel):
    id: str = Field(description="The ID of the gist")
    filename: str = Field(description="The name of the file")
    content: str = Field(description="The content for the file")


class FileArgs(BaseModel):
    id: str = Field(description="The ID of the gist")
    filename: str = Field(description="The name of the file")


class RenameFileArgs(BaseModel):
    id: str = Field(description="The ID of the gist")
    old_filename: str = Field(description="The current name of the file")
    new_filename: str = Field(description="The new name for the file")


class EditFileArgs(BaseModel):
    id: str = Field(description="The ID of the gist")
    filename: str = Field(description="The name of the file to edit")
    old_string: str = Field(description="The exact text to replace")
    new_string: str = Field(description="The text to replace it with")
    replace_all: bool = Field(
        default=False,
        description="Replace every occurrence of old_string (default: only a unique occurrence)",
    )


async def assert_gist_file(
    context: AppContext,
    gist_id: str,
    exists: str | None = None,
    not_exists: str | None = None,
) -> Gist:
    gist = await find_gist_by_id(context, gist_id)

    if exists and exists not in gist.files:
        raise invalid_params(f'File "{exists}" not found in gist')

    if not_exists and not_exists in gist.files:
        raise invalid_params(f'File "{not_exists}" already exists in gist')

    return gist


async def patch_gist_file(
    context: AppContext,
    gist_id: str,
    filename: str,
    patch: dict[str, str] | None,
) -> Gist:
    """Patch a single file. A None patch deletes the file."""
    data = await context.client.patch(f"/{gist_id}", {"files": {filename: patch}})
    gist = Gist.model_validate(data)
    context.gist_store.update(gist)
    return gist


async def add_gist_file(args: FileContentArgs, context: AppContext) -> str:
    await assert_gist_file(context, args.id, not_exists=args.filename)
    await patch_gist_file(context, args.id, args.filename, {"content": gist_content(args.content)})
    return "File added successfully"


async def update_gist_file(args: FileContentArgs, context: AppContext) -> str:
    await assert_gist_file(context, args.id, exists=args.filename)
    await patch_gist_file(context, args.id, args.filename, {"content": gist_content(args.content)})
    return "File updated successfully"


async def edit_gist_file(args: EditFileArgs, context: AppContext) -> str:
    gist = await assert_gist_file(context, args.id, exists=args.filename)
    gist = await context.gist_store.ensure_content_loaded(gist)
    content = gist.files[args.filename].content or ""

    if args.old_string == args.new_string:
        raise invalid_params("old_string and new_string must be different")

    occurrences = content.count(args.old_string) if args.old_string else 0
    if occurrences == 0:
        raise invalid_params(f'old_string was not found in "{args.filename}"')

    if occurrences > 1 and not args.replace_all:
        raise invalid_params(
            f"Found {occurrences} occurrences of old_string in \"{args.filename}\". "
            "Provide more surrounding context to make it unique, or set replace_all to true."
        )

    if args.replace_all:
        updated = content.replace(args.old_string, args.new_string)
    else:
        updated = content.replace(args.old_string, args.new_string, 1)

    await patch_gist_file(context, args.id, args.filename, {"content": gist_content(updated)})

    noun = "occurrence" if occurrences == 1 else "occurrences"
    return f'Successfully replaced {occurrences} {noun} in "{args.filename}"'


async def delete_gist_file(args: FileArgs, context: AppContext) -> str:
    gist = await assert_gist_file(context, args.id, exists=args.filename)

    if len(gist.files) == 1:
        raise invalid_params("Cannot delete the only file in a gist. Delete the gist instead.")

    await patch_gist_file(context, args.id, args.filename, None)
    return "File deleted successfully"


async def rename_gist_file(args: RenameFileArgs, context: AppContext) -> str:
    await assert_gist_file(context, args.id, exists=args.old_filename, not_exists=args.new_filename)
    await patch_gist_file(context, args.id, args.old_filename, {"filename": args.new_filename})
    return "File renamed successfully"


TOOLS = [
    ToolEntry(
        name="add_gist_file",
        description="Add a new file to a gist",
        handler=add_gist_file,
        args_model=FileContentArgs,
    ),
    ToolEntry(
        name="update_gist_file",
        description="Replace the entire content of a file in a gist",
        handler=update_gist_file,
        args_model=FileContentArgs,
    ),
    ToolEntry(
        name="edit_gist_file",
        description="Edit a file in a gist by replacing an exact string with a new one. "
                    "old_string must match exactly once unless replace_all is set.",
        handler=edit_gist_file,
        args_model=EditFileArgs,
    ),
    ToolEntry(
        name="delete_gist_file",
        description="Delete a file from a gist",
        handler=delete_gist_file,
        args_model=FileArgs,
    ),
    ToolEntry(
        name="rename_gist_file",
        description="Rename a file in a gist",
        handler=rename_gist_file,
        args_model=RenameFileArgs,
    ),
]
