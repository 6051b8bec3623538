"""
Comment tools. Comments are always read live from GitHub, never cached.
"""

from pydantic import BaseModel, Field

from ..context import AppContext
from ..errors import find_gist_by_id, invalid_params
from ..models import GistComment
from .registry import GistIdArgs, ToolEntry


class AddCommentArgs(BaseModel):
    id: str = Field(description="The ID of the gist")
    body: str = Field(description="The comment text")


class DeleteCommentArgs(BaseModel):
    gist_id: str = Field(description="The ID of the gist")
    comment_id: int | str = Field(description="The ID of the comment to delete")


def comment_summary(comment: GistComment) -> dict:
    return {
        "id": comment.id,
        "body": comment.body,
        "user": comment.user.login,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }


async def fetch_comments(context: AppContext, gist_id: str) -> list[GistComment]:
    data = await context.client.get(f"/{gist_id}/comments")
    return [GistComment.model_validate(item) for item in data]


async def list_gist_comments(args: GistIdArgs, context: AppContext) -> dict:
    await find_gist_by_id(context, args.id)
    comments = await fetch_comments(context, args.id)
    return {
        "gist_id": args.id,
        "count": len(comments),
        "comments": [comment_summary(c) for c in comments],
    }


async def add_gist_comment(args: AddCommentArgs, context: AppContext) -> dict:
    body = args.body.strip()
    if not body:
        raise invalid_params("Comment body is required and cannot be empty")

    await find_gist_by_id(context, args.id)
    comment = GistComment.model_validate(
        await context.client.post(f"/{args.id}/comments", {"body": body})
    )
    return {
        "gist_id": args.id,
        "comment_id": comment.id,
        "message": "Comment added successfully",
    }


async def delete_gist_comment(args: DeleteCommentArgs, context: AppContext) -> dict:
    await find_gist_by_id(context, args.gist_id)
    await context.client.delete(f"/{args.gist_id}/comments/{args.comment_id}")
    return {
        "gist_id": args.gist_id,
        "comment_id": args.comment_id,
        "message": "Comment deleted successfully",
    }


TOOLS = [
    ToolEntry(
        name="list_gist_comments",
        description="List all comments on a gist",
        handler=list_gist_comments,
        args_model=GistIdArgs,
    ),
    ToolEntry(
        name="add_gist_comment",
        description="Add a comment to a gist",
        handler=add_gist_comment,
        args_model=AddCommentArgs,
    ),
    ToolEntry(
        name="delete_gist_comment",
        description="Delete a comment from a gist",
        handler=delete_gist_comment,
        args_model=DeleteCommentArgs,
    ),
]
