"""
Prompt tools: add and delete prompts in the "💬 Prompts" gist.
"""

import yaml
from pydantic import BaseModel, Field

from ..context import AppContext
from ..errors import invalid_params
from ..models import Gist
from ..utils import PROMPTS_DESCRIPTION, markdown_filename
from .registry import ToolEntry


class PromptArgument(BaseModel):
    name: str = Field(description="Name of the argument")
    description: str = Field(description="Description of the argument")


class AddPromptArgs(BaseModel):
    name: str = Field(min_length=1, description="Name of the prompt (will be used as the filename)")
    prompt: str = Field(min_length=1, description="The prompt content")
    description: str | None = Field(default=None, description="Optional description of the prompt")
    arguments: list[PromptArgument] | None = Field(
        default=None, description="Optional list of argument definitions"
    )


class DeletePromptArgs(BaseModel):
    name: str = Field(
        min_length=1,
        description="Name of the prompt to delete (including .md extension if not already present)",
    )


def render_prompt_file(args: AddPromptArgs) -> str:
    """Build the prompt's Markdown, with front matter when there's metadata."""
    frontmatter: dict = {}
    if args.description:
        frontmatter["description"] = args.description
    if args.arguments:
        frontmatter["arguments"] = {arg.name: arg.description for arg in args.arguments}

    if not frontmatter:
        return args.prompt

    yaml_content = yaml.dump(frontmatter, allow_unicode=True, default_flow_style=False, sort_keys=False)
    return f"---\n{yaml_content}---\n\n{args.prompt}"


async def add_prompt(args: AddPromptArgs, context: AppContext) -> str:
    files = {markdown_filename(args.name): {"content": render_prompt_file(args)}}

    prompts_gist = await context.gist_store.get_prompts()
    if prompts_gist is None:
        data = await context.client.post("", {
            "description": PROMPTS_DESCRIPTION,
            "public": False,
            "files": files,
        })
        context.gist_store.set_prompts(Gist.model_validate(data))
    else:
        data = await context.client.patch(f"/{prompts_gist.id}", {"files": files})
        context.gist_store.update(Gist.model_validate(data))

    return f'Successfully added prompt "{args.name}" to prompts collection'


async def delete_prompt(args: DeletePromptArgs, context: AppContext) -> str:
    filename = markdown_filename(args.name)

    prompts_gist = await context.gist_store.get_prompts()
    if prompts_gist is None:
        raise invalid_params("Prompts collection not found")

    if filename not in prompts_gist.files:
        raise invalid_params(f"Prompt '{filename}' not found")

    if len(prompts_gist.files) == 1:
        raise invalid_params("Cannot delete the only prompt in the prompts collection")

    data = await context.client.patch(f"/{prompts_gist.id}", {"files": {filename: None}})
    context.gist_store.update(Gist.model_validate(data))
    return f'Successfully deleted prompt "{args.name}"'


TOOLS = [
    ToolEntry(
        name="add_prompt",
        description="Add a new prompt to your prompts collection",
        handler=add_prompt,
        args_model=AddPromptArgs,
    ),
    ToolEntry(
        name="delete_prompt",
        description="Delete a prompt from your prompts collection",
        handler=delete_prompt,
        args_model=DeletePromptArgs,
    ),
]
