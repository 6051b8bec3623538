"""
MCP prompts for GistPad MCP Server.

Every Markdown file in the "💬 Prompts" gist is a prompt. Its description and
arguments come from YAML front matter; without an `arguments` block they are
inferred from {{placeholder}} markers in the body.
"""

from pathlib import PurePosixPath

from mcp.types import GetPromptResult, Prompt, PromptArgument, PromptMessage, TextContent

from .context import AppContext
from .errors import invalid_request
from .models import GistFile
from .utils import PLACEHOLDER_PATTERN, parse_frontmatter


def prompt_from_file(filename: str, file: GistFile) -> Prompt:
    frontmatter, body = parse_frontmatter(file.content or "")

    declared = frontmatter.get("arguments")
    if isinstance(declared, dict) and declared:
        arguments = [
            PromptArgument(name=str(name), description=str(description or ""), required=True)
            for name, description in declared.items()
        ]
    else:
        # dict.fromkeys keeps first-seen order while dropping duplicates
        names = dict.fromkeys(PLACEHOLDER_PATTERN.findall(body))
        arguments = [PromptArgument(name=name, description="", required=True) for name in names] or None

    return Prompt(
        name=PurePosixPath(filename).stem,
        description=str(frontmatter.get("description") or ""),
        arguments=arguments,
    )


async def list_prompts(context: AppContext) -> list[Prompt]:
    prompts_gist = await context.gist_store.get_prompts()
    if prompts_gist is None:
        return []

    return [
        prompt_from_file(filename, file)
        for filename, file in prompts_gist.files.items()
        if PurePosixPath(filename).suffix == ".md"
    ]


async def get_prompt(name: str, arguments: dict[str, str] | None, context: AppContext) -> GetPromptResult:
    prompts_gist = await context.gist_store.get_prompts()
    if prompts_gist is None:
        raise invalid_request("No prompts gist found")

    file = prompts_gist.files.get(f"{name}.md")
    if file is None:
        raise invalid_request(f'Prompt "{name}" not found')

    _, body = parse_frontmatter(file.content or "")
    text = body.strip()
    for key, value in (arguments or {}).items():
        text = text.replace(f"{{{{{key}}}}}", value)

    return GetPromptResult(
        messages=[
            PromptMessage(role="user", content=TextContent(type="text", text=text)),
        ],
    )
