"""
Tool registry for GistPad MCP Server.

Every tool is a ToolEntry: a name, a description, a pydantic model for its
arguments, and an async handler. Arguments are validated against the model
before the handler runs; the model's JSON schema is what clients see.
"""

import json
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from mcp.types import TextContent, Tool
from pydantic import BaseModel, Field, ValidationError

from ..context import AppContext
from ..errors import invalid_params

ToolResult = str | dict[str, Any] | list[Any]
ToolHandler = Callable[[Any, AppContext], Awaitable[ToolResult]]


class NoArgs(BaseModel):
    """Arguments model for tools that take none."""


class GistIdArgs(BaseModel):
    id: str = Field(description="The ID of the gist")


@dataclass(frozen=True)
class ToolEntry:
    name: str
    description: str
    handler: ToolHandler
    args_model: type[BaseModel] = NoArgs

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.args_model.model_json_schema(),
        )


class ToolRegistry:
    """Name -> ToolEntry dispatch table, built once at startup."""

    def __init__(self, entries: Iterable[ToolEntry] = ()):
        self._entries: dict[str, ToolEntry] = {}
        for entry in entries:
            self.register(entry)

    def register(self, entry: ToolEntry) -> None:
        if entry.name in self._entries:
            raise ValueError(f"Tool '{entry.name}' is already registered")
        self._entries[entry.name] = entry

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def names(self) -> list[str]:
        return list(self._entries)

    def list_tools(self) -> list[Tool]:
        return [entry.to_tool() for entry in self._entries.values()]

    async def call(self, name: str, arguments: dict[str, Any] | None, context: AppContext) -> ToolResult:
        entry = self._entries.get(name)
        if entry is None:
            raise invalid_params(f"Unknown tool: {name}")

        try:
            args = entry.args_model.model_validate(arguments or {})
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
                for err in e.errors()
            )
            raise invalid_params(f"Invalid arguments for {name}: {problems}") from e

        return await entry.handler(args, context)


def to_text_content(result: ToolResult) -> list[TextContent]:
    if isinstance(result, str):
        text = result
    else:
        text = json.dumps(result, indent=2, ensure_ascii=False)
    return [TextContent(type="text", text=text)]
