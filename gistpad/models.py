"""
Pydantic models for GistPad MCP Server.

Contains the shapes of gists, gist files and comments as returned by the GitHub Gists API.
Fields the server doesn't use are ignored on validation.
"""

from pydantic import BaseModel, Field


class GistOwner(BaseModel):
    """Model for the owner of a gist or the author of a comment."""

    login: str


class GistFile(BaseModel):
    """Model for a single file in a gist.

    `content` is None when the gist was fetched in summary form (list endpoints).
    """

    filename: str
    type: str = "text/plain"
    language: str | None = None
    raw_url: str = ""
    size: int = 0
    truncated: bool = False
    content: str | None = None


class Gist(BaseModel):
    """Model for a gist."""

    id: str
    description: str | None = None
    files: dict[str, GistFile] = Field(default_factory=dict)
    public: bool = False
    created_at: str
    updated_at: str
    owner: GistOwner | None = None
    comments: int = 0
    html_url: str | None = None


class GistComment(BaseModel):
    """Model for a comment on a gist. Comments are never cached."""

    id: int | str
    body: str
    user: GistOwner
    created_at: str
    updated_at: str
