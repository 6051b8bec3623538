"""
Utility functions and compiled regex patterns for GistPad MCP Server.

Contains the description sentinels that tag special gists, the predicates that
test for them, resource URI helpers, and front matter parsing.
"""

import re
from pathlib import PurePosixPath
from typing import Any

import yaml

from .models import Gist

# ============== Description Sentinels ==============

ARCHIVED_SUFFIX = " [Archived]"
DAILY_NOTES_DESCRIPTION = "📆 Daily notes"
PROMPTS_DESCRIPTION = "💬 Prompts"
STARRED_SUFFIX = " [Starred]"

ARCHIVED_SUFFIX_PATTERN = re.compile(re.escape(ARCHIVED_SUFFIX) + r"$")

GIST_URI_PREFIX = "gist:///"
GISTPAD_URL = "https://gistpad.dev/#/"

# Gists can't contain empty files, so an "invisible plus" stands in for empty content.
EMPTY_FILE_CONTENT = "\u2064"

# Pre-compiled regex patterns
FRONTMATTER_PATTERN = re.compile(r'^---\s*\n(.*?)\n?---\s*(?:\n|$)', re.DOTALL)
PLACEHOLDER_PATTERN = re.compile(r'{{([a-zA-Z_-]+)}}')


# ============== Predicates ==============

def is_archived_gist(gist: Gist) -> bool:
    return (gist.description or "").endswith(ARCHIVED_SUFFIX)


def is_daily_note_gist(gist: Gist) -> bool:
    return gist.description == DAILY_NOTES_DESCRIPTION


def is_prompt_gist(gist: Gist) -> bool:
    return gist.description == PROMPTS_DESCRIPTION


def is_content_loaded(gist: Gist) -> bool:
    """True when every file carries its content (summary listings omit it)."""
    return all(file.content is not None for file in gist.files.values())


def is_markdown_file(filename: str, language: str | None = None) -> bool:
    return language == "Markdown" or PurePosixPath(filename).suffix.lower() == ".md"


def is_markdown_gist(gist: Gist) -> bool:
    """True when every file is Markdown or a tldraw drawing."""
    return all(
        is_markdown_file(name, file.language) or name.endswith(".tldraw")
        for name, file in gist.files.items()
    )


def archived_description(description: str | None) -> str:
    return f"{(description or '').rstrip()}{ARCHIVED_SUFFIX}"


def unarchived_description(description: str | None) -> str:
    return ARCHIVED_SUFFIX_PATTERN.sub("", description or "")


# ============== Helper Functions ==============

def gist_uri(gist_id: str) -> str:
    return f"{GIST_URI_PREFIX}{gist_id}"


def gist_id_from_uri(uri: str) -> str:
    """Extract the gist ID from a gist:///<id>[/...] URI."""
    path = str(uri).removeprefix(GIST_URI_PREFIX).strip("/")
    return path.split("/", 1)[0]


def gist_content(content: str) -> str:
    return content or EMPTY_FILE_CONTENT


def gist_summary(gist: Gist) -> dict[str, Any]:
    """Build the JSON view of a gist returned by tools and resources."""
    return {
        "id": gist.id,
        "description": gist.description,
        "owner": gist.owner.login if gist.owner else None,
        "public": gist.public,
        "created_at": gist.created_at,
        "updated_at": gist.updated_at,
        "files": [
            {
                "filename": filename,
                "type": file.type,
                "size": file.size,
                "content": file.content,
            }
            for filename, file in gist.files.items()
        ],
        "comments": gist.comments,
        "url": f"{GISTPAD_URL}{gist.id}",
        "share_url": f"{GISTPAD_URL}share/{gist.id}",
    }


def markdown_filename(name: str) -> str:
    return name if name.endswith(".md") else f"{name}.md"


def parse_frontmatter(content: str) -> tuple[dict, str]:
    """Extract YAML frontmatter and body from Markdown content."""
    frontmatter = {}
    body = content

    match = FRONTMATTER_PATTERN.match(content)
    if match:
        try:
            frontmatter = yaml.safe_load(match.group(1)) or {}
        except yaml.YAMLError:
            pass
        if not isinstance(frontmatter, dict):
            frontmatter = {}
        body = content[match.end():]

    return frontmatter, body
