"""
Tests for MCP resources.
"""

import json

import pytest
from mcp.shared.exceptions import McpError

from gistpad.config import Settings
from gistpad.context import AppContext
from gistpad.resources import (
    gist_display_name,
    list_resource_templates,
    list_resources,
    read_resource,
)
from gistpad.utils import DAILY_NOTES_DESCRIPTION, PROMPTS_DESCRIPTION


def context_with(client, notifier, **flags) -> AppContext:
    return AppContext.create(Settings(github_token="test-token", **flags), client, notifier)


class TestGistDisplayName:
    """Tests for resource names."""

    def test_description_wins(self, make_gist):
        assert gist_display_name(make_gist("a", {"x.md": "x"}, description="  My notes ")) == "My notes"

    def test_filename_fallbacks(self, make_gist):
        """Test names derived from the first file when there's no description."""
        assert gist_display_name(make_gist("a", {"ideas.md": "x"}, description=None)) == "ideas"
        assert gist_display_name(make_gist("a", {"script.py": "x"}, description="")) == "script.py"
        assert gist_display_name(make_gist("a", {"README.md": "x"}, description=None)) == "Untitled"
        assert gist_display_name(make_gist("a", {}, description=None)) == "Empty"


class TestListResources:
    """Tests for the resource list and its filters."""

    async def test_default_filters(self, client, notifier, fake_api):
        """Test prompts, daily notes and archived gists are hidden by default."""
        plain = fake_api.seed("Plain", {"a.md": "A"})
        fake_api.seed(DAILY_NOTES_DESCRIPTION, {"01-01-2025.md": "x"})
        fake_api.seed(PROMPTS_DESCRIPTION, {"p.md": "x"})
        fake_api.seed("Old [Archived]", {"b.md": "B"})

        result = await list_resources(context_with(client, notifier))

        assert [str(r.uri) for r in result] == [f"gist:///{plain['id']}"]
        assert result[0].name == "Plain"
        assert result[0].mimeType == "application/json"

    async def test_flags_include_daily_and_archived(self, client, notifier, fake_api):
        """Test include flags bring daily notes and archived gists back, never prompts."""
        fake_api.seed(DAILY_NOTES_DESCRIPTION, {"01-01-2025.md": "x"})
        fake_api.seed(PROMPTS_DESCRIPTION, {"p.md": "x"})
        fake_api.seed("Old [Archived]", {"b.md": "B"})

        context = context_with(client, notifier, include_daily=True, include_archived=True)
        names = {r.name for r in await list_resources(context)}

        assert names == {DAILY_NOTES_DESCRIPTION, "Old [Archived]"}

    async def test_sorted_newest_first(self, client, notifier, fake_api):
        """Test resources are ordered by updated_at, most recent first."""
        older = fake_api.seed("Older", {"a.md": "A"})
        newer = fake_api.seed("Newer", {"b.md": "B"})

        result = await list_resources(context_with(client, notifier))

        assert [str(r.uri) for r in result] == [f"gist:///{newer['id']}", f"gist:///{older['id']}"]

    async def test_starred_included_when_enabled(self, client, notifier, fake_api):
        """Test starred gists are listed with a [Starred] suffix."""
        gist = fake_api.seed("Theirs", {"a.md": "A"})
        fake_api.starred.append(gist["id"])

        without = await list_resources(context_with(client, notifier))
        with_starred = await list_resources(context_with(client, notifier, include_starred=True))

        assert [r.name for r in without] == ["Theirs"]
        assert sorted(r.name for r in with_starred) == ["Theirs", "Theirs [Starred]"]

    def test_comments_template(self):
        """Test the comments resource template."""
        templates = list_resource_templates()

        assert [t.uriTemplate for t in templates] == ["gist:///{gistId}/comments"]


class TestReadResource:
    """Tests for reading gists and comments as resources."""

    async def test_read_gist(self, context, fake_api):
        """Test reading a gist returns its JSON summary and refreshes the cache."""
        gist = fake_api.seed("Notes", {"notes.md": "Hello"})
        await context.gist_store.get_all()

        contents = await read_resource(f"gist:///{gist['id']}", context)

        data = json.loads(contents[0].content)
        assert data["id"] == gist["id"]
        assert data["files"][0]["content"] == "Hello"
        assert contents[0].mime_type == "application/json"
        assert (await context.gist_store.find(gist["id"])).files["notes.md"].content == "Hello"

    async def test_read_comments(self, context, fake_api):
        """Test reading the comments resource."""
        gist = fake_api.seed("Notes", {"notes.md": "Hello"})
        await context.client.post(f"/{gist['id']}/comments", {"body": "First!"})

        contents = await read_resource(f"gist:///{gist['id']}/comments", context)

        comments = json.loads(contents[0].content)
        assert [c["body"] for c in comments] == ["First!"]

    async def test_comments_last_modified(self, context, fake_api):
        """Test the comments read is dated by its newest comment."""
        gist = fake_api.seed("Notes", {"notes.md": "Hello"})
        await context.client.post(f"/{gist['id']}/comments", {"body": "First"})
        latest = await context.client.post(f"/{gist['id']}/comments", {"body": "Second"})

        contents = await read_resource(f"gist:///{gist['id']}/comments", context)

        assert contents[0].meta == {"lastModified": latest["updated_at"]}

    async def test_no_comments_has_no_last_modified(self, context, fake_api):
        """Test an empty thread carries no lastModified."""
        gist = fake_api.seed("Notes", {"notes.md": "Hello"})

        contents = await read_resource(f"gist:///{gist['id']}/comments", context)

        assert json.loads(contents[0].content) == []
        assert contents[0].meta is None

    async def test_read_raw(self, context, fake_api):
        """Test the raw resource returns the main file's content."""
        gist = fake_api.seed("Notes", {"other.md": "Other", "README.md": "Main"})

        contents = await read_resource(f"gist:///{gist['id']}/raw", context)

        assert contents[0].content == "Main"

    async def test_unknown_scheme(self, context):
        """Test URIs outside gist:/// are rejected."""
        with pytest.raises(McpError, match="Unknown resource"):
            await read_resource("file:///etc/passwd", context)
