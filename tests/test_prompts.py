"""
Tests for MCP prompts served from the prompts gist.
"""

import pytest
from mcp.shared.exceptions import McpError

from gistpad.prompts import get_prompt, list_prompts, prompt_from_file
from gistpad.utils import PROMPTS_DESCRIPTION


class TestPromptFromFile:
    """Tests for turning a prompt file into an MCP prompt."""

    def test_arguments_from_frontmatter(self, make_gist):
        """Test declared arguments and description come from front matter."""
        content = "---\ndescription: Review code\narguments:\n  repo: Repository\n---\nReview {{repo}} and {{branch}}"
        gist = make_gist("p", {"review.md": content})

        prompt = prompt_from_file("review.md", gist.files["review.md"])

        assert prompt.name == "review"
        assert prompt.description == "Review code"
        assert [(a.name, a.description) for a in prompt.arguments] == [("repo", "Repository")]

    def test_arguments_from_placeholders(self, make_gist):
        """Test arguments are inferred from placeholders, once each, in order."""
        gist = make_gist("p", {"greet.md": "Hi {{name}}, from {{team-name}} and {{name}}"})

        prompt = prompt_from_file("greet.md", gist.files["greet.md"])

        assert [a.name for a in prompt.arguments] == ["name", "team-name"]
        assert prompt.description == ""

    def test_no_arguments(self, make_gist):
        """Test a prompt without placeholders has no arguments."""
        gist = make_gist("p", {"plain.md": "Just do it"})

        assert prompt_from_file("plain.md", gist.files["plain.md"]).arguments is None


class TestPromptHandlers:
    """Tests for listing and rendering prompts."""

    async def test_list_prompts(self, context, fake_api):
        """Test only Markdown files in the prompts gist are prompts."""
        fake_api.seed(PROMPTS_DESCRIPTION, {"a.md": "A", "b.md": "B", "notes.txt": "x"})

        prompts = await list_prompts(context)

        assert [p.name for p in prompts] == ["a", "b"]

    async def test_list_without_prompts_gist(self, context):
        """Test no prompts gist means no prompts."""
        assert await list_prompts(context) == []

    async def test_get_prompt_substitutes_arguments(self, context, fake_api):
        """Test front matter is stripped and placeholders are filled."""
        fake_api.seed(PROMPTS_DESCRIPTION, {
            "review.md": "---\ndescription: Review\n---\nReview {{repo}} on {{branch}}\n",
        })

        result = await get_prompt("review", {"repo": "gistpad", "branch": "main"}, context)

        assert len(result.messages) == 1
        assert result.messages[0].role == "user"
        assert result.messages[0].content.text == "Review gistpad on main"

    async def test_missing_arguments_left_in_place(self, context, fake_api):
        """Test placeholders without a value stay as written."""
        fake_api.seed(PROMPTS_DESCRIPTION, {"greet.md": "Hi {{name}}"})

        result = await get_prompt("greet", None, context)

        assert result.messages[0].content.text == "Hi {{name}}"

    async def test_unknown_prompt(self, context, fake_api):
        """Test asking for a prompt that doesn't exist."""
        fake_api.seed(PROMPTS_DESCRIPTION, {"a.md": "A"})

        with pytest.raises(McpError, match='Prompt "zzz" not found'):
            await get_prompt("zzz", None, context)

    async def test_no_prompts_gist(self, context):
        """Test asking for a prompt with no prompts gist."""
        with pytest.raises(McpError, match="No prompts gist found"):
            await get_prompt("a", None, context)
