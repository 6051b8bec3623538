"""
Configuration module for GistPad MCP Server.

Uses pydantic-settings for configuration management with environment variable support.
Environment variables use GISTPAD_ prefix (e.g., GISTPAD_REFRESH_INTERVAL).
The GitHub token is also read from the conventional GITHUB_TOKEN variable.
"""

import argparse
from collections.abc import Sequence

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SERVER_NAME = "gistpad"

SERVER_INSTRUCTIONS = (
    "GistPad allows you to manage your personal knowledge/daily notes/todos, "
    "and create re-usable prompts, using GitHub Gists.\n"
    "To read gists, notes, and gist comments, prefer using the available resources vs. tools. "
    "And then use the available tools to create, update, delete, archive, star, etc. your gists."
)

# Command line flags and the settings they switch on
CLI_FLAGS = {
    "--markdown": "markdown_only",
    "--starred": "include_starred",
    "--archived": "include_archived",
    "--daily": "include_daily",
    "--prompts": "include_prompts",
}


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Environment variables:
    - GITHUB_TOKEN / GISTPAD_GITHUB_TOKEN: Token with the 'gist' scope
    - GISTPAD_API_URL: GitHub REST API root
    - GISTPAD_PAGE_SIZE: Page size used when listing your gists
    - GISTPAD_REFRESH_INTERVAL: Background cache refresh interval in seconds
    - GISTPAD_MARKDOWN_ONLY, GISTPAD_INCLUDE_STARRED, GISTPAD_INCLUDE_ARCHIVED,
      GISTPAD_INCLUDE_DAILY, GISTPAD_INCLUDE_PROMPTS: Feature toggles
    - GISTPAD_LOG_LEVEL: Minimum log level
    """

    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("GITHUB_TOKEN", "GISTPAD_GITHUB_TOKEN"),
    )
    api_url: str = "https://api.github.com"
    page_size: int = 100
    refresh_interval: int = 60 * 60  # 1 hour
    markdown_only: bool = False
    include_starred: bool = False
    include_archived: bool = False
    include_daily: bool = False
    include_prompts: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="GISTPAD_", populate_by_name=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gistpad-mcp",
        description="MCP server for managing notes, todos and prompts with GitHub Gists",
    )
    parser.add_argument("--markdown", action="store_true", help="Only expose gists made up of Markdown files")
    parser.add_argument("--starred", action="store_true", help="Include starred gists in the resource list")
    parser.add_argument("--archived", action="store_true", help="Include archived gists in the resource list")
    parser.add_argument("--daily", action="store_true", help="Include the daily notes gist in the resource list")
    parser.add_argument("--prompts", action="store_true", help="Expose prompts from your prompts gist")
    return parser


def load_settings(argv: Sequence[str] | None = None) -> Settings:
    """Load settings from the environment, then switch on any CLI flags.

    A flag can only enable a feature; leaving it off keeps the environment value.
    """
    settings = Settings()
    args = build_parser().parse_args(argv)

    overrides = {
        field: True
        for flag, field in CLI_FLAGS.items()
        if getattr(args, flag.lstrip("-"))
    }
    if overrides:
        settings = settings.model_copy(update=overrides)
    return settings
