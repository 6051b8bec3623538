# GistPad MCP Server
#
# Modular package structure:
# - config.py: Settings (pydantic-settings) and CLI flags
# - logging.py: structlog configuration
# - models.py: Gist, GistFile and GistComment models
# - utils.py: Description sentinels, gist predicates and helpers
# - client.py: Async GitHub Gists API client (httpx)
# - notifications.py: Change notification port and MCP session notifier
# - store.py: GistStore in-memory cache and its fetch strategies
# - context.py: AppContext passed to every handler
# - errors.py: MCP error helpers for handlers
# - tools/: MCP tool registry and handlers
# - resources.py: MCP resources (gists and their comments)
# - prompts.py: MCP prompts from the prompts gist
# - server.py: MCP server wiring and background refresh
# - main.py: Entry point
