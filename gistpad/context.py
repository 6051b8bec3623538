"""
Request context for GistPad MCP Server.

Everything a handler needs is passed in explicitly through an AppContext,
created once at startup.
"""

from dataclasses import dataclass

from .client import GistClient
from .config import Settings
from .notifications import ChangeNotifier
from .store import GistStore, create_starred_gist_store, create_your_gist_store


@dataclass
class AppContext:
    settings: Settings
    client: GistClient
    gist_store: GistStore
    starred_gist_store: GistStore
    notifier: ChangeNotifier

    @property
    def include_archived(self) -> bool:
        return self.settings.include_archived

    @property
    def include_starred(self) -> bool:
        return self.settings.include_starred

    @property
    def include_daily(self) -> bool:
        return self.settings.include_daily

    @classmethod
    def create(cls, settings: Settings, client: GistClient, notifier: ChangeNotifier) -> "AppContext":
        return cls(
            settings=settings,
            client=client,
            gist_store=create_your_gist_store(client, notifier, settings),
            starred_gist_store=create_starred_gist_store(client, notifier, settings),
            notifier=notifier,
        )
