"""
In-memory gist cache for GistPad MCP Server.

Contains the GistStore class, the fetch strategies that fill it, and the factories
for the two stores the server runs: your gists and your starred gists.
"""

import functools
import time
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

import structlog

from .client import GistClient
from .config import Settings
from .models import Gist
from .notifications import ChangeNotifier
from .utils import (
    is_content_loaded,
    is_daily_note_gist,
    is_markdown_gist,
    is_prompt_gist,
)

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE = 100


class GistRole(Enum):
    """Special gists found by their description."""

    DAILY_NOTES = "daily_notes"
    PROMPTS = "prompts"


ROLE_PREDICATES: dict[GistRole, Callable[[Gist], bool]] = {
    GistRole.DAILY_NOTES: is_daily_note_gist,
    GistRole.PROMPTS: is_prompt_gist,
}


# ============== Cache State ==============

@dataclass(frozen=True)
class NotLoaded:
    """The collection hasn't been fetched yet."""


@dataclass
class Loaded:
    """The collection has been fetched (possibly with zero gists)."""

    gists: list[Gist] = field(default_factory=list)
    loaded_at: float = field(default_factory=time.time)


CacheState = NotLoaded | Loaded

GistFetcher = Callable[[GistClient], Awaitable[list[Gist]]]


# ============== Fetch Strategies ==============

async def fetch_your_gists(client: GistClient, page_size: int = DEFAULT_PAGE_SIZE) -> list[Gist]:
    """Page through all of the authenticated user's gists until a short page."""
    gists: list[Gist] = []
    page = 1
    while True:
        batch = await client.get("", params={"per_page": page_size, "page": page})
        gists.extend(Gist.model_validate(item) for item in batch)
        if len(batch) < page_size:
            break
        page += 1
    return gists


async def fetch_starred_gists(client: GistClient) -> list[Gist]:
    """Fetch starred gists in a single request, starred lists are small."""
    batch = await client.get("/starred")
    return [Gist.model_validate(item) for item in batch]


# ============== Store ==============

class GistStore:
    """In-memory cache of a gist collection. Avoids re-listing gists on every call.

    The collection is fetched lazily on first read and then kept current by the
    add/update/remove calls that handlers make after each successful API write.
    Each of those decides which change notification (if any) to send. Mutations
    before the first load are no-ops: they never trigger a fetch.

    The fetch strategy is injected, so the same class backs both the "your gists"
    store (paginated, tracks the daily notes and prompts gists) and the starred
    store (single page, usually silent).
    """

    def __init__(
        self,
        client: GistClient,
        fetch: GistFetcher,
        notifier: ChangeNotifier,
        *,
        name: str = "gists",
        notify: bool = True,
        markdown_only: bool = False,
        roles: Iterable[GistRole] = (),
    ):
        self.client = client
        self.name = name
        self.notify = notify
        self.markdown_only = markdown_only
        self._fetch = fetch
        self._notifier = notifier
        self._state: CacheState = NotLoaded()
        self._subscriptions: set[str] = set()
        self._tracked_roles = tuple(roles)
        self._role_ids: dict[GistRole, str] = {}

    @property
    def is_loaded(self) -> bool:
        return isinstance(self._state, Loaded)

    # ----- reads -----

    async def get_all(self, force_refresh: bool = False) -> list[Gist]:
        """Return every cached gist, fetching them on a cache miss or when forced."""
        if force_refresh or not isinstance(self._state, Loaded):
            start_time = time.time()
            gists = await self._fetch(self.client)
            gists = [g for g in gists if self._accepts(g)]
            self._discover_roles(gists)
            self._state = Loaded(gists)
            logger.info(
                "gist_cache_loaded",
                store=self.name,
                gist_count=len(gists),
                forced=force_refresh,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
        return list(self._state.gists)

    async def find(self, gist_id: str) -> Gist | None:
        for gist in await self.get_all():
            if gist.id == gist_id:
                return gist
        return None

    async def ensure_content_loaded(self, gist: Gist) -> Gist:
        """Return the gist with every file's content, fetching it once if needed."""
        if is_content_loaded(gist):
            return gist

        data = await self.client.get(f"/{gist.id}")
        loaded = Gist.model_validate(data)
        self.update(loaded)
        return loaded

    # ----- writes -----

    def add(self, gist: Gist) -> None:
        if not isinstance(self._state, Loaded):
            return
        if any(g.id == gist.id for g in self._state.gists):
            return
        if not self._accepts(gist):
            return

        self._state.gists.append(gist)
        logger.debug("gist_cache_added", store=self.name, gist_id=gist.id)

        if is_prompt_gist(gist):
            self._prompt_list_changed()
        else:
            self._resource_list_changed()

    def remove(self, gist_id: str) -> None:
        if not isinstance(self._state, Loaded):
            return

        remaining = [g for g in self._state.gists if g.id != gist_id]
        if len(remaining) == len(self._state.gists):
            return

        self._state.gists = remaining
        logger.debug("gist_cache_removed", store=self.name, gist_id=gist_id)
        self._resource_list_changed()

    def update(self, gist: Gist) -> None:
        if not isinstance(self._state, Loaded):
            return

        gists = self._state.gists
        index = next((i for i, g in enumerate(gists) if g.id == gist.id), None)
        if index is None:
            return

        # An edit can take a gist out of the markdown-only collection
        if not self._accepts(gist):
            self.remove(gist.id)
            return

        old_gist = gists[index]
        if old_gist.updated_at == gist.updated_at:
            # Same revision. Only take it if it brings content we didn't have.
            if not is_content_loaded(old_gist) and is_content_loaded(gist):
                gists[index] = gist
            return

        gists[index] = gist
        logger.debug("gist_cache_updated", store=self.name, gist_id=gist.id)

        if is_prompt_gist(gist):
            self._prompt_list_changed()
        elif old_gist.description != gist.description:
            self._resource_list_changed()

        if gist.id in self._subscriptions:
            self._resource_changed(gist.id)

    async def refresh(self) -> None:
        """Reload from GitHub and announce that anything may have changed."""
        gists = await self.get_all(force_refresh=True)
        logger.info("gist_cache_refreshed", store=self.name, gist_count=len(gists))
        self._resource_list_changed()

    def invalidate(self) -> None:
        """Drop the cached collection. Role references and subscriptions are kept."""
        self._state = NotLoaded()

    # ----- subscriptions -----

    def subscribe(self, gist_id: str) -> None:
        self._subscriptions.add(gist_id)

    def unsubscribe(self, gist_id: str) -> None:
        self._subscriptions.discard(gist_id)

    def is_subscribed(self, gist_id: str) -> bool:
        return gist_id in self._subscriptions

    # ----- special gists -----

    def role_id(self, role: GistRole) -> str | None:
        return self._role_ids.get(role)

    async def get_role(self, role: GistRole) -> Gist | None:
        """Resolve a special gist with its content loaded, or None if there isn't one."""
        gist_id = self._role_ids.get(role)
        if gist_id is None:
            # A first load may discover it
            await self.get_all()
            gist_id = self._role_ids.get(role)
            if gist_id is None:
                return None

        gist = await self.find(gist_id)
        if gist is None:
            return None
        return await self.ensure_content_loaded(gist)

    def set_role(self, role: GistRole, gist: Gist) -> None:
        """Register a newly created special gist so it resolves without a re-scan."""
        self.add(gist)
        self._role_ids[role] = gist.id

    async def get_daily_notes(self) -> Gist | None:
        return await self.get_role(GistRole.DAILY_NOTES)

    async def get_prompts(self) -> Gist | None:
        return await self.get_role(GistRole.PROMPTS)

    def set_daily_notes(self, gist: Gist) -> None:
        self.set_role(GistRole.DAILY_NOTES, gist)

    def set_prompts(self, gist: Gist) -> None:
        self.set_role(GistRole.PROMPTS, gist)

    # ----- internals -----

    def _accepts(self, gist: Gist) -> bool:
        return not self.markdown_only or is_markdown_gist(gist)

    def _discover_roles(self, gists: list[Gist]) -> None:
        for role in self._tracked_roles:
            predicate = ROLE_PREDICATES[role]
            match = next((g for g in gists if predicate(g)), None)
            if match is not None:
                self._role_ids[role] = match.id

    def _resource_list_changed(self) -> None:
        if self.notify:
            self._notifier.resource_list_changed()

    def _resource_changed(self, gist_id: str) -> None:
        if self.notify:
            self._notifier.resource_changed(gist_id)

    def _prompt_list_changed(self) -> None:
        if self.notify:
            self._notifier.prompt_list_changed()


# ============== Factories ==============

def create_your_gist_store(
    client: GistClient, notifier: ChangeNotifier, settings: Settings
) -> GistStore:
    return GistStore(
        client,
        functools.partial(fetch_your_gists, page_size=settings.page_size),
        notifier,
        name="your_gists",
        notify=True,
        markdown_only=settings.markdown_only,
        roles=(GistRole.DAILY_NOTES, GistRole.PROMPTS),
    )


def create_starred_gist_store(
    client: GistClient, notifier: ChangeNotifier, settings: Settings
) -> GistStore:
    # Starred gists only raise notifications when they're part of the resource list
    return GistStore(
        client,
        fetch_starred_gists,
        notifier,
        name="starred_gists",
        notify=settings.include_starred,
        markdown_only=settings.markdown_only,
    )
