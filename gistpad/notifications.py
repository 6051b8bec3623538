"""
Change notifications for GistPad MCP Server.

The gist stores announce changes through a ChangeNotifier. Notifications are
fire-and-forget: a failed delivery is logged and never undoes the cache change
that triggered it.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any, Protocol

import structlog
from mcp.server.session import ServerSession
from pydantic import AnyUrl

from .utils import gist_uri

logger = structlog.get_logger(__name__)


class ChangeNotifier(Protocol):
    """Sink for the three kinds of change a gist store can announce."""

    def resource_list_changed(self) -> None: ...

    def resource_changed(self, gist_id: str) -> None: ...

    def prompt_list_changed(self) -> None: ...


class NullNotifier:
    """Notifier that drops everything."""

    def resource_list_changed(self) -> None:
        pass

    def resource_changed(self, gist_id: str) -> None:
        pass

    def prompt_list_changed(self) -> None:
        pass


class SessionNotifier:
    """Sends notifications to the connected MCP client session.

    The session is bound from inside request handlers, since the low-level
    server only exposes it through the request context. Until a session is
    bound, notifications are dropped.
    """

    def __init__(self) -> None:
        self._session: ServerSession | None = None
        self._pending: set[asyncio.Task] = set()

    def bind(self, session: ServerSession) -> None:
        self._session = session

    def resource_list_changed(self) -> None:
        if self._session:
            self._dispatch("resource_list_changed", self._session.send_resource_list_changed())
        else:
            logger.debug("notification_dropped", kind="resource_list_changed")

    def resource_changed(self, gist_id: str) -> None:
        if self._session:
            uri = AnyUrl(gist_uri(gist_id))
            self._dispatch("resource_changed", self._session.send_resource_updated(uri))
        else:
            logger.debug("notification_dropped", kind="resource_changed", gist_id=gist_id)

    def prompt_list_changed(self) -> None:
        if self._session:
            self._dispatch("prompt_list_changed", self._session.send_prompt_list_changed())
        else:
            logger.debug("notification_dropped", kind="prompt_list_changed")

    async def drain(self) -> None:
        """Wait for notifications that are still in flight."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _dispatch(self, kind: str, send: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(send)
        self._pending.add(task)
        task.add_done_callback(lambda t: self._on_sent(kind, t))

    def _on_sent(self, kind: str, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning("notification_failed", kind=kind, error=str(error))
        else:
            logger.debug("notification_sent", kind=kind)
