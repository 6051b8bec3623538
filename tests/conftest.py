"""
Pytest configuration and fixtures for gistpad tests.

GitHub is replaced by FakeGistApi, an in-memory Gists API served to the real
GistClient through httpx.MockTransport.
"""

import itertools
import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from gistpad.client import GistClient
from gistpad.config import Settings
from gistpad.context import AppContext
from gistpad.models import Gist, GistFile

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


class FakeGistApi:
    """Just enough of the GitHub Gists API for the server's needs."""

    def __init__(self):
        self.gists: dict[str, dict] = {}
        self.starred: list[str] = []
        self.comments: dict[str, list[dict]] = {}
        self.requests: list[tuple[str, str]] = []
        self._ids = itertools.count(1)
        self._clock = itertools.count(1)

    # ----- seeding / inspection -----

    def seed(self, description: str | None, files: dict[str, str], public: bool = False) -> dict:
        gist_id = f"gist{next(self._ids)}"
        now = self._now()
        self.gists[gist_id] = {
            "id": gist_id,
            "description": description,
            "public": public,
            "created_at": now,
            "updated_at": now,
            "owner": {"login": "testuser"},
            "comments": 0,
            "html_url": f"https://gist.github.com/{gist_id}",
            "files": {name: self._file(gist_id, name, content) for name, content in files.items()},
        }
        self.comments[gist_id] = []
        return self.gists[gist_id]

    def count(self, method: str, path: str) -> int:
        return sum(1 for m, p in self.requests if m == method and p == path)

    def reset_requests(self) -> None:
        self.requests.clear()

    # ----- transport -----

    def handler(self, request: httpx.Request) -> httpx.Response:
        method = request.method
        path = request.url.path
        self.requests.append((method, path))

        parts = path.strip("/").split("/")[1:]
        body = json.loads(request.content) if request.content else None

        if not parts:
            if method == "GET":
                return self._list(request)
            if method == "POST":
                return self._create(body)

        if parts == ["starred"] and method == "GET":
            return httpx.Response(200, json=[self._summary(self.gists[i]) for i in self.starred if i in self.gists])

        gist_id = parts[0]
        if gist_id not in self.gists:
            return httpx.Response(404, json={"message": "Not Found"})

        if len(parts) == 1:
            if method == "GET":
                return httpx.Response(200, json=self.gists[gist_id])
            if method == "PATCH":
                return self._patch(gist_id, body)
            if method == "DELETE":
                del self.gists[gist_id]
                return httpx.Response(204)

        if parts[1] == "star":
            if method == "PUT" and gist_id not in self.starred:
                self.starred.append(gist_id)
            elif method == "DELETE" and gist_id in self.starred:
                self.starred.remove(gist_id)
            return httpx.Response(204)

        if parts[1] == "comments":
            if len(parts) == 2 and method == "GET":
                return httpx.Response(200, json=self.comments[gist_id])
            if len(parts) == 2 and method == "POST":
                comment = {
                    "id": next(self._ids),
                    "body": body["body"],
                    "user": {"login": "testuser"},
                    "created_at": self._now(),
                    "updated_at": self._now(),
                }
                self.comments[gist_id].append(comment)
                self.gists[gist_id]["comments"] += 1
                return httpx.Response(201, json=comment)
            if len(parts) == 3 and method == "DELETE":
                self.comments[gist_id] = [c for c in self.comments[gist_id] if str(c["id"]) != parts[2]]
                return httpx.Response(204)

        return httpx.Response(404, json={"message": "Not Found"})

    # ----- internals -----

    def _now(self) -> str:
        stamp = BASE_TIME + timedelta(seconds=next(self._clock))
        return stamp.isoformat().replace("+00:00", "Z")

    def _file(self, gist_id: str, name: str, content: str) -> dict:
        is_markdown = name.endswith(".md")
        return {
            "filename": name,
            "type": "text/markdown" if is_markdown else "text/plain",
            "language": "Markdown" if is_markdown else None,
            "raw_url": f"https://gist.githubusercontent.com/testuser/{gist_id}/raw/{name}",
            "size": len(content),
            "truncated": False,
            "content": content,
        }

    def _summary(self, gist: dict) -> dict:
        summary = dict(gist)
        summary["files"] = {
            name: {k: v for k, v in file.items() if k != "content"}
            for name, file in gist["files"].items()
        }
        return summary

    def _list(self, request: httpx.Request) -> httpx.Response:
        per_page = int(request.url.params.get("per_page", 30))
        page = int(request.url.params.get("page", 1))
        gists = list(self.gists.values())
        window = gists[(page - 1) * per_page: page * per_page]
        return httpx.Response(200, json=[self._summary(g) for g in window])

    def _create(self, body: dict) -> httpx.Response:
        if not body.get("files"):
            return httpx.Response(422, json={"message": "Validation Failed"})
        files = {name: f["content"] for name, f in body["files"].items()}
        gist = self.seed(body.get("description"), files, public=body.get("public", False))
        return httpx.Response(201, json=gist)

    def _patch(self, gist_id: str, body: dict) -> httpx.Response:
        gist = self.gists[gist_id]
        if "description" in body:
            gist["description"] = body["description"]

        for name, patch in (body.get("files") or {}).items():
            if patch is None:
                gist["files"].pop(name, None)
                continue
            content = patch.get("content", gist["files"].get(name, {}).get("content", ""))
            new_name = patch.get("filename", name)
            if new_name != name:
                gist["files"].pop(name, None)
            gist["files"][new_name] = self._file(gist_id, new_name, content)

        gist["updated_at"] = self._now()
        return httpx.Response(200, json=gist)


class RecordingNotifier:
    """ChangeNotifier that records every notification it receives."""

    def __init__(self):
        self.events: list[tuple] = []

    def resource_list_changed(self) -> None:
        self.events.append(("resource_list_changed",))

    def resource_changed(self, gist_id: str) -> None:
        self.events.append(("resource_changed", gist_id))

    def prompt_list_changed(self) -> None:
        self.events.append(("prompt_list_changed",))

    def clear(self) -> None:
        self.events.clear()


def build_gist(
    gist_id: str,
    files: dict[str, str | None],
    description: str | None = "Test Gist",
    updated_at: str = "2025-01-01T00:00:00Z",
) -> Gist:
    """Build a Gist model directly. A None file content means "not loaded"."""
    return Gist(
        id=gist_id,
        description=description,
        files={
            name: GistFile(
                filename=name,
                type="text/markdown",
                language="Markdown" if name.endswith(".md") else None,
                size=len(content or ""),
                content=content,
            )
            for name, content in files.items()
        },
        created_at="2025-01-01T00:00:00Z",
        updated_at=updated_at,
        owner={"login": "testuser"},
    )


@pytest.fixture
def make_gist():
    """Factory fixture for Gist models."""
    return build_gist


@pytest.fixture
def fake_api():
    return FakeGistApi()


@pytest.fixture
async def client(fake_api):
    client = GistClient("test-token", transport=httpx.MockTransport(fake_api.handler))
    yield client
    await client.aclose()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def settings():
    return Settings(github_token="test-token", include_prompts=True)


@pytest.fixture
def context(settings, client, notifier):
    """AppContext wired to the fake API and a recording notifier."""
    return AppContext.create(settings, client, notifier)
