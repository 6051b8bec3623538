"""
GitHub Gists API client for GistPad MCP Server.

A thin async wrapper over httpx that scopes every request to the /gists endpoint,
parses JSON responses, and turns non-2xx responses into GitHubApiError.
"""

from typing import Any

import httpx
import structlog

logger = structlog.get_logger(__name__)

GITHUB_API_URL = "https://api.github.com"
GISTS_PATH = "/gists"


class GitHubApiError(Exception):
    """Raised when the GitHub API answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"GitHub API error: {status_code} - {message}")


class GistClient:
    """Async client for the GitHub Gists API.

    Paths are relative to /gists, so `get("")` lists gists, `get("/starred")`
    lists starred gists and `patch(f"/{gist_id}", ...)` updates one gist.
    """

    def __init__(
        self,
        token: str,
        *,
        api_url: str = GITHUB_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=api_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github.v3+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            transport=transport,
        )

    async def __aenter__(self) -> "GistClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        response = await self._http.request(
            method, f"{GISTS_PATH}{path}", json=json, params=params
        )

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "github_request_failed",
                method=method,
                path=path,
                status=response.status_code,
                error=message,
            )
            raise GitHubApiError(response.status_code, message)

        # PUT/DELETE answer with 204 No Content
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self._request("POST", path, json=body)

    async def patch(self, path: str, body: Any = None) -> Any:
        return await self._request("PATCH", path, json=body)

    async def put(self, path: str) -> None:
        await self._request("PUT", path)

    async def delete(self, path: str) -> None:
        await self._request("DELETE", path)


def _error_message(response: httpx.Response) -> str:
    """Prefer the API's own error message, fall back to the raw body."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.text
