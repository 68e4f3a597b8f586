"""GitHub API client for reading and updating releases.

Three REST calls are all the updater needs:
1. GET   /repos/{owner}/{repo}/releases/{release_id}
2. GET   /repos/{owner}/{repo}/releases/tags/{tag}
3. PATCH /repos/{owner}/{repo}/releases/{release_id}

Design notes:
- Uses httpx for async HTTP requests
- httpx failures are translated into the errors.py hierarchy here, so
  callers never deal with transport details
- Uses a Protocol so the updater doesn't depend on the concrete
  implementation (makes testing with mocks easy)

GitHub API docs: https://docs.github.com/en/rest/releases/releases
"""

from __future__ import annotations

from typing import Any, Protocol
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from release_notes_updater.errors import (
    AuthError,
    GitHubAPIError,
    NetworkError,
    NotFoundError,
)
from release_notes_updater.logging_config import get_logger
from release_notes_updater.schemas import DEFAULT_API_URL, Release, RepoRef

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Protocol (Interface)
# ---------------------------------------------------------------------------


class ReleaseClientProtocol(Protocol):
    """Interface for fetching and updating GitHub releases."""

    async def get_release(self, repo: RepoRef, release_id: int) -> Release:
        """Fetch a release by its numeric ID."""
        ...

    async def get_release_by_tag(self, repo: RepoRef, tag: str) -> Release:
        """Fetch a release by its tag name."""
        ...

    async def update_release(self, repo: RepoRef, release_id: int, body: str) -> Release:
        """Replace a release's body and return the updated release."""
        ...


# ---------------------------------------------------------------------------
# Concrete Implementation
# ---------------------------------------------------------------------------


class GitHubReleaseClient:
    """Real GitHub API client using httpx.

    Usage:
        client = GitHubReleaseClient(token="ghp_...")
        release = await client.get_release_by_tag(RepoRef.parse("myorg/api"), "v1.2.0")
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the GitHub client.

        Args:
            token: GitHub token with contents:write on the repository
            base_url: REST API root (differs on GitHub Enterprise Server)
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "Authorization": f"Bearer {token}",
        }

    async def get_release(self, repo: RepoRef, release_id: int) -> Release:
        data = await self._request(
            "GET", f"/repos/{repo.owner}/{repo.name}/releases/{release_id}"
        )
        return _to_release(data)

    async def get_release_by_tag(self, repo: RepoRef, tag: str) -> Release:
        data = await self._request(
            "GET",
            f"/repos/{repo.owner}/{repo.name}/releases/tags/{quote(tag, safe='')}",
        )
        return _to_release(data)

    async def update_release(self, repo: RepoRef, release_id: int, body: str) -> Release:
        data = await self._request(
            "PATCH",
            f"/repos/{repo.owner}/{repo.name}/releases/{release_id}",
            json={"body": body},
        )
        return _to_release(data)

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        """Send one request and return the decoded JSON object.

        Raises:
            NetworkError: If the API could not be reached (too many redirects included)
            AuthError: On 401/403
            NotFoundError: On 404
            GitHubAPIError: On any other non-2xx status, or a reply that is not
                a JSON object
        """
        async with httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            try:
                resp = await client.request(method, url, **kwargs)
            except httpx.HTTPError as exc:
                raise NetworkError(f"{method} {url} failed: {exc}") from exc

        logger.debug("github_response", method=method, url=url, status=resp.status_code)
        self._raise_for_status(resp)
        try:
            data = resp.json()
        except ValueError as exc:
            raise GitHubAPIError(
                f"{method} {url} returned a non-JSON reply; check the API URL",
                resp.status_code,
            ) from exc
        if not isinstance(data, dict):
            raise GitHubAPIError(
                f"{method} {url} returned {type(data).__name__}, expected an object",
                resp.status_code,
            )
        return data

    @staticmethod
    def _raise_for_status(resp: httpx.Response) -> None:
        """Translate an error response into the errors.py hierarchy."""
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = resp.status_code
            detail = _error_message(resp)
            where = f"{resp.request.method} {resp.request.url.path}"
            if status == 404:
                raise NotFoundError(f"Release not found ({where}): {detail}", status) from exc
            if status in (401, 403):
                raise AuthError(
                    f"GitHub rejected the token ({status}, {where}): {detail}", status
                ) from exc
            raise GitHubAPIError(f"GitHub API error {status} ({where}): {detail}", status) from exc


def _to_release(data: dict[str, Any]) -> Release:
    """Validate a release payload; a wrong shape means the URL is not the GitHub API."""
    try:
        return Release.model_validate(data)
    except ValidationError as exc:
        raise GitHubAPIError(
            f"Unexpected release payload from GitHub: {exc.error_count()} invalid field(s)", 200
        ) from exc


def _error_message(resp: httpx.Response) -> str:
    """Pull GitHub's "message" field out of an error body, if there is one."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return resp.reason_phrase


# ---------------------------------------------------------------------------
# Mock Implementation (for testing)
# ---------------------------------------------------------------------------


class MockReleaseClient:
    """In-memory release store with the ReleaseClientProtocol interface.

    Use this in tests and local dry runs when you don't want to hit the
    real GitHub API. Every call is recorded in `calls`.

    Usage:
        client = MockReleaseClient(
            releases={1: "Old notes"}, tags={"v1.0.0": 1}
        )
        release = await client.get_release_by_tag(repo, "v1.0.0")
    """

    def __init__(
        self,
        releases: dict[int, str | None] | None = None,
        tags: dict[str, int] | None = None,
    ) -> None:
        self.releases: dict[int, str | None] = dict(releases or {})
        self.tags: dict[str, int] = dict(tags or {})
        self.calls: list[tuple[str, Any]] = []

    async def get_release(self, repo: RepoRef, release_id: int) -> Release:
        self.calls.append(("get_release", release_id))
        return self._lookup(release_id)

    async def get_release_by_tag(self, repo: RepoRef, tag: str) -> Release:
        self.calls.append(("get_release_by_tag", tag))
        if tag not in self.tags:
            raise NotFoundError(f"Release not found for tag {tag!r}", 404)
        return self._lookup(self.tags[tag])

    async def update_release(self, repo: RepoRef, release_id: int, body: str) -> Release:
        self.calls.append(("update_release", release_id))
        self._lookup(release_id)
        self.releases[release_id] = body
        return Release(id=release_id, body=body)

    def _lookup(self, release_id: int) -> Release:
        if release_id not in self.releases:
            raise NotFoundError(f"Release not found: {release_id}", 404)
        return Release(id=release_id, body=self.releases[release_id])
