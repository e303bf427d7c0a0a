import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx # For making asynchronous HTTP requests to GitHub API
from pydantic import ValidationError

from . import config
from .errors import InvalidUrlError, UpstreamApiError
from .models import PathEntry, RepoTarget

logger = logging.getLogger(__name__)

RAW_CONTENT_MEDIA_TYPE = "application/vnd.github.v3.raw"


def parse_repo_url(url: str) -> RepoTarget:
    """Parses a GitHub URL into owner, repository name and optional branch.

    Accepts ``https://github.com/owner/repo``, the same with a trailing
    ``.git`` or slash, and ``https://github.com/owner/repo/tree/<branch>/...``.
    Only the first segment after ``tree`` is taken as the branch, so branch
    names containing ``/`` are cut at the first slash.
    """
    parts = [part for part in url.strip().split("/") if part]
    try:
        github_index = parts.index("github.com")
    except ValueError:
        raise InvalidUrlError() from None

    owner_and_rest = parts[github_index + 1:]
    if len(owner_and_rest) < 2:
        raise InvalidUrlError()

    owner, repo = owner_and_rest[0], owner_and_rest[1]
    if repo.endswith(".git"):
        repo = repo[:-len(".git")]
    if not repo:
        raise InvalidUrlError()

    branch = None
    if len(owner_and_rest) >= 4 and owner_and_rest[2] == "tree":
        branch = owner_and_rest[3]

    return RepoTarget(owner=owner, repo=repo, branch=branch)


def create_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=config.HTTP_TIMEOUT_SECONDS)


def _upstream_error(error: httpx.HTTPError) -> UpstreamApiError:
    """Builds the caller-visible error, preferring GitHub's own ``message``."""
    if isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code
        gh_message = None
        try:
            payload = error.response.json()
        except ValueError: # Not JSON (e.g. an HTML error page from a proxy)
            payload = None
        if isinstance(payload, dict):
            gh_message = payload.get("message")
        return UpstreamApiError(gh_message or str(error), status_code=status_code)
    return UpstreamApiError(str(error))


class GitHubClient:
    """Read-only access to the three GitHub REST endpoints the prompt needs."""

    def __init__(self, http_client: httpx.AsyncClient, token: Optional[str] = None,
                 api_base_url: str = config.GITHUB_API_BASE_URL):
        self.http_client = http_client
        self.token = token
        self.api_base_url = api_base_url.rstrip("/")

    def headers(self, accept: Optional[str] = None) -> Dict[str, str]:
        headers = {}
        if accept:
            headers["Accept"] = accept
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    async def _get(self, url: str, params: Optional[Dict[str, Any]] = None,
                   accept: Optional[str] = None) -> httpx.Response:
        try:
            response = await self.http_client.get(url, params=params, headers=self.headers(accept))
            response.raise_for_status() # Raises HTTPStatusError for 4xx/5xx responses
        except httpx.HTTPError as e: # Status errors plus network errors, timeouts etc.
            error = _upstream_error(e)
            logger.warning("GitHub API request failed for %s: %s", url, error)
            raise error from e
        return response

    def repo_url(self, owner: str, repo: str) -> str:
        return f"{self.api_base_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = await self._get(url, params=params)
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamApiError(f"Unexpected response format from GitHub API for {url}") from e
        if not isinstance(data, dict):
            raise UpstreamApiError(f"Unexpected response format from GitHub API for {url}")
        return data

    async def get_default_branch(self, owner: str, repo: str) -> str:
        data = await self._get_json(self.repo_url(owner, repo))
        default_branch = data.get("default_branch")
        if not default_branch:
            raise UpstreamApiError(f"GitHub API did not report a default branch for {owner}/{repo}")
        return default_branch

    async def get_tree(self, owner: str, repo: str, branch: str) -> List[PathEntry]:
        """Returns the flat, recursive tree listing of ``branch``."""
        data = await self._get_json(
            f"{self.repo_url(owner, repo)}/git/trees/{quote(branch, safe='')}",
            params={"recursive": 1},
        )
        if data.get("truncated"):
            logger.warning("Tree listing for %s/%s@%s was truncated by GitHub", owner, repo, branch)
        items = data.get("tree")
        if not isinstance(items, list):
            raise UpstreamApiError(f"Unexpected tree format from GitHub API for {owner}/{repo}@{branch}")
        try:
            return [PathEntry.model_validate(item) for item in items]
        except ValidationError as e:
            raise UpstreamApiError(f"Unexpected tree entry from GitHub API for {owner}/{repo}@{branch}") from e

    async def get_raw_content(self, owner: str, repo: str, path: str, ref: str) -> str:
        response = await self._get(
            f"{self.repo_url(owner, repo)}/contents/{quote(path)}",
            params={"ref": ref},
            accept=RAW_CONTENT_MEDIA_TYPE,
        )
        return response.content.decode("utf-8", errors="replace")
