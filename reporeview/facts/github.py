"""GitHub REST API fact provider"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import PurePosixPath
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from reporeview.errors import InfrastructureError, InputError, NotFoundError, RateLimitedError
from reporeview.facts.filesystem import IGNORED_DIRS, find_manifest, parse_manifest
from reporeview.facts.provider import Clock, FactProvider
from reporeview.facts.repo_ref import RepoRef
from reporeview.models import (
    CommitLog,
    FactSource,
    PackageManifest,
    RepositoryFacts,
    RepositoryMetadata,
    ToolOutcome,
)

import config

logger = logging.getLogger(__name__)

GITHUB_HOST = "github.com"
RAW_ACCEPT = "application/vnd.github.raw+json"
EMPTY_REPOSITORY_STATUS = 409


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class GitHubFactProvider(FactProvider):
    """Builds facts from the GitHub API without cloning.

    Lint, audit and complexity facts are not available from this source and
    are left unset.
    """

    def __init__(
        self,
        token: str = None,
        api_base: str = None,
        page_size: int = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport = None,
        clock: Clock = None,
    ):
        super().__init__(clock)
        self.token = config.GITHUB_TOKEN if token is None else token
        self.api_base = api_base or config.GITHUB_API_BASE
        self.page_size = page_size or config.GITHUB_PAGE_SIZE
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "reporeview",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _check(self, response: httpx.Response, ref: RepoRef):
        if response.status_code == 404:
            raise NotFoundError(details=ref.full_name)
        if response.status_code in (403, 429):
            logger.error(f"GitHub API refused request: {response.status_code} - {response.text[:200]}")
            raise RateLimitedError(
                "GitHub API rate limit exceeded. Please try again later.",
                details=response.headers.get("x-ratelimit-reset"),
            )
        if not response.is_success:
            logger.error(f"GitHub API error: {response.status_code} - {response.text[:200]}")
            raise InfrastructureError(details=f"GitHub API returned {response.status_code}")

    async def _fetch(self, client: httpx.AsyncClient, path: str, **kwargs) -> httpx.Response:
        try:
            return await client.get(path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Error calling GitHub API: {e}")
            raise InfrastructureError(details=f"GitHub API request failed: {type(e).__name__}")

    async def _get(self, client: httpx.AsyncClient, ref: RepoRef, path: str, **params) -> Any:
        response = await self._fetch(client, path, params=params or None)
        self._check(response, ref)
        return response.json()

    async def _get_unless_empty(self, client: httpx.AsyncClient, ref: RepoRef, path: str, **params) -> Any:
        """Like _get, but None when the repository has no commits yet.

        GitHub answers 409 for commit and tree listings of an empty repository.
        """
        response = await self._fetch(client, path, params=params or None)
        if response.status_code == EMPTY_REPOSITORY_STATUS:
            logger.warning(f"{ref.full_name} is empty: {path} returned {response.status_code}")
            return None
        self._check(response, ref)
        return response.json()

    async def _get_raw(self, client: httpx.AsyncClient, ref: RepoRef, path: str) -> Optional[str]:
        """Fetch raw file content; None when the file does not exist."""
        response = await self._fetch(client, path, headers={"Accept": RAW_ACCEPT})
        if response.status_code == 404:
            return None
        self._check(response, ref)
        return response.text

    def _files_from_tree(self, tree: Dict) -> tuple:
        if tree.get("truncated"):
            logger.warning("GitHub tree listing was truncated")
        files: List[str] = []
        for item in tree.get("tree", []):
            if item.get("type") != "blob":
                continue
            path = item.get("path", "")
            if any(part in IGNORED_DIRS for part in PurePosixPath(path).parts[:-1]):
                continue
            files.append(path)
        return tuple(sorted(files))

    def _commit_log(self, commits: List[Dict]) -> CommitLog:
        messages = []
        timestamps = []
        for item in commits:
            commit = item.get("commit", {})
            messages.append((commit.get("message") or "").strip())
            timestamp = _parse_timestamp((commit.get("committer") or {}).get("date"))
            if timestamp is not None:
                timestamps.append(timestamp)
        return CommitLog(count=len(messages), messages=tuple(messages), timestamps=tuple(timestamps))

    async def _manifest(self, client, ref: RepoRef, files: tuple) -> Optional[PackageManifest]:
        name = find_manifest(files)
        if name is None:
            return None
        content = await self._get_raw(client, ref, f"/repos/{ref.full_name}/contents/{name}")
        if content is None:
            return None
        try:
            return parse_manifest(name, content)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Unable to parse {name}: {e}")
            return None

    async def gather(self, client: httpx.AsyncClient, ref: RepoRef) -> RepositoryFacts:
        captured_at = self.clock()
        base = f"/repos/{ref.full_name}"

        repo_data = await self._get(client, ref, base)
        branch = repo_data.get("default_branch") or "HEAD"

        languages, commits, issues, pulls, tree, readme = await asyncio.gather(
            self._get(client, ref, f"{base}/languages"),
            self._get_unless_empty(client, ref, f"{base}/commits", per_page=self.page_size),
            self._get(client, ref, f"{base}/issues", state="open", per_page=self.page_size),
            self._get(client, ref, f"{base}/pulls", state="open", per_page=self.page_size),
            self._get_unless_empty(client, ref, f"{base}/git/trees/{branch}", recursive=1),
            self._get_raw(client, ref, f"{base}/readme"),
        )

        files = self._files_from_tree(tree) if tree is not None else ()
        manifest = await self._manifest(client, ref, files)
        open_issues = [issue for issue in issues if "pull_request" not in issue]

        metadata = RepositoryMetadata(
            stars=int(repo_data.get("stargazers_count") or 0),
            forks=int(repo_data.get("forks_count") or 0),
            watchers=int(repo_data.get("watchers_count") or 0),
            subscribers=int(repo_data.get("subscribers_count") or 0),
            open_issues=len(open_issues),
            open_pull_requests=len(pulls),
            updated_at=_parse_timestamp(repo_data.get("updated_at")),
            description=repo_data.get("description") or "",
            has_wiki=bool(repo_data.get("has_wiki")),
            has_readme=readme is not None,
            size_kb=int(repo_data.get("size") or 0),
            languages=tuple(sorted(languages)),
        )
        if commits is None:
            history = ToolOutcome.failure("repository is empty")
        else:
            history = ToolOutcome.success(self._commit_log(commits))
        logger.info(f"Fetched {ref.full_name}: {len(files)} files, {len(commits or [])} commits")

        return RepositoryFacts(
            source=FactSource.HOSTING_API,
            captured_at=captured_at,
            files=files,
            readme=readme,
            manifest=manifest,
            history=history,
            metadata=metadata,
        )

    @asynccontextmanager
    async def collect(self, ref: RepoRef) -> AsyncIterator[RepositoryFacts]:
        if ref.host != GITHUB_HOST:
            raise InputError("Unsupported repository host", details=f"{ref.host} is not {GITHUB_HOST}")
        async with httpx.AsyncClient(
            base_url=self.api_base,
            headers=self._headers(),
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            yield await self.gather(client, ref)
