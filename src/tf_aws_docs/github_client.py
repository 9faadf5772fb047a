"""
Async GitHub REST client for the provider repository.

Every method raises GitHubAPIError on failure, prefixed with the name of
the operation that failed.
"""
import base64
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from .constants import GITHUB_API_URL, GITHUB_PAGE_SIZE, MAX_GITHUB_ISSUES_PAGES
from .exceptions import GitHubAPIError
from .models import Issue, Release

logger = logging.getLogger(__name__)

ISSUE_STATES = ("open", "closed", "all")


class GitHubClient:
    """
    Authenticated client for the handful of endpoints the tools need.

    Usage:
        async with GitHubClient(token) as client:
            issues = await client.list_issues_by_state("hashicorp/terraform-provider-aws")
    """

    def __init__(
        self,
        token: str,
        base_url: str = GITHUB_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        :param token: GitHub personal access token
        :param base_url: API root, overridable for GitHub Enterprise
        :param timeout: Request timeout in seconds
        :param transport: Optional httpx transport (tests)
        """
        if not token or not isinstance(token, str) or not token.strip():
            raise GitHubAPIError("GitHubClient: A valid GitHub personal access token is required.")

        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_file_content(self, repo: str, path: str) -> str:
        """
        Retrieve the decoded content of a file.

        :param repo: Repository in 'owner/repo' format
        :param path: File path within the repository
        :return: File content as text
        """
        owner, name = self._parse_repo(repo)
        data = await self._get("get_file_content", f"/repos/{owner}/{name}/contents/{path}")
        if isinstance(data, dict) and data.get("type") == "file" and isinstance(data.get("content"), str):
            raw = base64.b64decode(data["content"].replace("\n", ""))
            return raw.decode("utf-8")
        raise GitHubAPIError(f"get_file_content: Path '{path}' is not a file in {repo}")

    async def list_issues_by_state(
        self,
        repo: str,
        state: str = "open",
        paginate: bool = False,
    ) -> List[Issue]:
        """
        List issues by state.

        Only the first page is fetched unless ``paginate`` is set; pagination
        stops after MAX_GITHUB_ISSUES_PAGES pages.

        :param repo: Repository in 'owner/repo' format
        :param state: "open", "closed" or "all"
        :param paginate: Fetch every page (bounded)
        :return: Issues in API order
        """
        if state not in ISSUE_STATES:
            raise GitHubAPIError(f"list_issues_by_state: Invalid state '{state}'")

        owner, name = self._parse_repo(repo)
        issues: List[Issue] = []
        page = 1
        while True:
            data = await self._get(
                "list_issues_by_state",
                f"/repos/{owner}/{name}/issues",
                params={"state": state, "per_page": GITHUB_PAGE_SIZE, "page": page},
            )
            issues.extend(Issue.from_api(item) for item in data)
            if not paginate or len(data) < GITHUB_PAGE_SIZE or page >= MAX_GITHUB_ISSUES_PAGES:
                return issues
            page += 1

    async def get_issue(self, repo: str, issue_number: int) -> Issue:
        owner, name = self._parse_repo(repo)
        data = await self._get("get_issue", f"/repos/{owner}/{name}/issues/{issue_number}")
        return Issue.from_api(data)

    async def list_releases(self, repo: str) -> List[Release]:
        """List the most recent releases (first page of 100, newest first)."""
        owner, name = self._parse_repo(repo)
        data = await self._get(
            "list_releases",
            f"/repos/{owner}/{name}/releases",
            params={"per_page": GITHUB_PAGE_SIZE, "page": 1},
        )
        return [Release.from_api(item) for item in data]

    async def get_release_by_tag(self, repo: str, tag: str) -> Release:
        owner, name = self._parse_repo(repo)
        data = await self._get("get_release_by_tag", f"/repos/{owner}/{name}/releases/tags/{tag}")
        return Release.from_api(data)

    async def _get(self, operation: str, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        logger.debug("GitHub %s: GET %s %s", operation, url, params or "")
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise GitHubAPIError(f"{operation}: {exc}") from exc

        if "<!DOCTYPE html>" in response.text[:200]:
            raise GitHubAPIError(
                f"{operation}: Received HTML error page from GitHub API. "
                "Possible rate limit or server error."
            )

        if response.status_code >= 400:
            raise GitHubAPIError(
                f"{operation}: {response.status_code} {self._error_message(response)}"
            )

        try:
            return response.json()
        except ValueError as exc:
            raise GitHubAPIError(f"{operation}: Invalid JSON in response") from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.reason_phrase
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
        return response.reason_phrase

    @staticmethod
    def _parse_repo(repo: str) -> Tuple[str, str]:
        parts = repo.split("/")
        if len(parts) != 2 or not all(parts):
            raise GitHubAPIError(f"Repository must be in 'owner/repo' format, got '{repo}'")
        return parts[0], parts[1]
