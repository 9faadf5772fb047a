"""
Issue and release tools backed by the GitHub API.
"""
import logging
from typing import Callable, List

from ..constants import TERRAFORM_AWS_PROVIDER_REPOSITORY_URI, TERRAFORM_AWS_PROVIDER_REPOSITORY_URL
from ..exceptions import GitHubAPIError
from ..formatter import (
    extract_issue_references,
    format_issue,
    format_release,
    format_release_with_issues,
)
from ..github_client import GitHubClient
from ..models import Issue, Release

logger = logging.getLogger(__name__)


class _GitHubTool:
    """Shared wiring for tools that open one GitHub client per call."""

    def __init__(
        self,
        client_factory: Callable[[], GitHubClient],
        repository: str = TERRAFORM_AWS_PROVIDER_REPOSITORY_URI,
        base_url: str = TERRAFORM_AWS_PROVIDER_REPOSITORY_URL,
    ):
        self._client_factory = client_factory
        self.repository = repository
        self.base_url = base_url


class IssueTools(_GitHubTool):

    async def get_open_issues(self, paginate: bool = False) -> List[str]:
        async with self._client_factory() as client:
            issues = await client.list_issues_by_state(self.repository, "open", paginate)
        if not issues:
            return [f"No open issues found in {self.repository}."]
        return [format_issue(issue, self.base_url) for issue in issues]

    async def get_issue(self, issue_number: int) -> List[str]:
        async with self._client_factory() as client:
            issue = await client.get_issue(self.repository, issue_number)
        return [format_issue(issue, self.base_url)]


class ReleaseTools(_GitHubTool):

    async def list_all_releases(self) -> List[str]:
        async with self._client_factory() as client:
            releases = await client.list_releases(self.repository)
        if not releases:
            return [f"No releases found in {self.repository}."]
        return [format_release(release, self.base_url) for release in releases]

    async def get_release_by_tag(self, tag: str, include_issues: bool = False) -> List[str]:
        async with self._client_factory() as client:
            release = await client.get_release_by_tag(self.repository, tag)
            return [await self._render(client, release, include_issues)]

    async def get_latest_release(self, include_issues: bool = False) -> List[str]:
        async with self._client_factory() as client:
            releases = await client.list_releases(self.repository)
            if not releases:
                return ["No releases found for the Terraform AWS Provider repository."]
            return [await self._render(client, releases[0], include_issues)]

    async def _render(self, client: GitHubClient, release: Release, include_issues: bool) -> str:
        if not include_issues:
            return format_release(release, self.base_url)
        issues = await self._referenced_issues(client, release)
        return format_release_with_issues(release, issues, self.base_url)

    async def _referenced_issues(self, client: GitHubClient, release: Release) -> List[Issue]:
        issues: List[Issue] = []
        for number in extract_issue_references(release.body):
            try:
                issues.append(await client.get_issue(self.repository, number))
            except GitHubAPIError as exc:
                logger.warning("Referenced issue #%d could not be fetched: %s", number, exc)
                issues.append(Issue.unavailable(number))
        return issues
