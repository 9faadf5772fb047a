from .schemas import (
    EmptyArgs,
    GetOpenIssuesArgs,
    GetIssueArgs,
    GetReleaseByTagArgs,
    GetLatestReleaseArgs,
    GetResourceDocArgs,
    GetDatasourceDocArgs,
)
from .doc_tools import ContentFetcher, DocumentTools
from .github_tools import IssueTools, ReleaseTools

__all__ = [
    "EmptyArgs",
    "GetOpenIssuesArgs",
    "GetIssueArgs",
    "GetReleaseByTagArgs",
    "GetLatestReleaseArgs",
    "GetResourceDocArgs",
    "GetDatasourceDocArgs",
    "ContentFetcher",
    "DocumentTools",
    "IssueTools",
    "ReleaseTools",
]
