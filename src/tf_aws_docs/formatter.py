"""
LLM-oriented text formatting for tool output.

Every block starts with a separator line followed by aligned KEY: value
rows, so a model can split and scan results without parsing JSON.
"""
import re
from typing import Iterable, List, Optional

from .constants import SEPARATOR, TERRAFORM_AWS_PROVIDER_REPOSITORY_URL
from .models import DocKind, Document, Issue, Release
from .resolution import ResolutionResult

_ISSUE_REFERENCE = re.compile(r"#(\d{2,7})")
_SENTENCE_END = re.compile(r"(?<=\.)\s+")


def _rows(pairs: Iterable[tuple]) -> List[str]:
    pairs = [(key, value) for key, value in pairs if value is not None]
    width = max(len(key) for key, _ in pairs) + 2
    return [f"{(key + ':').ljust(width)}{value}" for key, value in pairs]


def _first_sentence(body: Optional[str]) -> str:
    if not body or not body.strip():
        return "No description provided."
    return _SENTENCE_END.split(body.strip(), maxsplit=1)[0]


def remote_source_url(document: Document) -> str:
    return f"{TERRAFORM_AWS_PROVIDER_REPOSITORY_URL}/blob/main/{document.kind.remote_path}{document.resolved_file_name}"


def format_document_summary(document: Document) -> str:
    """Metadata block for one page, as used by the list tools."""
    label = document.kind.label
    lines = [SEPARATOR]
    lines.extend(_rows([
        ("ID", document.identifier),
        ("SUBCATEGORY", document.category),
        ("PAGE_TITLE", document.title),
        ("DESCRIPTION", document.short_description),
        (label, document.entity_name),
        (f"{label}_DESCRIPTION", document.long_description),
        ("FILE_NAME", document.resolved_file_name),
        ("FILE_PATH", document.locator),
        ("SOURCE", remote_source_url(document)),
    ]))
    return "\n".join(lines)


def format_document(
    document: Document,
    content: str,
    resolution: Optional[ResolutionResult] = None,
) -> str:
    """
    Full page: metadata block, optional resolution details, then the raw content.

    :param document: Parsed page
    :param content: Raw markdown of the page
    :param resolution: Resolution that selected the page, if any
    """
    lines = [format_document_summary(document)]
    extra = [
        ("HEADINGS", ", ".join(document.headings) or "(none)"),
        ("ARGUMENTS", ", ".join(document.argument_names) or "(none)"),
    ]
    if resolution is not None and resolution.is_match:
        extra.extend([
            ("MATCHED_QUERY", resolution.original_query),
            ("MATCHED_FIELD", resolution.matched_field.value if resolution.matched_field else None),
            ("MATCHED_VALUE", resolution.matched_value),
            ("MATCH_DISTANCE", resolution.distance),
        ])
    lines.extend(_rows(extra))
    lines.extend(["", "CONTENT:", content])
    return "\n".join(lines)


def format_not_found(kind: DocKind, query: str) -> str:
    return f"Error: No matching AWS {kind.value} documentation found for '{query}'."


def format_issue(issue: Issue, base_url: str = TERRAFORM_AWS_PROVIDER_REPOSITORY_URL) -> str:
    lines = [SEPARATOR]
    lines.extend(_rows([
        ("ID", issue.number),
        ("TITLE", f"#{issue.number}: {issue.title}"),
        ("DESCRIPTION", _first_sentence(issue.body)),
        ("SOURCE", f"{base_url}/issues/{issue.number}"),
        ("STATE", issue.state),
        ("USER", issue.user),
        ("LABELS", ", ".join(issue.labels) or "none"),
        ("CREATED_AT", issue.created_at),
        ("UPDATED_AT", issue.updated_at),
        ("CLOSED_AT", issue.closed_at),
        ("COMMENTS", issue.comments),
    ]))
    lines.extend(["", "BODY:", issue.body or "*(no body)*"])
    return "\n".join(lines)


def format_release(release: Release, base_url: str = TERRAFORM_AWS_PROVIDER_REPOSITORY_URL) -> str:
    lines = [SEPARATOR]
    lines.extend(_rows([
        ("ID", release.id),
        ("TAG", release.tag_name),
        ("NAME", release.name or "(no name)"),
        ("AUTHOR", release.author),
        ("PUBLISHED_AT", release.published_at),
        ("URL", release.html_url or f"{base_url}/releases/tag/{release.tag_name}"),
        ("ASSET_COUNT", release.asset_count),
    ]))
    lines.extend(["", "BODY:", _first_sentence(release.body)])
    return "\n".join(lines)


def format_release_with_issues(
    release: Release,
    issues: List[Issue],
    base_url: str = TERRAFORM_AWS_PROVIDER_REPOSITORY_URL,
) -> str:
    parts = [format_release(release, base_url)]
    for issue in issues:
        parts.extend(["", "REFERENCED ISSUE:", format_issue(issue, base_url)])
    return "\n".join(parts)


def extract_issue_references(body: Optional[str]) -> List[int]:
    """Unique ``#NN`` references (2-7 digits) in order of first appearance."""
    numbers: List[int] = []
    for match in _ISSUE_REFERENCE.finditer(body or ""):
        number = int(match.group(1))
        if number not in numbers:
            numbers.append(number)
    return numbers
