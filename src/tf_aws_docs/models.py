from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, Optional, Tuple

from .constants import (
    DATASOURCE_DOCS_REMOTE_PATH,
    MISSING_PLACEHOLDER,
    RESOURCE_DOCS_REMOTE_PATH,
)


class DocKind(str, Enum):
    """Kind of provider documentation page."""

    RESOURCE = "resource"
    DATASOURCE = "datasource"

    @property
    def heading_prefix(self) -> str:
        return "Resource:" if self is DocKind.RESOURCE else "Data Source:"

    @property
    def remote_path(self) -> str:
        return RESOURCE_DOCS_REMOTE_PATH if self is DocKind.RESOURCE else DATASOURCE_DOCS_REMOTE_PATH

    @property
    def label(self) -> str:
        return "RESOURCE" if self is DocKind.RESOURCE else "DATASOURCE"


@dataclass(frozen=True)
class Document:
    """
    One parsed documentation page.

    ``identifier`` comes from the ``# Resource:``/``# Data Source:`` heading,
    falling back to the file name. ``locator`` is whatever the content
    fetcher needs to read the page again (a local path here).
    """
    identifier: str
    locator: str
    category: str = ""
    title: str = ""
    short_description: str = ""
    long_description: str = ""
    headings: Tuple[str, ...] = ()
    argument_names: Tuple[str, ...] = ()
    kind: DocKind = DocKind.RESOURCE
    entity_name: str = MISSING_PLACEHOLDER
    file_name: str = ""

    @property
    def resolved_file_name(self) -> str:
        return self.file_name or PurePath(self.locator).name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "category": self.category,
            "title": self.title,
            "short_description": self.short_description,
            "long_description": self.long_description,
            "headings": list(self.headings),
            "argument_names": list(self.argument_names),
            "kind": self.kind.value,
            "entity_name": self.entity_name,
            "file_name": self.resolved_file_name,
            "locator": self.locator,
        }


@dataclass
class Issue:
    number: int
    title: str
    state: str
    user: str
    labels: Tuple[str, ...] = ()
    body: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""
    closed_at: Optional[str] = None
    comments: int = 0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Issue":
        return cls(
            number=int(data["number"]),
            title=data.get("title") or "",
            state=data.get("state") or "open",
            user=(data.get("user") or {}).get("login", "unknown"),
            labels=tuple(label.get("name", "") for label in data.get("labels") or []),
            body=data.get("body"),
            created_at=data.get("created_at") or "",
            updated_at=data.get("updated_at") or "",
            closed_at=data.get("closed_at"),
            comments=int(data.get("comments") or 0),
        )

    @classmethod
    def unavailable(cls, number: int) -> "Issue":
        """Placeholder for a referenced issue that could not be fetched."""
        return cls(
            number=number,
            title=f"Referenced issue #{number} could not be fetched",
            state="open",
            user="unknown",
            body="(Referenced issue could not be fetched or does not exist)",
        )


@dataclass
class Release:
    id: int
    tag_name: str
    name: Optional[str] = None
    body: Optional[str] = None
    html_url: Optional[str] = None
    author: str = "unknown"
    published_at: str = ""
    draft: bool = False
    prerelease: bool = False
    asset_count: int = 0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Release":
        return cls(
            id=int(data["id"]),
            tag_name=data["tag_name"],
            name=data.get("name"),
            body=data.get("body"),
            html_url=data.get("html_url"),
            author=(data.get("author") or {}).get("login", "unknown"),
            published_at=data.get("published_at") or "",
            draft=bool(data.get("draft", False)),
            prerelease=bool(data.get("prerelease", False)),
            asset_count=len(data.get("assets") or []),
        )
