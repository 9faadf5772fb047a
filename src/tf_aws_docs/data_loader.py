"""
Documentation ingestion.

Parses provider documentation pages (YAML front-matter + markdown body) into
Document objects and reads them from a local directory or from the
provider repository on GitHub.
"""
import logging
import os
import re
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import yaml

from .constants import (
    DOC_FILE_EXTENSION,
    MALFORMED_PLACEHOLDER,
    MISSING_PLACEHOLDER,
    TERRAFORM_AWS_PROVIDER_REPOSITORY_URI,
)
from .exceptions import DocumentNotFoundError, GitHubAPIError
from .github_client import GitHubClient
from .models import DocKind, Document

logger = logging.getLogger(__name__)

_FENCE = "---"
_CLOSING_FENCE = re.compile(r"^---[ \t]*$", re.MULTILINE)
_CODE_BLOCK = re.compile(r"^```.*?^```[ \t]*$", re.MULTILINE | re.DOTALL)
_SECTION_HEADING = re.compile(r"^#{2,3}[ \t]+(.+?)[ \t#]*$", re.MULTILINE)
_ARGUMENT_SECTION = re.compile(r"^##[ \t]+Argument Reference[ \t]*$", re.MULTILINE)
_NEXT_LEVEL_TWO = re.compile(r"^##[ \t]+\S", re.MULTILINE)
_ARGUMENT_BULLET = re.compile(r"^[ \t]*[*-][ \t]+`([^`]+)`", re.MULTILINE)


class DocumentParser:
    """
    Parses one documentation page into a Document.
    """

    def parse(self, content: str, locator: str, kind: DocKind) -> Document:
        """
        :param content: Raw markdown with optional YAML front-matter
        :param locator: Path or key the content was read from
        :param kind: Resource or datasource page
        :return: Document; absent metadata is "(missing)", unparsable front-matter "(malformed)"
        """
        file_name = os.path.basename(locator)
        front_matter, malformed, body = self._split_front_matter(content)

        if malformed:
            category = title = short_description = MALFORMED_PLACEHOLDER
        else:
            category = self._string_field(front_matter, "subcategory")
            title = self._string_field(front_matter, "page_title")
            short_description = self._string_field(front_matter, "description")

        entity_name, long_description = self._entity_heading(body, kind)
        identifier = entity_name if entity_name != MISSING_PLACEHOLDER else _strip_extension(file_name)

        prose = _CODE_BLOCK.sub("", body)

        return Document(
            identifier=identifier,
            locator=locator,
            category=category,
            title=title,
            short_description=short_description,
            long_description=long_description,
            headings=tuple(_SECTION_HEADING.findall(prose)),
            argument_names=tuple(self._argument_names(prose)),
            kind=kind,
            entity_name=entity_name,
            file_name=file_name,
        )

    def _split_front_matter(self, content: str) -> Tuple[Dict[str, Any], bool, str]:
        if not content.startswith(_FENCE):
            return {}, False, content

        closing = _CLOSING_FENCE.search(content, len(_FENCE))
        if closing is None:
            return {}, True, content

        block = content[len(_FENCE):closing.start()].strip()
        body = content[closing.end():]
        try:
            parsed = yaml.safe_load(block) or {}
        except yaml.YAMLError as exc:
            logger.debug("Malformed front-matter: %s", exc)
            return {}, True, body

        return (parsed if isinstance(parsed, dict) else {}), False, body

    @staticmethod
    def _string_field(front_matter: Dict[str, Any], key: str) -> str:
        value = front_matter.get(key)
        return value if isinstance(value, str) else MISSING_PLACEHOLDER

    @staticmethod
    def _entity_heading(body: str, kind: DocKind) -> Tuple[str, str]:
        pattern = re.compile(rf"^#[ \t]+{re.escape(kind.heading_prefix)}[ \t]*(.+?)[ \t]*$", re.MULTILINE)
        match = pattern.search(body)
        if not match:
            return MISSING_PLACEHOLDER, MISSING_PLACEHOLDER

        paragraph: List[str] = []
        for line in body[match.end():].splitlines():
            if line.strip():
                paragraph.append(line.strip())
            elif paragraph:
                break

        description = " ".join(paragraph) if paragraph else MISSING_PLACEHOLDER
        return match.group(1), description

    @staticmethod
    def _argument_names(prose: str) -> List[str]:
        section = _ARGUMENT_SECTION.search(prose)
        if not section:
            return []

        rest = prose[section.end():]
        following = _NEXT_LEVEL_TWO.search(rest)
        if following:
            rest = rest[:following.start()]

        names: List[str] = []
        for name in _ARGUMENT_BULLET.findall(rest):
            if name not in names:
                names.append(name)
        return names


def _strip_extension(file_name: str) -> str:
    if file_name.endswith(DOC_FILE_EXTENSION):
        return file_name[: -len(DOC_FILE_EXTENSION)]
    return file_name


def to_doc_file_name(file_name: str) -> str:
    """Append the documentation extension when a caller left it off."""
    if file_name.endswith(DOC_FILE_EXTENSION):
        return file_name
    return f"{file_name}{DOC_FILE_EXTENSION}"


class LocalDocsLoader:
    """
    Loads documentation pages of one kind from a local directory.

    The corpus is re-read on every call; files are listed in sorted
    file-name order so resolution ties are deterministic.
    """

    def __init__(self, docs_dir: str, kind: DocKind, parser: Optional[DocumentParser] = None):
        self.docs_dir = Path(docs_dir)
        self.kind = kind
        self._parser = parser or DocumentParser()

    def list_documents(self) -> List[Document]:
        if not self.docs_dir.is_dir():
            logger.warning("Documentation directory not found: %s", self.docs_dir)
            return []

        documents: List[Document] = []
        for path in sorted(self.docs_dir.iterdir(), key=lambda p: p.name):
            if not path.is_file() or not path.name.endswith(DOC_FILE_EXTENSION):
                continue
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping unreadable documentation file %s: %s", path, exc)
                continue
            documents.append(self._parser.parse(content, str(path), self.kind))

        logger.debug("Loaded %d %s documents from %s", len(documents), self.kind.value, self.docs_dir)
        return documents

    def locate(self, file_name: str) -> str:
        return str(self.docs_dir / file_name)

    async def fetch(self, file_name: str) -> str:
        """
        Read a page by file name.

        :raises DocumentNotFoundError: If the file cannot be read
        """
        path = self.docs_dir / file_name
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentNotFoundError(f"Could not fetch file '{path}': {exc}") from exc


class GitHubDocsFetcher:
    """
    Reads documentation pages from the provider repository.
    """

    def __init__(
        self,
        client_factory: Callable[[], GitHubClient],
        kind: DocKind,
        repository: str = TERRAFORM_AWS_PROVIDER_REPOSITORY_URI,
    ):
        self._client_factory = client_factory
        self.kind = kind
        self.repository = repository

    def locate(self, file_name: str) -> str:
        return f"{self.kind.remote_path}{file_name}"

    async def fetch(self, file_name: str) -> str:
        """
        :raises DocumentNotFoundError: If GitHub cannot return the file
        """
        path = self.locate(file_name)
        try:
            async with self._client_factory() as client:
                return await client.get_file_content(self.repository, path)
        except GitHubAPIError as exc:
            raise DocumentNotFoundError(
                f"Could not fetch file '{path}' from GitHub: {exc}"
            ) from exc
