"""
Documentation tools: list pages and fetch one page by file name or by
fuzzy-resolved name. Resources and datasources share this implementation.
"""
import logging
from typing import List, Optional, Protocol

from ..data_loader import DocumentParser, LocalDocsLoader, to_doc_file_name
from ..exceptions import DocumentNotFoundError
from ..formatter import format_document, format_document_summary, format_not_found
from ..models import DocKind
from ..resolution import DocumentResolver, ResolutionResult, normalize, strip_vendor_file_prefix
from ..security import InputValidator, ValidationError

logger = logging.getLogger(__name__)


class ContentFetcher(Protocol):
    def locate(self, file_name: str) -> str: ...

    async def fetch(self, file_name: str) -> str: ...


class DocumentTools:
    """
    Tool handlers for one documentation kind.

    The exact file name path never touches the resolver; a free-text name
    is resolved against the freshly loaded corpus first.
    """

    def __init__(
        self,
        kind: DocKind,
        loader: LocalDocsLoader,
        resolver: DocumentResolver,
        fetcher: Optional[ContentFetcher] = None,
        parser: Optional[DocumentParser] = None,
    ):
        """
        :param kind: Resource or datasource
        :param loader: Corpus provider (and default content fetcher)
        :param resolver: Fuzzy resolver shared by all kinds
        :param fetcher: Content fetcher; defaults to ``loader``
        :param parser: Parser for fetched content
        """
        self.kind = kind
        self._loader = loader
        self._resolver = resolver
        self._fetcher = fetcher or loader
        self._parser = parser or DocumentParser()

    def list_documents(self) -> List[str]:
        documents = self._loader.list_documents()
        if not documents:
            return [f"No AWS {self.kind.value} documentation found."]
        return [format_document_summary(document) for document in documents]

    def resolve(self, name: str) -> ResolutionResult:
        """
        Resolve a free-text name against the current corpus.

        :raises ValidationError: If the name is empty or only a vendor word such as "aws"
        """
        field_name = f"aws_{self.kind.value}"
        query = InputValidator.validate_query(name, field_name=field_name)
        if not normalize(query):
            raise ValidationError(f"{field_name} must be a non-empty string")
        return self._resolver.resolve(query, self._loader.list_documents())

    async def get_document(self, name: Optional[str] = None, file_name: Optional[str] = None) -> List[str]:
        """
        Fetch one page.

        :param name: Free-text name, resolved fuzzily
        :param file_name: Exact file name, takes precedence over ``name``
        :return: Formatted page, or a single error text
        :raises ValidationError: If neither argument is usable
        """
        if file_name:
            validated = InputValidator.validate_file_name(file_name)
            return [await self._fetch_and_format(to_doc_file_name(strip_vendor_file_prefix(validated)))]

        if name is None:
            raise ValidationError(f"Either aws_{self.kind.value} or file_name must be provided.")

        result = self.resolve(name)
        if not result.is_match:
            return [format_not_found(self.kind, name)]

        logger.info(
            "Resolved %s '%s' to %s (%s, distance %s)",
            self.kind.value,
            name,
            result.identifier,
            result.matched_field.value if result.matched_field else "?",
            result.distance,
        )
        file_name = self._file_name_of(result)
        return [await self._fetch_and_format(file_name, result)]

    def _file_name_of(self, result: ResolutionResult) -> str:
        locator = result.locator or ""
        return locator.replace("\\", "/").rsplit("/", 1)[-1]

    async def _fetch_and_format(self, file_name: str, resolution: Optional[ResolutionResult] = None) -> str:
        try:
            content = await self._fetcher.fetch(file_name)
        except DocumentNotFoundError as exc:
            return f"Error: {exc}"

        document = self._parser.parse(content, self._fetcher.locate(file_name), self.kind)
        return format_document(document, content, resolution)
