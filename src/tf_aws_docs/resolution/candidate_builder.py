"""
Candidate builder for document resolution.

Expands each document into the normalized field values the resolver
compares a query against.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..constants import DEFAULT_VENDOR_PREFIXES, DOC_FILE_EXTENSION, PLACEHOLDER_VALUES
from ..models import Document
from .normalizer import normalize


class CandidateField(str, Enum):
    """Document field a candidate value was taken from."""

    CATEGORY = "category"
    IDENTIFIER = "identifier"
    TITLE = "title"
    SHORT_DESCRIPTION = "shortDescription"
    LONG_DESCRIPTION = "longDescription"
    HEADING = "heading"
    ARGUMENT_NAME = "argumentName"


# Order of the single-valued fields. On equal distance the earlier field wins.
DEFAULT_FIELD_ORDER: Tuple[CandidateField, ...] = (
    CandidateField.CATEGORY,
    CandidateField.IDENTIFIER,
    CandidateField.TITLE,
    CandidateField.SHORT_DESCRIPTION,
    CandidateField.LONG_DESCRIPTION,
)

_MULTI_VALUED = (CandidateField.HEADING, CandidateField.ARGUMENT_NAME)


@dataclass(frozen=True)
class Candidate:
    """A normalized value taken from one field of one document."""
    document_index: int
    field: CandidateField
    value: str


class CandidateBuilder:
    """
    Builds the ordered candidate list for a document.

    Emits one value per scalar field in ``field_order``, then one per
    heading, then one per argument name. Empty values and placeholder
    values such as "(missing)" never become candidates.
    """

    def __init__(
        self,
        field_order: Sequence[CandidateField] = DEFAULT_FIELD_ORDER,
        file_extension: str = DOC_FILE_EXTENSION,
        placeholders: Iterable[str] = PLACEHOLDER_VALUES,
        vendor_prefixes: Iterable[str] = DEFAULT_VENDOR_PREFIXES,
    ):
        """
        :param field_order: Scalar fields in priority order
        :param file_extension: Suffix stripped from file names to get the identifier stem
        :param placeholders: Raw values that are skipped
        :param vendor_prefixes: Passed through to ``normalize``
        """
        invalid = [f for f in field_order if f in _MULTI_VALUED]
        if invalid:
            raise ValueError(f"Multi-valued fields cannot be ordered as scalars: {invalid}")

        self.field_order = tuple(field_order)
        self.file_extension = file_extension
        self.placeholders = frozenset(placeholders)
        self.vendor_prefixes = tuple(vendor_prefixes)

    def build(self, document: Document) -> List[Tuple[CandidateField, str]]:
        """
        Build ``(field, normalized value)`` pairs for one document.

        :param document: Parsed document
        :return: Candidates in builder order
        """
        candidates: List[Tuple[CandidateField, str]] = []

        for candidate_field in self.field_order:
            self._append(candidates, candidate_field, self._scalar_value(document, candidate_field))

        for heading in document.headings:
            self._append(candidates, CandidateField.HEADING, heading)

        for argument_name in document.argument_names:
            self._append(candidates, CandidateField.ARGUMENT_NAME, argument_name)

        return candidates

    def identifier_stem(self, document: Document) -> str:
        file_name = document.resolved_file_name or document.identifier
        if self.file_extension and file_name.endswith(self.file_extension):
            return file_name[: -len(self.file_extension)]
        return file_name

    def _scalar_value(self, document: Document, candidate_field: CandidateField) -> Optional[str]:
        if candidate_field is CandidateField.CATEGORY:
            return document.category
        if candidate_field is CandidateField.IDENTIFIER:
            return self.identifier_stem(document)
        if candidate_field is CandidateField.TITLE:
            return document.title
        if candidate_field is CandidateField.SHORT_DESCRIPTION:
            return document.short_description
        if candidate_field is CandidateField.LONG_DESCRIPTION:
            return document.long_description
        return None

    def _append(
        self,
        candidates: List[Tuple[CandidateField, str]],
        candidate_field: CandidateField,
        raw_value: Optional[str],
    ) -> None:
        if not raw_value or raw_value.strip() in self.placeholders:
            return
        value = normalize(raw_value, self.vendor_prefixes)
        if value:
            candidates.append((candidate_field, value))


CandidateExtractor = Callable[[Document], List[Tuple[CandidateField, str]]]
