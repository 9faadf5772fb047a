"""
Result type for document resolution.

Used to expose which field matched in responses for explainability.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .candidate_builder import CandidateField


@dataclass(frozen=True)
class ResolutionResult:
    """
    Immutable outcome of resolving a free-text query against a corpus.

    A result with ``identifier`` set to None is the "not found" outcome;
    it is an ordinary value, not an error.

    Attributes:
        original_query: Query as supplied by the caller
        identifier: Canonical identifier of the winning document
        locator: Locator of the winning document
        distance: Edit distance of the winning candidate
        matched_field: Field the winning candidate came from
        matched_value: Normalized value of the winning candidate
        document_index: Position of the winning document in the corpus
    """
    original_query: str
    identifier: Optional[str] = None
    locator: Optional[str] = None
    distance: Optional[int] = None
    matched_field: Optional[CandidateField] = None
    matched_value: Optional[str] = None
    document_index: Optional[int] = None

    @classmethod
    def not_found(cls, query: str) -> "ResolutionResult":
        return cls(original_query=query)

    @property
    def is_match(self) -> bool:
        return self.identifier is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: Dict[str, Any] = {
            "original_query": self.original_query,
            "found": self.is_match,
        }

        if self.is_match:
            result["identifier"] = self.identifier
            result["locator"] = self.locator
            result["distance"] = self.distance
            result["matched_field"] = self.matched_field.value if self.matched_field else None
            result["matched_value"] = self.matched_value

        return result
