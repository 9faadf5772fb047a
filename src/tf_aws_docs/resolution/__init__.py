"""
Fuzzy resolution of free-text names to documentation pages.

Key components:
- normalize: canonical comparable token for any label
- levenshtein / get_scorer: edit-distance scorers
- find_best_match: nearest candidate in a flat list, first wins on ties
- CandidateBuilder: per-document field candidates in a fixed order
- DocumentResolver: global best match across a whole corpus
"""
from .normalizer import normalize, strip_vendor_file_prefix
from .edit_distance import SCORERS, Scorer, get_scorer, levenshtein
from .fuzzy_matcher import FuzzyMatch, find_best_match
from .candidate_builder import (
    DEFAULT_FIELD_ORDER,
    Candidate,
    CandidateBuilder,
    CandidateField,
)
from .resolution_result import ResolutionResult
from .document_resolver import DocumentResolver
from .resolver_factory import create_document_resolver

__all__ = [
    "normalize",
    "strip_vendor_file_prefix",
    "SCORERS",
    "Scorer",
    "get_scorer",
    "levenshtein",
    "FuzzyMatch",
    "find_best_match",
    "DEFAULT_FIELD_ORDER",
    "Candidate",
    "CandidateBuilder",
    "CandidateField",
    "ResolutionResult",
    "DocumentResolver",
    "create_document_resolver",
]
