"""
Cross-document resolver.

Finds the single document whose best field candidate is nearest to a
free-text query. One resolver serves every documentation kind; what
differs between kinds is only the candidate extractor.
"""
import logging
from typing import Callable, Optional, Sequence

from ..constants import DEFAULT_FUZZY_THRESHOLD
from ..models import Document
from .candidate_builder import Candidate, CandidateBuilder, CandidateExtractor
from .edit_distance import Scorer, levenshtein
from .fuzzy_matcher import FuzzyMatch, find_best_match
from .normalizer import normalize
from .resolution_result import ResolutionResult

logger = logging.getLogger(__name__)


class DocumentResolver:
    """
    Resolves a query to the best matching document of a corpus.

    Every candidate of every document is scored against the normalized
    query. The first candidate reaching the global minimum wins, scanning
    documents in corpus order and candidates in extractor order. If the
    minimum is above ``threshold`` the result is "not found".

    Usage:
        resolver = DocumentResolver(threshold=3)
        result = resolver.resolve("s3 buket", documents)
        if result.is_match:
            locator = result.locator
    """

    def __init__(
        self,
        extractor: Optional[CandidateExtractor] = None,
        threshold: int = DEFAULT_FUZZY_THRESHOLD,
        scorer: Scorer = levenshtein,
        normalizer: Callable[[str], str] = normalize,
    ):
        """
        :param extractor: Document -> [(field, normalized value)]; defaults to CandidateBuilder().build
        :param threshold: Maximum accepted edit distance
        :param scorer: Distance function
        :param normalizer: Applied once to the query
        """
        if threshold < 0:
            raise ValueError(f"Threshold must be non-negative, got {threshold}")

        self._extractor = extractor or CandidateBuilder().build
        self.threshold = threshold
        self._scorer = scorer
        self._normalizer = normalizer

    def resolve(self, query: str, corpus: Sequence[Document]) -> ResolutionResult:
        """
        Resolve ``query`` against ``corpus``.

        :param query: Free-text name or description
        :param corpus: Documents in a stable order
        :return: ResolutionResult, ``is_match`` False when nothing is close enough
        """
        normalized_query = self._normalizer(query)

        best_candidate: Optional[Candidate] = None
        best_match: Optional[FuzzyMatch] = None

        for index, document in enumerate(corpus):
            candidates = self._extractor(document)
            match = find_best_match(
                normalized_query,
                [value for _, value in candidates],
                self.threshold,
                self._scorer,
            )
            if match is None:
                continue

            # Strictly smaller only: an earlier document keeps a tie.
            if best_match is None or match.distance < best_match.distance:
                best_match = match
                best_candidate = Candidate(
                    document_index=index,
                    field=candidates[match.index][0],
                    value=match.matched_value,
                )
                if match.distance == 0:
                    break

        if best_match is None or best_candidate is None:
            logger.info(
                "No document within distance %d of '%s' (%d documents)",
                self.threshold,
                query,
                len(corpus),
            )
            return ResolutionResult.not_found(query)

        winner = corpus[best_candidate.document_index]
        logger.debug(
            "Resolved '%s' to '%s' via %s='%s' (distance %d)",
            query,
            winner.identifier,
            best_candidate.field.value,
            best_candidate.value,
            best_match.distance,
        )
        return ResolutionResult(
            original_query=query,
            identifier=winner.identifier,
            locator=winner.locator,
            distance=best_match.distance,
            matched_field=best_candidate.field,
            matched_value=best_candidate.value,
            document_index=best_candidate.document_index,
        )
