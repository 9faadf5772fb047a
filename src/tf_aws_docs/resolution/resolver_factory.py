"""
Factory for creating document resolvers from configuration.
"""
from typing import Optional

from ..config import DocsServerConfig
from .candidate_builder import CandidateBuilder
from .document_resolver import DocumentResolver
from .edit_distance import get_scorer
from .normalizer import normalize


def create_document_resolver(
    config: Optional[DocsServerConfig] = None,
    candidate_builder: Optional[CandidateBuilder] = None,
) -> DocumentResolver:
    """
    Create a DocumentResolver with configured threshold and scorer.

    :param config: DocsServerConfig instance; defaults apply when None
    :param candidate_builder: Optional pre-built CandidateBuilder
    :return: DocumentResolver
    """
    config = config or DocsServerConfig()
    builder = candidate_builder or CandidateBuilder()

    return DocumentResolver(
        extractor=builder.build,
        threshold=config.fuzzy_threshold,
        scorer=get_scorer(config.fuzzy_scorer),
        normalizer=lambda value: normalize(value, builder.vendor_prefixes),
    )
