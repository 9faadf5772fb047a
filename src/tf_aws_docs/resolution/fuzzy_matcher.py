"""
Best-match selection over a flat list of candidate strings.

The target is expected to be normalized already; no normalization happens
here so the selector composes with any scorer.
"""
from dataclasses import dataclass
from typing import Optional, Sequence

from ..constants import DEFAULT_FUZZY_THRESHOLD
from .edit_distance import Scorer, levenshtein


@dataclass(frozen=True)
class FuzzyMatch:
    """
    Nearest candidate found by ``find_best_match``.

    Attributes:
        matched_value: The candidate string that won
        index: Position of the winner in the candidate sequence
        distance: Edit distance between target and winner
    """
    matched_value: str
    index: int
    distance: int


def find_best_match(
    target: str,
    candidates: Sequence[str],
    threshold: int = DEFAULT_FUZZY_THRESHOLD,
    scorer: Scorer = levenshtein,
) -> Optional[FuzzyMatch]:
    """
    Find the candidate nearest to ``target``.

    Ties go to the lowest index. Returns None when there are no candidates
    or when even the nearest one is farther than ``threshold``.

    :param target: Normalized query
    :param candidates: Normalized candidate strings, in priority order
    :param threshold: Maximum accepted distance
    :param scorer: Distance function
    :return: FuzzyMatch or None
    """
    if threshold < 0:
        raise ValueError(f"Threshold must be non-negative, got {threshold}")

    best: Optional[FuzzyMatch] = None

    for index, candidate in enumerate(candidates):
        distance = scorer(target, candidate)
        if best is None or distance < best.distance:
            best = FuzzyMatch(matched_value=candidate, index=index, distance=distance)
            if distance == 0:
                break

    if best is None or best.distance > threshold:
        return None

    return best
