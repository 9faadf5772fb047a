"""
Edit-distance scorers.

Both scorers compute classic Levenshtein distance (unit cost insert,
delete and substitute, no transpositions).
"""
from typing import Callable, Dict, List

from rapidfuzz.distance import Levenshtein

Scorer = Callable[[str, str], int]


def levenshtein(a: str, b: str) -> int:
    """
    Levenshtein distance using a full (len(a)+1) x (len(b)+1) matrix.

    :param a: Source string
    :param b: Target string
    :return: Minimum number of single-character edits turning a into b
    """
    rows = len(a) + 1
    cols = len(b) + 1
    matrix: List[List[int]] = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,  # deletion
                matrix[i][j - 1] + 1,  # insertion
                matrix[i - 1][j - 1] + cost,  # substitution or match
            )

    return matrix[rows - 1][cols - 1]


def rapidfuzz_levenshtein(a: str, b: str) -> int:
    return Levenshtein.distance(a, b)


SCORERS: Dict[str, Scorer] = {
    "levenshtein": levenshtein,
    "rapidfuzz": rapidfuzz_levenshtein,
}


def get_scorer(name: str) -> Scorer:
    """Look up a scorer by configuration name."""
    if name not in SCORERS:
        raise ValueError(
            f"Unknown scorer '{name}'. "
            f"Must be one of: {list(SCORERS.keys())}"
        )
    return SCORERS[name]
