"""
Best-Match Search Module
Find the corpus sequence that best matches a query
"""

from .best_match import (
    ENGINES,
    BestMatch,
    score_corpus,
    best_match,
    best_match_async,
    dynamicprogramming_best_match,
    exhaustive_best_match,
    local_alignment_best_match,
)

__all__ = [
    "ENGINES",
    "BestMatch",
    "score_corpus",
    "best_match",
    "best_match_async",
    "dynamicprogramming_best_match",
    "exhaustive_best_match",
    "local_alignment_best_match",
]
