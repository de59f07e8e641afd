"""
SeqMatch
Best-match search of biological sequences by LCS and local alignment
"""

from .sequences import Sequence, Corpus, read_fasta, write_fasta
from .seq_alignment import (
    GAP_SYMBOL,
    PenaltyMatrix,
    read_penalty_matrix,
    lcs_length,
    lcs_length_exhaustive,
    local_alignment,
    LocalAligner,
    AlignmentResult,
)
from .search import BestMatch, best_match, best_match_async, score_corpus

__version__ = "0.1.0"

__all__ = [
    "Sequence",
    "Corpus",
    "read_fasta",
    "write_fasta",
    "GAP_SYMBOL",
    "PenaltyMatrix",
    "read_penalty_matrix",
    "lcs_length",
    "lcs_length_exhaustive",
    "local_alignment",
    "LocalAligner",
    "AlignmentResult",
    "BestMatch",
    "best_match",
    "best_match_async",
    "score_corpus",
]
