"""
Sequence Alignment Module
Penalty matrices, LCS scoring and local alignment
"""

from .penalty import (
    GAP_SYMBOL,
    PenaltyMatrix,
    available_matrices,
    parse_penalty_matrix,
    read_penalty_matrix,
    write_penalty_matrix,
)
from .lcs import (
    MAX_EXHAUSTIVE_LENGTH,
    all_subsequences,
    check_exhaustive_length,
    lcs_length,
    lcs_length_exhaustive,
    lcs_string,
    lcs_table,
)
from .local import (
    AlignmentResult,
    LocalAligner,
    local_alignment,
    traceback,
)

__all__ = [
    "GAP_SYMBOL",
    "PenaltyMatrix",
    "available_matrices",
    "parse_penalty_matrix",
    "read_penalty_matrix",
    "write_penalty_matrix",
    "MAX_EXHAUSTIVE_LENGTH",
    "all_subsequences",
    "check_exhaustive_length",
    "lcs_length",
    "lcs_length_exhaustive",
    "lcs_string",
    "lcs_table",
    "AlignmentResult",
    "LocalAligner",
    "local_alignment",
    "traceback",
]
