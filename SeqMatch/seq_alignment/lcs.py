"""
Longest Common Subsequence (LCS) scoring
- Dynamic programming table (exact, O(n*m))
- Exhaustive subsequence enumeration (exponential, cross-check only)
"""

import warnings
from typing import List

import numpy as np

# Above this many residues the exhaustive engine needs 2**n subsequences
# per input, which stops being practical.
MAX_EXHAUSTIVE_LENGTH = 20


# =========================
# Dynamic programming
# =========================
def lcs_table(seq1: str, seq2: str) -> np.ndarray:
    """
    Fill the (n+1) x (m+1) LCS table.

    Row and column 0 are the empty-prefix base case (all zeros);
    D[i, j] is the LCS length of seq1[:i] and seq2[:j].
    """
    n, m = len(seq1), len(seq2)
    D = np.zeros((n + 1, m + 1), dtype=np.int64)

    for i in range(1, n + 1):
        a = seq1[i - 1]
        for j in range(1, m + 1):
            diag = D[i - 1, j - 1]
            if a == seq2[j - 1]:
                diag += 1
            D[i, j] = max(D[i - 1, j], D[i, j - 1], diag)

    return D


def lcs_length(seq1: str, seq2: str) -> int:
    """
    Length of the longest common subsequence of two sequences

    Example:
        >>> lcs_length("AGCAT", "GAC")
        2
    """
    if not seq1 or not seq2:
        return 0
    return int(lcs_table(seq1, seq2)[len(seq1), len(seq2)])


def lcs_string(seq1: str, seq2: str) -> str:
    """One longest common subsequence, recovered by walking the table back"""
    D = lcs_table(seq1, seq2)
    i, j = len(seq1), len(seq2)
    out: List[str] = []

    while i > 0 and j > 0:
        if seq1[i - 1] == seq2[j - 1] and D[i, j] == D[i - 1, j - 1] + 1:
            out.append(seq1[i - 1])
            i -= 1
            j -= 1
        elif D[i - 1, j] >= D[i, j - 1]:
            i -= 1
        else:
            j -= 1

    return ''.join(reversed(out))


# =========================
# Exhaustive enumeration
# =========================
def all_subsequences(seq: str) -> List[str]:
    """
    Every subsequence of `seq` (2**len(seq) of them, duplicates kept).

    Bit j of the enumeration mask selects residue j, so mask 0 is the
    empty subsequence and mask 2**n - 1 is `seq` itself.
    """
    n = len(seq)
    subsequences = []
    for bits in range(1 << n):
        subsequences.append(''.join(seq[j] for j in range(n) if (bits >> j) & 1))
    return subsequences


def check_exhaustive_length(*seqs: str, limit: int = MAX_EXHAUSTIVE_LENGTH) -> None:
    """Raise ValueError if any sequence is too long for exhaustive scoring"""
    for seq in seqs:
        if len(seq) > limit:
            raise ValueError(
                f"Sequence of length {len(seq)} exceeds the exhaustive LCS "
                f"limit of {limit} residues"
            )


def lcs_length_exhaustive(seq1: str, seq2: str) -> int:
    """
    LCS length by brute force: generate all subsequences of both inputs
    and keep the longest one they share.

    Always agrees with `lcs_length`. Cost grows as 2**(n+m), so inputs
    longer than MAX_EXHAUSTIVE_LENGTH trigger a warning (the computation
    still runs).
    """
    if len(seq1) > MAX_EXHAUSTIVE_LENGTH or len(seq2) > MAX_EXHAUSTIVE_LENGTH:
        warnings.warn(
            f"Exhaustive LCS on sequences of length {len(seq1)} and {len(seq2)} "
            f"(limit {MAX_EXHAUSTIVE_LENGTH}); this may take very long",
            stacklevel=2,
        )

    subseqs1 = set(all_subsequences(seq1))
    best_score = 0
    for s2 in all_subsequences(seq2):
        if len(s2) > best_score and s2 in subseqs1:
            best_score = len(s2)

    return best_score
